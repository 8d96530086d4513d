"""Normalización de fallos HTTP/red en un modelo presentable al usuario.

Por qué aquí (Core):
- La tabla status -> mensaje es una regla de producto, no un detalle de `httpx`.
- `classify_failure` es una función pura: se puede invocar sobre cualquier
  excepción propagada para recuperar su clasificación sin efectos secundarios.

Política:
- `ErrorNormalizer` clasifica, registra y notifica una sola vez por fallo, y luego
  relanza la excepción ORIGINAL (misma referencia). La clasificación es un efecto
  lateral, no un reemplazo del error propagado.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

import httpx
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from pacientes_client.core.domain.models import ApiResponse
from pacientes_client.core.interfaces.notifier import UserNotifier
from pacientes_client.core.logging import get_logger

logger = get_logger("pacientes_client.api")

CONNECTIVITY_MESSAGE = (
    "No se pudo conectar con el servidor. "
    "Verifica tu conexión o que el backend esté ejecutándose."
)
UNKNOWN_MESSAGE_PREFIX = "Error desconocido: "


class InvalidCedulaError(ValueError):
    """Cédula vacía: se rechaza antes de enviar ninguna petición."""


class FailureKind(str, Enum):
    """Clasificación cerrada de fallos."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNCLASSIFIED_HTTP = "unclassified_http"
    CONNECTIVITY = "connectivity"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StatusRule:
    """Cómo se traduce un status HTTP a mensaje de usuario."""

    kind: FailureKind
    fallback: str
    # False: el mensaje fijo gana aunque el backend haya enviado uno propio.
    prefer_backend: bool = True


STATUS_RULES: dict[int, StatusRule] = {
    400: StatusRule(FailureKind.INVALID_INPUT, "Datos inválidos. Por favor verifica la información."),
    404: StatusRule(FailureKind.NOT_FOUND, "Recurso no encontrado."),
    409: StatusRule(FailureKind.CONFLICT, "La cédula ya está registrada."),
    500: StatusRule(
        FailureKind.SERVER_ERROR,
        "Error del servidor. Por favor intenta más tarde.",
        prefer_backend=False,
    ),
}


def rule_for_status(status_code: int) -> StatusRule:
    """Regla para `status_code`; cualquier código fuera de la tabla es no clasificado."""

    rule = STATUS_RULES.get(status_code)
    if rule is not None:
        return rule
    return StatusRule(FailureKind.UNCLASSIFIED_HTTP, f"Error inesperado ({status_code})")


class NormalizedFailure(BaseModel):
    """Clasificación + mensaje calculados para un fallo. No se persiste."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: FailureKind = Field(..., description="Clasificación del fallo.")
    message: str = Field(..., description="Mensaje legible para el usuario final.")
    status_code: int | None = Field(
        default=None,
        description="Status HTTP si el servidor llegó a responder.",
    )
    cause: BaseException = Field(
        ...,
        description="Excepción original, para inspección programática.",
    )


def extract_backend_message(response: httpx.Response) -> str | None:
    """Mensaje que envía el backend en el cuerpo de error.

    Orden: campo `error`, luego `message`, luego el cuerpo crudo. Un objeto JSON
    sin ninguno de los dos campos no aporta mensaje (no se muestra JSON al usuario).
    """

    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None

    if isinstance(data, dict):
        for key in ("error", "message"):
            value = data.get(key)
            if value:
                return str(value)
        return None
    if isinstance(data, str):
        return data.strip() or None
    # null, false, 0 y listas no aportan mensaje.
    if not data or isinstance(data, list):
        return None
    return str(data)


def _response_of(error: BaseException) -> httpx.Response | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response
    return None


def _request_was_sent(error: BaseException) -> bool:
    if not isinstance(error, httpx.RequestError):
        return False
    try:
        error.request
    except RuntimeError:
        # httpx levanta RuntimeError si la excepción nunca se asoció a un request.
        return False
    return True


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


def classify_failure(error: BaseException) -> NormalizedFailure:
    """Clasifica `error` con precedencia: respuesta HTTP > sin respuesta > desconocido."""

    response = _response_of(error)
    if response is not None:
        status_code = response.status_code
        rule = rule_for_status(status_code)
        backend_message = extract_backend_message(response) if rule.prefer_backend else None
        return NormalizedFailure(
            kind=rule.kind,
            message=backend_message or rule.fallback,
            status_code=status_code,
            cause=error,
        )

    if _request_was_sent(error):
        return NormalizedFailure(
            kind=FailureKind.CONNECTIVITY,
            message=CONNECTIVITY_MESSAGE,
            cause=error,
        )

    return NormalizedFailure(
        kind=FailureKind.UNKNOWN,
        message=UNKNOWN_MESSAGE_PREFIX + _describe(error),
        cause=error,
    )


def _log_raw_failure(error: BaseException, failure: NormalizedFailure) -> None:
    response = _response_of(error)
    if response is not None:
        logger.error(
            "api.error",
            kind=failure.kind.value,
            status_code=response.status_code,
            method=response.request.method,
            url=str(response.request.url),
            body=response.text,
        )
        return
    logger.error(
        "api.error",
        kind=failure.kind.value,
        error=_describe(error),
        error_type=type(error).__name__,
    )


class ErrorNormalizer:
    """Interceptor de respuestas instalado en `ApiClient`.

    - Éxito: devuelve la respuesta intacta, sin efectos.
    - Fallo: registra el fallo crudo, notifica el mensaje al usuario (si no está
      vacío) y relanza la excepción original.
    """

    def __init__(self, notifier: UserNotifier) -> None:
        self._notifier = notifier

    def on_response(self, response: ApiResponse) -> ApiResponse:
        return response

    def on_error(self, error: Exception) -> NoReturn:
        failure = classify_failure(error)
        _log_raw_failure(error, failure)
        if failure.message:
            try:
                self._notifier.notify(failure.message)
            except Exception as notify_error:
                # El fallo propagado sigue siendo el original aunque el canal falle.
                logger.error(
                    "notifier.failed",
                    kind=failure.kind.value,
                    error=_describe(notify_error),
                    error_type=type(notify_error).__name__,
                )
        raise error
