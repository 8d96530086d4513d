"""Cliente HTTP del backend de pacientes (wrapper de httpx).

Por qué un wrapper:
- Único punto de salida hacia el backend: ruta base y headers JSON fijos.
- Pipeline de interceptores de respuesta (éxito/fallo) al estilo de un hook
  global, pero instalado sobre una instancia construida e inyectable.
- Facilita testeo: se puede pasar un `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any, NoReturn

import httpx

from pacientes_client.core.config import AppSettings
from pacientes_client.core.domain.models import ApiResponse
from pacientes_client.core.errors import ErrorNormalizer
from pacientes_client.core.interfaces.notifier import UserNotifier
from pacientes_client.core.interfaces.transport import ResponseInterceptor

JSON_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def build_async_client(
    base_url: str,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` ligado a `base_url` con headers JSON.

    Por qué un builder:
    - Centraliza headers para que todas las operaciones se comporten igual.
    - No fija timeouts: aplican los defaults del transporte.
    """

    headers = dict(JSON_HEADERS)
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        transport=transport,
    )


def decode_body(response: httpx.Response) -> Any:
    """JSON decodificado; texto crudo si no es JSON; None si el cuerpo está vacío."""

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """Emisor de peticiones JSON contra `base_url`.

    Cada llamada abre su propio `httpx.AsyncClient`: no se comparte sesión ni
    cookies entre operaciones. La configuración es fija desde la construcción.
    """

    def __init__(self, base_url: str, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._interceptors: list[ResponseInterceptor] = []

    @property
    def base_url(self) -> str:
        return self._base_url

    def use_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        """Instala un interceptor; corren en orden de instalación."""

        self._interceptors.append(interceptor)

    async def request(self, method: str, path: str, *, json: Any = None) -> ApiResponse:
        try:
            response = await self._send(method, path, json=json)
        except Exception as exc:
            self._reject(exc)

        for interceptor in self._interceptors:
            response = interceptor.on_response(response)
        return response

    async def get(self, path: str) -> ApiResponse:
        return await self.request("GET", path)

    async def post(self, path: str, json: Any = None) -> ApiResponse:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> ApiResponse:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> ApiResponse:
        return await self.request("DELETE", path)

    async def _send(self, method: str, path: str, *, json: Any = None) -> ApiResponse:
        async with build_async_client(self._base_url, transport=self._transport) as client:
            resp = await client.request(method, path, json=json)
        resp.raise_for_status()
        return ApiResponse(status_code=resp.status_code, data=decode_body(resp))

    def _reject(self, error: Exception) -> NoReturn:
        # Cada interceptor termina relanzando; si ninguno está instalado, el fallo sube tal cual.
        for interceptor in self._interceptors:
            try:
                interceptor.on_error(error)
            except Exception as raised:
                error = raised
        raise error


def build_api_client(
    settings: AppSettings | None = None,
    *,
    notifier: UserNotifier,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Compone un `ApiClient` con el normalizador de errores ya instalado."""

    settings = settings or AppSettings()
    client = ApiClient(settings.api_base_url, transport=transport)
    client.use_response_interceptor(ErrorNormalizer(notifier))
    return client
