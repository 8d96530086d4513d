"""Contrato del cliente HTTP que consumen los servicios.

Por qué Protocol:
- `PacienteService` depende de esta abstracción, no de `httpx`.
- Permite inyectar un cliente por entorno/test sin singletons de módulo.
"""

from __future__ import annotations

from typing import Any, NoReturn, Protocol, runtime_checkable

from pacientes_client.core.domain.models import ApiResponse


@runtime_checkable
class ApiTransport(Protocol):
    """Emisor de peticiones JSON ligado a una ruta base fija."""

    async def get(self, path: str) -> ApiResponse:
        ...

    async def post(self, path: str, json: Any = None) -> ApiResponse:
        ...

    async def put(self, path: str, json: Any = None) -> ApiResponse:
        ...

    async def delete(self, path: str) -> ApiResponse:
        ...


@runtime_checkable
class ResponseInterceptor(Protocol):
    """Hook que ve el resultado de cada llamada del transporte.

    Reglas de diseño:
    - `on_response` recibe el éxito y devuelve la respuesta (igual o transformada).
    - `on_error` recibe el fallo original y SIEMPRE termina lanzando una excepción.
    """

    def on_response(self, response: ApiResponse) -> ApiResponse:
        ...

    def on_error(self, error: Exception) -> NoReturn:
        ...
