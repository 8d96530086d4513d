"""Fachada de operaciones sobre pacientes.

Cada método es un ciclo petición/respuesta único contra el backend:
- Llama al transporte exactamente una vez y devuelve el cuerpo decodificado.
- Ante un fallo registra una línea de diagnóstico con el nombre de la operación
  y relanza el error intacto. La notificación al usuario ya la hizo el
  normalizador del transporte; aquí no se notifica de nuevo.

No hay estado: el servicio solo guarda la referencia al cliente inyectado.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pacientes_client.core.domain.models import Cedula, Paciente
from pacientes_client.core.errors import InvalidCedulaError
from pacientes_client.core.interfaces.transport import ApiTransport
from pacientes_client.core.logging import get_logger

logger = get_logger("pacientes_client.pacientes")

RESOURCE = "/pacientes"


def paciente_path(cedula: Cedula, suffix: str = "") -> str:
    """Ruta de un recurso individual; rechaza cédulas vacías."""

    value = str(cedula).strip() if cedula is not None else ""
    if not value:
        raise InvalidCedulaError("La cédula no puede estar vacía.")
    return f"{RESOURCE}/{quote(value, safe='')}{suffix}"


class PacienteService:
    """Operaciones de dominio: listar, obtener, crear, actualizar, eliminar, activar, desactivar."""

    def __init__(self, client: ApiTransport) -> None:
        self._client = client

    async def get_all(self) -> list[Paciente]:
        """Lista todos los pacientes."""

        try:
            response = await self._client.get(RESOURCE)
        except Exception as exc:
            logger.error("paciente.get_all_failed", operation="get_all", error=str(exc))
            raise
        return response.data

    async def get_by_cedula(self, cedula: Cedula) -> Paciente:
        """Obtiene un paciente por su cédula."""

        path = paciente_path(cedula)
        try:
            response = await self._client.get(path)
        except Exception as exc:
            logger.error("paciente.get_by_cedula_failed", operation="get_by_cedula", cedula=str(cedula), error=str(exc))
            raise
        return response.data

    async def create(self, paciente: Paciente) -> Paciente:
        """Crea un paciente. La unicidad de la cédula la valida el backend (409)."""

        try:
            response = await self._client.post(RESOURCE, json=paciente)
        except Exception as exc:
            logger.error("paciente.create_failed", operation="create", error=str(exc))
            raise
        return response.data

    async def update(self, cedula: Cedula, paciente: Paciente) -> Paciente:
        """Actualiza los datos de un paciente existente."""

        path = paciente_path(cedula)
        try:
            response = await self._client.put(path, json=paciente)
        except Exception as exc:
            logger.error("paciente.update_failed", operation="update", cedula=str(cedula), error=str(exc))
            raise
        return response.data

    async def delete(self, cedula: Cedula) -> Any:
        """Eliminación lógica: el backend cambia el estado, no purga el registro."""

        path = paciente_path(cedula)
        try:
            response = await self._client.delete(path)
        except Exception as exc:
            logger.error("paciente.delete_failed", operation="delete", cedula=str(cedula), error=str(exc))
            raise
        return response.data

    async def activate(self, cedula: Cedula) -> Any:
        path = paciente_path(cedula, "/activar")
        try:
            response = await self._client.put(path)
        except Exception as exc:
            logger.error("paciente.activate_failed", operation="activate", cedula=str(cedula), error=str(exc))
            raise
        return response.data

    async def deactivate(self, cedula: Cedula) -> Any:
        path = paciente_path(cedula, "/desactivar")
        try:
            response = await self._client.put(path)
        except Exception as exc:
            logger.error("paciente.deactivate_failed", operation="deactivate", cedula=str(cedula), error=str(exc))
            raise
        return response.data
