"""Capa de acceso a datos de pacientes.

Convierte operaciones de dominio (listar, obtener, crear, actualizar, eliminar,
activar, desactivar) en peticiones HTTP y los fallos en mensajes para el usuario.
"""

from pacientes_client.adapters.http_client import ApiClient, build_api_client
from pacientes_client.core.errors import ErrorNormalizer, FailureKind, NormalizedFailure, classify_failure
from pacientes_client.core.services.paciente_service import PacienteService

__all__ = [
    "ApiClient",
    "ErrorNormalizer",
    "FailureKind",
    "NormalizedFailure",
    "PacienteService",
    "build_api_client",
    "classify_failure",
]

__version__ = "1.0.0"
