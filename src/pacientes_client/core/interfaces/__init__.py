"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from pacientes_client.core.interfaces.notifier import UserNotifier
from pacientes_client.core.interfaces.transport import ApiTransport, ResponseInterceptor

__all__ = [
    "ApiTransport",
    "ResponseInterceptor",
    "UserNotifier",
]
