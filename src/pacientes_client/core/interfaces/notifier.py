"""Puerto de notificación al usuario.

Por qué un puerto:
- El mensaje amigable de un fallo se muestra en un canal que decide el llamador
  (alerta bloqueante en consola, cola en memoria, toast de una UI).
- El Core queda testeable sin interfaz real.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class UserNotifier(Protocol):
    """Canal síncrono hacia el usuario final; una implementación puede bloquear."""

    def notify(self, message: str) -> None:
        """Muestra `message` al usuario."""

        ...
