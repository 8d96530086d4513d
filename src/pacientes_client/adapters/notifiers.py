"""Implementaciones del puerto `UserNotifier`.

- `ConsoleAlertNotifier`: alerta visible en terminal (Rich); opcionalmente
  bloqueante, como un diálogo modal que espera confirmación.
- `CollectingNotifier`: acumula mensajes en memoria; no bloquea nunca.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class ConsoleAlertNotifier:
    """Muestra cada mensaje como un panel de alerta en la consola."""

    def __init__(self, console: Console | None = None, *, blocking: bool = False) -> None:
        self._console = console or Console(stderr=True)
        self._blocking = blocking

    def notify(self, message: str) -> None:
        body = Text(message, style="bold")
        self._console.print(Panel(body, title="Aviso", border_style="red", padding=(1, 2)))
        if self._blocking:
            self._console.input("[dim]Presiona Enter para continuar...[/dim]")


class CollectingNotifier:
    """Guarda los mensajes para que el llamador decida cuándo mostrarlos."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> list[str]:
        """Devuelve los mensajes pendientes y vacía la cola."""

        pending, self.messages = self.messages, []
        return pending
