"""CLI de pacientes (Typer).

Por qué una CLI:
- Es el llamador de referencia de la fachada: compone config, logging,
  notificador y cliente HTTP, y muestra lo que la capa de datos devuelve.
- Ante un fallo sale con código 1 sin repetir el mensaje: el normalizador ya
  lo mostró por el canal de notificación.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import typer
from rich.console import Console

from pacientes_client.adapters.http_client import build_api_client
from pacientes_client.adapters.notifiers import ConsoleAlertNotifier
from pacientes_client.cli import doctor
from pacientes_client.cli.ui_components import build_pacientes_table
from pacientes_client.core.config import AppSettings
from pacientes_client.core.domain.models import Paciente
from pacientes_client.core.errors import InvalidCedulaError
from pacientes_client.core.logging import configure_logging
from pacientes_client.core.services.paciente_service import PacienteService

app = typer.Typer(no_args_is_help=True, help="Gestión de pacientes contra el backend REST.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

Operation = Callable[[PacienteService], Awaitable[Any]]


def build_service(settings: AppSettings) -> PacienteService:
    """Compone la fachada con un cliente nuevo; no hay instancias globales."""

    notifier = ConsoleAlertNotifier(blocking=settings.blocking_alerts)
    return PacienteService(build_api_client(settings, notifier=notifier))


def _execute(ctx: typer.Context, operation: Operation) -> Any:
    settings: AppSettings = ctx.obj
    service = build_service(settings)
    try:
        return asyncio.run(operation(service))
    except InvalidCedulaError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except Exception as exc:
        raise typer.Exit(code=1) from exc


def _load_payload(datos: Optional[str], archivo: Optional[Path]) -> Paciente:
    if (datos is None) == (archivo is None):
        raise typer.BadParameter("Indica exactamente uno de --datos o --archivo.")
    raw = datos if datos is not None else archivo.read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"JSON inválido: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter("El paciente debe ser un objeto JSON.")
    return payload


def _print_result(data: Any, *, as_json: bool = False) -> None:
    if data is None:
        _console.print("[green]OK[/green]")
        return
    if isinstance(data, list) and not as_json:
        _console.print(build_pacientes_table(data))
        return
    if isinstance(data, (dict, list)):
        _console.print_json(data=data)
        return
    _console.print(str(data))


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Ruta base del backend (por defecto PACIENTES_API_BASE_URL).",
    ),
) -> None:
    """Carga configuración y logging una sola vez por invocación."""

    settings = AppSettings(api_base_url=base_url) if base_url else AppSettings()
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@app.command()
def listar(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Salida JSON cruda en lugar de tabla."),
) -> None:
    """Lista todos los pacientes."""

    data = _execute(ctx, lambda service: service.get_all())
    _print_result(data, as_json=as_json)


@app.command()
def obtener(ctx: typer.Context, cedula: str = typer.Argument(..., help="Cédula del paciente.")) -> None:
    """Muestra un paciente por su cédula."""

    _print_result(_execute(ctx, lambda service: service.get_by_cedula(cedula)))


@app.command()
def crear(
    ctx: typer.Context,
    datos: Optional[str] = typer.Option(None, "--datos", help="Paciente como JSON."),
    archivo: Optional[Path] = typer.Option(None, "--archivo", exists=True, dir_okay=False, help="Archivo JSON."),
) -> None:
    """Registra un paciente nuevo."""

    paciente = _load_payload(datos, archivo)
    _print_result(_execute(ctx, lambda service: service.create(paciente)))


@app.command()
def actualizar(
    ctx: typer.Context,
    cedula: str = typer.Argument(..., help="Cédula del paciente."),
    datos: Optional[str] = typer.Option(None, "--datos", help="Paciente como JSON."),
    archivo: Optional[Path] = typer.Option(None, "--archivo", exists=True, dir_okay=False, help="Archivo JSON."),
) -> None:
    """Actualiza los datos de un paciente (el estado se cambia con activar/desactivar)."""

    paciente = _load_payload(datos, archivo)
    _print_result(_execute(ctx, lambda service: service.update(cedula, paciente)))


@app.command()
def eliminar(
    ctx: typer.Context,
    cedula: str = typer.Argument(..., help="Cédula del paciente."),
    yes: bool = typer.Option(False, "--si", "-y", help="No pedir confirmación."),
) -> None:
    """Elimina (lógicamente) un paciente."""

    if not yes:
        typer.confirm(f"¿Eliminar al paciente {cedula}?", abort=True)
    _print_result(_execute(ctx, lambda service: service.delete(cedula)))


@app.command()
def activar(ctx: typer.Context, cedula: str = typer.Argument(..., help="Cédula del paciente.")) -> None:
    """Marca un paciente como activo."""

    _print_result(_execute(ctx, lambda service: service.activate(cedula)))


@app.command()
def desactivar(ctx: typer.Context, cedula: str = typer.Argument(..., help="Cédula del paciente.")) -> None:
    """Marca un paciente como inactivo."""

    _print_result(_execute(ctx, lambda service: service.deactivate(cedula)))


def run() -> None:
    app()
