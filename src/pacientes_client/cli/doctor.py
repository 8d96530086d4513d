"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from pacientes_client.adapters.http_client import ApiClient
from pacientes_client.core.config import AppSettings, get_user_env_file, write_user_env_vars
from pacientes_client.core.errors import classify_failure
from pacientes_client.core.services.paciente_service import RESOURCE

app = typer.Typer(no_args_is_help=True, help="Diagnóstico del entorno y de la conexión al backend.")

_console = Console()


async def _check_backend(
    base_url: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    # Cliente sin normalizador: el diagnóstico no dispara alertas al usuario.
    client = ApiClient(base_url, transport=transport)
    try:
        response = await client.get(RESOURCE)
    except Exception as exc:
        failure = classify_failure(exc)
        return False, f"{failure.kind.value}: {failure.message}"
    return True, f"HTTP {response.status_code}"


@app.command()
def run(ctx: typer.Context) -> None:
    """Muestra la configuración efectiva y prueba la conexión al backend."""

    settings: AppSettings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="Pacientes Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Log", "OK", f"{settings.log_level} / {settings.log_format}")
    table.add_row("User .env", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    ok_http, detail_http = asyncio.run(_check_backend(settings.api_base_url))
    table.add_row("Backend", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Guarda la ruta base del backend en el .env de usuario."""

    current = AppSettings().api_base_url
    base_url = typer.prompt("API base URL", default=current, show_default=True).strip()
    if not base_url:
        raise typer.BadParameter("base_url is required")

    env_path = write_user_env_vars({"PACIENTES_API_BASE_URL": base_url})
    _console.print(f"[green]Saved config to:[/green] {env_path}")
