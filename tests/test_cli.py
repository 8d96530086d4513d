import json

import httpx
import pytest
from structlog.testing import capture_logs
from typer.testing import CliRunner

from pacientes_client.adapters.http_client import build_api_client
from pacientes_client.cli import main as cli_main
from pacientes_client.core.services.paciente_service import PacienteService

runner = CliRunner()

PACIENTE = {"cedula": "0102030405", "nombres": "Ana", "apellidos": "Pérez", "estado": "ACTIVO"}


@pytest.fixture
def backend(monkeypatch, notifier):
    """Redirige la CLI a un backend falso; el log de diagnóstico queda fuera de stdout."""

    seen = []
    routes = {}

    def handler(request):
        seen.append(request)
        status, body = routes.get((request.method, request.url.path), (404, {"message": "no existe"}))
        return httpx.Response(status, json=body)

    def build_service(settings):
        transport = httpx.MockTransport(handler)
        return PacienteService(build_api_client(settings, notifier=notifier, transport=transport))

    monkeypatch.setattr(cli_main, "build_service", build_service)
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)
    with capture_logs():
        yield routes, seen


def test_listar_json(backend):
    routes, _ = backend
    routes[("GET", "/api/pacientes")] = (200, [PACIENTE])

    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", "listar", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [PACIENTE]


def test_listar_table(backend):
    routes, _ = backend
    routes[("GET", "/api/pacientes")] = (200, [PACIENTE])

    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", "listar"])

    assert result.exit_code == 0
    assert "0102030405" in result.stdout
    assert "Pacientes (1)" in result.stdout


def test_obtener_not_found_exits_without_repeating_message(backend, notifier):
    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", "obtener", "999"])

    assert result.exit_code == 1
    assert notifier.messages == ["no existe"]
    assert "no existe" not in result.stdout


def test_crear_sends_payload(backend):
    routes, seen = backend
    routes[("POST", "/api/pacientes")] = (201, PACIENTE)

    result = runner.invoke(
        cli_main.app,
        ["--base-url", "http://b.test/api", "crear", "--datos", json.dumps(PACIENTE)],
    )

    assert result.exit_code == 0
    assert json.loads(seen[0].content) == PACIENTE


def test_crear_rejects_invalid_json(backend):
    _, seen = backend

    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", "crear", "--datos", "{no json"])

    assert result.exit_code == 2
    assert seen == []


def test_actualizar_from_file(backend, tmp_path):
    routes, seen = backend
    routes[("PUT", "/api/pacientes/0102030405")] = (200, PACIENTE)
    archivo = tmp_path / "paciente.json"
    archivo.write_text(json.dumps({"nombres": "Ana María"}), encoding="utf-8")

    result = runner.invoke(
        cli_main.app,
        ["--base-url", "http://b.test/api", "actualizar", "0102030405", "--archivo", str(archivo)],
    )

    assert result.exit_code == 0
    assert json.loads(seen[0].content) == {"nombres": "Ana María"}


def test_eliminar_asks_for_confirmation(backend):
    _, seen = backend

    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", "eliminar", "0102030405"], input="n\n")

    assert result.exit_code == 1
    assert seen == []


@pytest.mark.parametrize(
    "command,path",
    [
        ("activar", "/api/pacientes/0102030405/activar"),
        ("desactivar", "/api/pacientes/0102030405/desactivar"),
    ],
)
def test_status_commands(backend, notifier, command, path):
    routes, seen = backend
    routes[("PUT", path)] = (200, {"mensaje": "ok"})

    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", command, "0102030405"])

    assert result.exit_code == 0
    assert seen[0].method == "PUT"
    assert notifier.messages == []


def test_transport_value_error_exits_without_second_message(backend, notifier):
    _, seen = backend

    result = runner.invoke(
        cli_main.app,
        ["--base-url", "http://b.test/api", "crear", "--datos", '{"cedula": "1", "peso": NaN}'],
    )

    assert result.exit_code == 1
    assert len(notifier.messages) == 1
    assert notifier.messages[0].startswith("Error desconocido: ")
    assert "Invalid value" not in result.output
    assert seen == []


def test_blank_cedula_is_a_usage_error(backend, notifier):
    _, seen = backend

    result = runner.invoke(cli_main.app, ["--base-url", "http://b.test/api", "obtener", "   "])

    assert result.exit_code == 2
    assert seen == []
    assert notifier.messages == []
