import httpx
import pytest
from rich.console import Console

from pacientes_client.cli.doctor import _check_backend
from pacientes_client.cli.ui_components import build_pacientes_table

from conftest import BASE_URL


@pytest.mark.asyncio
async def test_check_backend_ok():
    ok, detail = await _check_backend(BASE_URL, httpx.MockTransport(lambda request: httpx.Response(200, json=[])))

    assert ok is True
    assert detail == "HTTP 200"


@pytest.mark.asyncio
async def test_check_backend_reports_classified_failure():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    ok, detail = await _check_backend(BASE_URL, httpx.MockTransport(handler))

    assert ok is False
    assert detail.startswith("connectivity: No se pudo conectar con el servidor.")


def test_table_puts_known_columns_first():
    table = build_pacientes_table(
        [
            {"extra": 1, "estado": "ACTIVO", "cedula": "0102030405"},
            {"cedula": "0912345678", "activo": False, "estado": None},
        ]
    )

    headers = [column.header for column in table.columns]
    assert headers == ["cedula", "estado", "extra", "activo"]
    assert table.row_count == 2

    console = Console(width=120, record=True)
    console.print(table)
    text = console.export_text()
    assert "0912345678" in text
    assert "no" in text
