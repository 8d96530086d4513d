"""Fixtures compartidas: backend falso con `httpx.MockTransport` y notificador en memoria."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest
import structlog

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from pacientes_client.adapters.http_client import ApiClient, build_api_client  # noqa: E402
from pacientes_client.adapters.notifiers import CollectingNotifier  # noqa: E402
from pacientes_client.core.config import AppSettings  # noqa: E402

BASE_URL = "http://backend.test/api"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(api_base_url=BASE_URL)


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


@pytest.fixture
def make_client(settings, notifier) -> Callable[[Handler], ApiClient]:
    """Cliente con el normalizador instalado y el backend reemplazado por `handler`."""

    def _make(handler: Handler) -> ApiClient:
        return build_api_client(settings, notifier=notifier, transport=httpx.MockTransport(handler))

    return _make


def status_error(status_code: int, **response_kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", f"{BASE_URL}/pacientes")
    response = httpx.Response(status_code, request=request, **response_kwargs)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)
