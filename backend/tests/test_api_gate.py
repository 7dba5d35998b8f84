import pytest
from fastapi.testclient import TestClient

from tests.fakes import FIXED_NOW, GATE_URL, CountingLastFetchStore, ErrorSinkSpy, FetcherSpy, make_descriptor
from version_gate import __version__
from version_gate.core.runtime import get_controller
from version_gate.gate.controller import VersionGateController
from version_gate.main import app
from version_gate.models.errors import TransportError
from version_gate.utils.app_version import StaticVersionSource

PREFIX = "/api/v1"


@pytest.fixture
def fetcher():
    return FetcherSpy(make_descriptor(required_version="2.0.0", recommended_version="3.0.0"))


@pytest.fixture
def controller(fetcher):
    return VersionGateController(
        GATE_URL,
        fetcher=fetcher,
        version_source=StaticVersionSource("2.5.0"),
        last_fetch_store=CountingLastFetchStore(),
        clock=lambda: FIXED_NOW,
        error_sink=ErrorSinkSpy(),
    )


@pytest.fixture
def client(controller):
    # No context manager: the lifespan (real network refresh) is not run.
    app.dependency_overrides[get_controller] = lambda: controller
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_state_before_first_refresh(client):
    r = client.get(f"{PREFIX}/gate")
    assert r.status_code == 200
    assert r.json() == {"status": None, "descriptor": None, "is_loading": False}


def test_refresh_then_dismiss(client, fetcher):
    r = client.post(f"{PREFIX}/gate/refresh")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == {"kind": "recommended_update", "url": "https://example.com/update"}
    assert body["descriptor"]["required_version"] == "2.0.0"
    assert body["descriptor"]["eol"] is False
    assert body["is_loading"] is False

    r = client.post(f"{PREFIX}/gate/dismiss")
    assert r.json()["dismissed"] is True
    assert r.json()["status"] == {"kind": "up_to_date"}
    assert fetcher.call_count == 1

    r = client.post(f"{PREFIX}/gate/dismiss")
    assert r.json()["dismissed"] is False


def test_refresh_if_needed_respects_interval(client, fetcher):
    first = client.post(f"{PREFIX}/gate/refresh-if-needed").json()
    second = client.post(f"{PREFIX}/gate/refresh-if-needed").json()
    assert first["refreshed"] is True
    assert second["refreshed"] is False
    assert fetcher.call_count == 1


def test_refresh_if_needed_with_unreadable_store_returns_200(client, controller, fetcher):
    class Unreadable(CountingLastFetchStore):
        def get(self):
            raise RuntimeError("db locked")

    controller._last_fetch_store = Unreadable()
    r = client.post(f"{PREFIX}/gate/refresh-if-needed")
    assert r.status_code == 200
    assert r.json()["refreshed"] is True
    assert fetcher.call_count == 1


def test_failed_refresh_fails_open_with_200(client, fetcher):
    fetcher.error = TransportError("offline")
    r = client.post(f"{PREFIX}/gate/refresh")
    assert r.status_code == 200
    assert r.json()["status"] == {"kind": "up_to_date"}
    assert r.json()["descriptor"] is None


def test_version_endpoint(client, monkeypatch):
    from version_gate.core import config

    monkeypatch.setattr(config.settings, "app_version", "9.9.9")
    r = client.get(f"{PREFIX}/version")
    assert r.status_code == 200
    assert r.json()["version"] == "9.9.9"
    assert r.json()["server_version"] == __version__
