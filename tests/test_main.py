"""Tests for the FastAPI surface."""

import httpx
import pytest
from fastapi.testclient import TestClient

from unity_tracker.main import app, get_service

from conftest import RecordingTransport, json_response, make_service


@pytest.fixture
def client_for():
    def build(handler):
        transport = RecordingTransport(handler)
        service = make_service(transport)
        app.dependency_overrides[get_service] = lambda: service
        return TestClient(app), transport

    yield build
    app.dependency_overrides.clear()


def test_root_serves_widget_page():
    response = TestClient(app).get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "XRP Unity Tracker" in response.text
    assert "/api/lookup" in response.text


def test_info_reports_settings():
    body = TestClient(app).get("/api/info").json()

    assert set(body) == {"app_name", "tracker_mode", "xrpscan_api_url"}
    assert body["tracker_mode"] in {"xrpscan", "ledger", "mock"}


def test_lookup_success(client_for, account_body):
    client, transport = client_for(json_response(200, account_body))

    response = client.post("/api/lookup", json={"address": "rABC"})

    assert response.status_code == 200
    body = response.json()
    assert body["address"] == "rABC"
    assert body["state"]["phase"] == "Success"
    assert body["state"]["result"]["xrpBalance"] == "123.45"
    assert body["display"] == {
        "busy": False,
        "result": {
            "balance": "123.45",
            "account_name": "Active",
            "sequence": "7",
            "account": "rABC",
        },
        "error": None,
    }
    assert len(transport.requests) == 1


def test_lookup_empty_address_never_calls_out(client_for):
    client, transport = client_for(json_response(200, {}))

    response = client.post("/api/lookup", json={"address": "   "})

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == {
        "phase": "Failed",
        "error_message": "Please enter an XRP address",
    }
    assert body["display"]["error"] == "Please enter an XRP address"
    assert transport.requests == []


def test_lookup_not_found_resolves_to_failed_state(client_for):
    client, _ = client_for(json_response(404, {"error": "not found"}))

    body = client.post("/api/lookup", json={"address": "rMissing"}).json()

    assert body["state"]["phase"] == "Failed"
    assert body["display"] == {
        "busy": False,
        "result": None,
        "error": "Invalid address or network error",
    }


def test_account_endpoint_passes_through_present_fields(client_for, account_body):
    client, _ = client_for(json_response(200, account_body))

    response = client.get("/api/account/rABC")

    assert response.status_code == 200
    assert response.json() == account_body


def test_account_endpoint_maps_invalid_response_to_404(client_for):
    client, _ = client_for(json_response(500, {}))

    response = client.get("/api/account/rABC")

    assert response.status_code == 404
    assert response.json() == {"detail": "Invalid address or network error"}


def test_account_endpoint_maps_network_error_to_502(client_for):
    def handler(request):
        raise httpx.ConnectError("connection reset", request=request)

    client, _ = client_for(handler)

    response = client.get("/api/account/rABC")

    assert response.status_code == 502
    assert response.json() == {"detail": "connection reset"}
