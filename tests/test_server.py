from fastapi.testclient import TestClient

from surety.registry import OracleRegistry
from surety.server import create_app


def test_api_reports_registered_oracles():
    registry = OracleRegistry()
    registry.register("0xabc", [1, 2, 3])
    client = TestClient(create_app(registry))

    response = client.get("/api")

    assert response.status_code == 200
    assert response.json() == {"message": "An API for use with your Dapp!", "oracles": 1}


def test_api_without_registry():
    response = TestClient(create_app()).get("/api")
    assert response.json()["oracles"] == 0
