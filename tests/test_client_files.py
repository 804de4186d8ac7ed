from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pantry.app import create_app
from tests.mock_config import mock_config

SHELL = "<!doctype html><app-root></app-root>"


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    client_dir = tmp_path / "dist" / "client"
    client_dir.mkdir(parents=True)
    (client_dir / "index.html").write_text(SHELL, encoding="utf-8")
    (client_dir / "main.js").write_text("console.log('pantry')", encoding="utf-8")
    return TestClient(create_app(mock_config(), app_root=tmp_path))


def test_root_serves_index(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == SHELL


def test_existing_asset_is_served(client: TestClient) -> None:
    response = client.get("/main.js")

    assert response.status_code == 200
    assert "pantry" in response.text


def test_deep_link_falls_back_to_index(client: TestClient) -> None:
    response = client.get("/recipes/123")

    assert response.status_code == 200
    assert response.text == SHELL


def test_unknown_api_path_is_not_rewritten(client: TestClient) -> None:
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error_code": "HTTP_404", "message": "Not Found"}


def test_api_routes_take_precedence(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.json() == {"status": "ok"}


def test_app_lifespan_runs_without_mongo(tmp_path: Path) -> None:
    with TestClient(create_app(mock_config(), app_root=tmp_path)) as client:
        assert client.get("/api/health").status_code == 200
