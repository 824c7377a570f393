"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from goapidoc.orchestrator import ApiDocuments
from goapidoc.service import create_app
from tests._fixtures.go_tree import GoTreeBuilder
from tests._fixtures.shop import write_shop


@pytest.fixture
def documents(go_tree: GoTreeBuilder) -> ApiDocuments:
    main_file = write_shop(go_tree)
    parser = go_tree.parser()
    parser.parse_general_api_info(main_file)
    parser.parse_api("acme/shop")
    return parser.documents()


def test_documents_are_built_once(documents: ApiDocuments) -> None:
    calls: list[int] = []

    def factory() -> ApiDocuments:
        calls.append(1)
        return documents

    client = TestClient(create_app(factory))
    client.get("/health")
    client.get("/api-docs")

    assert calls == [1]


def test_health_reports_resource_count(documents: ApiDocuments) -> None:
    client = TestClient(create_app(lambda: documents))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "resources": 3}


def test_resource_listing_endpoint(documents: ApiDocuments) -> None:
    client = TestClient(create_app(lambda: documents))

    response = client.get("/api-docs")

    assert response.status_code == 200
    assert response.json() == documents.resource_listing


def test_api_declaration_endpoint(documents: ApiDocuments) -> None:
    client = TestClient(create_app(lambda: documents))

    response = client.get("/api-docs/orders")

    assert response.status_code == 200
    payload = response.json()
    assert payload["resourcePath"] == "/orders"
    assert payload == documents.api_declarations["orders"]


def test_unknown_resource_returns_404(documents: ApiDocuments) -> None:
    client = TestClient(create_app(lambda: documents))

    response = client.get("/api-docs/invoices")

    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown resource invoices"
