"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app

ENDPOINTS = [
    ("/v1/auth/users/register", "post"),
    ("/v1/auth/users/login", "post"),
    ("/v1/auth/account/verify", "post"),
    ("/v1/auth/account/resend", "post"),
    ("/v1/auth/refresh", "post"),
    ("/v1/auth/me", "get"),
    ("/v1/auth/users/password", "post"),
]


@pytest.fixture
def client() -> TestClient:
    """Create test client for the application (no lifespan, no database)."""
    return TestClient(app)


@pytest.fixture
def schema(client: TestClient) -> dict:
    response = client.get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_title_and_version(self, schema: dict) -> None:
        assert schema["info"]["title"] == "accountgate"
        assert schema["info"]["version"] == "0.1.0"

    @pytest.mark.parametrize(("path", "method"), ENDPOINTS)
    def test_endpoint_documented_and_tagged(self, schema: dict, path: str, method: str) -> None:
        assert path in schema["paths"]
        operation = schema["paths"][path][method]
        assert "v1" in operation.get("tags", [])

    def test_register_summary(self, schema: dict) -> None:
        assert schema["paths"]["/v1/auth/users/register"]["post"]["summary"] == "Register a new user"

    def test_register_request_schema(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["RegisterRequest"]["properties"]
        assert {"email", "password", "display_name"} <= set(props)

    def test_account_response_has_no_password(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["AccountResponse"]["properties"]
        assert set(props) == {"id", "email", "is_verified"}

    def test_bearer_scheme_declared(self, schema: dict) -> None:
        schemes = schema["components"]["securitySchemes"]
        assert any(s.get("scheme", "").lower() == "bearer" for s in schemes.values())

    def test_v1_tag_in_schema(self, schema: dict) -> None:
        assert "v1" in [t["name"] for t in schema.get("tags", [])]


class TestSwaggerUI:
    """Tests for Swagger UI availability."""

    def test_docs_endpoint_accessible(self, client: TestClient) -> None:
        response = client.get("/docs")
        assert response.status_code == 200
