"""
Tests for the global error handling middleware.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lake_analytics.infrastructure.bhuvan_client import DataSourceError
from lake_analytics.middleware.error_handler import ErrorHandlerMiddleware


@pytest.fixture
def failing_client() -> TestClient:
    """App whose routes raise each kind of error."""
    failing_app = FastAPI()
    failing_app.add_middleware(ErrorHandlerMiddleware)

    @failing_app.get("/source")
    async def source():
        raise DataSourceError("Bhuvan mirror unavailable")

    @failing_app.get("/value")
    async def value():
        raise ValueError("bad lake id")

    @failing_app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    @failing_app.get("/ok")
    async def ok():
        return {"status": "ok"}

    return TestClient(failing_app)


class TestErrorHandlerMiddleware:

    def test_data_source_error_is_bad_gateway(self, failing_client):
        response = failing_client.get("/source")

        assert response.status_code == 502
        assert response.json() == {
            "error": "Data source error",
            "detail": "Bhuvan mirror unavailable",
        }

    def test_value_error_is_bad_request(self, failing_client):
        response = failing_client.get("/value")

        assert response.status_code == 400
        assert response.json()["detail"] == "bad lake id"

    def test_unexpected_error_is_generic_500(self, failing_client):
        """Internal details never leak into the body."""
        response = failing_client.get("/crash")

        assert response.status_code == 500
        assert "boom" not in response.text

    def test_success_passes_through(self, failing_client):
        assert failing_client.get("/ok").json() == {"status": "ok"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
