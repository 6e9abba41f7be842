"""Tests for API health and index endpoint behavior."""

from fastapi.testclient import TestClient

from portfolio_ledger.api.application import create_api_application
from portfolio_ledger.config import AppSettings


def _build_settings() -> AppSettings:
    """Create test settings object.

    Returns:
        AppSettings: Deterministic test settings for API creation.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    return AppSettings(environment_name="test")


def test_api_health_returns_success_payload() -> None:
    """Return HTTP 200 and healthy payload.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = TestClient(create_api_application(_build_settings()))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "app": "up",
        "service": "portfolio-ledger",
        "environment": "test",
    }


def test_api_index_reports_environment() -> None:
    """Return service index with environment label."""

    client = TestClient(create_api_application(_build_settings()))

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["environment"] == "test"
