"""Pytest configuration and fixtures for saas-connector tests."""

import httpx
import pytest

from saas_connector.config import Settings
from saas_connector.models.request import HttpMethod, PayloadFormat, ProviderProfile


class RecordingTransport(httpx.MockTransport):
    """Mock transport that replays scripted outcomes and records requests.

    Each outcome is either an ``httpx.Response`` or an ``(exception_class,
    message)`` pair. The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes) or [httpx.Response(200, json={})]
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[min(len(self.requests), len(self.outcomes)) - 1]
        if isinstance(outcome, tuple):
            exc_class, message = outcome
            raise exc_class(message, request=request)
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
        )


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport


@pytest.fixture
def json_profile():
    """Profile of a provider with the full method set and filter support."""
    return ProviderProfile(
        name="test-json",
        base_url="https://api.example.com/api/remap/",
        api_version="1.1",
        allowed_methods=tuple(HttpMethod),
        follow_redirects=False,
        payload_format=PayloadFormat.JSON,
        supports_filters=True,
        username="user",
        password="secret",
    )


@pytest.fixture
def form_profile():
    """Profile of a GET/POST provider with form bodies and redirects."""
    return ProviderProfile(
        name="test-form",
        base_url="https://shop.example.com/api/admin/",
        allowed_methods=(HttpMethod.GET, HttpMethod.POST),
        follow_redirects=True,
        payload_format=PayloadFormat.FORM,
        default_parameters={"token": "abc123"},
    )


@pytest.fixture
def mock_settings():
    """Create mock settings for testing."""
    return Settings(
        log_level="DEBUG",
        leadvertex={"client_id": "shop", "api_token": "tok"},
        moysklad={"login": "admin@shop", "password": "secret", "pre_request_delay": 0},
    )


@pytest.fixture
def sample_error_body():
    """Sample provider validation error response."""
    return {
        "errors": [
            {"parameter": "name", "error": "required", "code": 3000},
            {"error": "Entity is locked", "code": 1021},
        ]
    }
