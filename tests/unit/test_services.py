"""Tests for provider services."""

import httpx
import pytest

from saas_connector.models.request import HttpMethod, PayloadFormat
from saas_connector.services import LeadvertexService, MoyskladService
from saas_connector.utils.http_client import InvalidMethodError, ProviderError


class TestLeadvertexService:
    """Tests for LeadvertexService."""

    def test_profile(self, mock_settings):
        """Test the profile built from settings."""
        profile = LeadvertexService(mock_settings).profile

        assert profile.endpoint_root == "https://shop.leadvertex.ru/api/admin/"
        assert profile.allowed_methods == (HttpMethod.GET, HttpMethod.POST)
        assert profile.follow_redirects is True
        assert profile.payload_format is PayloadFormat.FORM
        assert profile.supports_filters is False
        assert profile.default_parameters == {"token": "tok"}
        assert profile.timeout == 30

    def test_get_request(self, mock_settings, make_transport):
        """Test a GET call with the token in the query."""
        transport = make_transport(httpx.Response(200, json={"1": {"status": 0}}))
        service = LeadvertexService(mock_settings, transport=transport)

        response = service.request("getOrdersIdsInStatus.html", "GET", {"status": 0})

        url = transport.requests[0].url
        assert url.host == "shop.leadvertex.ru"
        assert url.path == "/api/admin/getOrdersIdsInStatus.html"
        assert url.params["token"] == "tok"
        assert url.params["status"] == "0"
        assert response.get("1") == {"status": 0}

    def test_rejects_delete(self, mock_settings, make_transport):
        """Test that LeadVertex only accepts GET and POST."""
        transport = make_transport()

        with pytest.raises(InvalidMethodError):
            LeadvertexService(mock_settings, transport=transport).request("order.html", "DELETE")

        assert transport.calls == 0


class TestMoyskladService:
    """Tests for MoyskladService."""

    def test_profile(self, mock_settings):
        """Test the profile built from settings."""
        profile = MoyskladService(mock_settings).profile

        assert profile.endpoint_root == "https://online.moysklad.ru/api/remap/1.1/"
        assert profile.method_names == ["GET", "POST", "PUT", "DELETE"]
        assert profile.follow_redirects is False
        assert profile.supports_filters is True
        assert profile.payload_format is PayloadFormat.JSON
        assert profile.username == "admin@shop"
        assert profile.password.get_secret_value() == "secret"
        assert profile.connect_timeout == 60

    def test_filtered_list(self, mock_settings, make_transport):
        """Test a filtered GET with basic auth."""
        transport = make_transport(httpx.Response(200, json={"rows": [{"id": "a"}]}))
        service = MoyskladService(mock_settings, transport=transport)

        response = service.request(
            "entity/counterparty",
            "GET",
            {"limit": 100, "filters": [{"name": "phone", "operand": "=", "value": "79990000000"}]},
        )

        request = transport.requests[0]
        assert request.url.path == "/api/remap/1.1/entity/counterparty"
        assert request.url.params["filter"] == "phone=79990000000"
        assert request.headers["Authorization"].startswith("Basic ")
        assert response["rows"] == [{"id": "a"}]

    def test_error_response(self, mock_settings, make_transport):
        """Test that provider errors surface as ProviderError."""
        transport = make_transport(
            httpx.Response(412, json={"errors": [{"error": "Поле 'name' не может быть пустым"}]})
        )
        service = MoyskladService(mock_settings, transport=transport)

        with pytest.raises(ProviderError) as exc_info:
            service.request("entity/product", "POST", {"data": {"name": ""}})

        assert exc_info.value.status_code == 412
        assert "Error: Поле 'name' не может быть пустым" in str(exc_info.value)
