"""MoySklad JSON API service.

MoySklad supports GET, POST, PUT and DELETE, server-side filtering with
``filter=field<op>value;...``, JSON bodies and HTTP basic auth. Redirects
are not followed and calls are paced to respect the API rate limits.

API Documentation: https://online.moysklad.ru/api/remap/1.1/doc/index.html
"""

from collections.abc import Mapping
from typing import Any

import httpx

from saas_connector.config import Settings
from saas_connector.models.request import HttpMethod, PayloadFormat, ProviderProfile
from saas_connector.models.response import Response
from saas_connector.services.request_executor import RequestExecutor


class MoyskladService:
    """Service for calling the MoySklad JSON API."""

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        """Initialize MoySklad service.

        Args:
            settings: Application settings.
            transport: Optional httpx transport override.
        """
        self.settings = settings
        ms = settings.moysklad

        self.profile = ProviderProfile(
            name="moysklad",
            base_url=ms.base_url,
            api_version=ms.api_version,
            allowed_methods=tuple(HttpMethod),
            follow_redirects=ms.follow_redirects,
            pre_request_delay=ms.pre_request_delay,
            verify_tls=ms.verify_tls,
            timeout=ms.timeout,
            connect_timeout=ms.connect_timeout,
            payload_format=PayloadFormat.JSON,
            supports_filters=True,
            username=ms.login,
            password=ms.password,
            retry_wait=settings.retry_wait,
        )
        self.executor = RequestExecutor(self.profile, transport=transport)

    def request(
        self,
        path: str,
        method: str = HttpMethod.GET.value,
        parameters: Mapping[str, Any] | None = None,
    ) -> Response:
        """Call a MoySklad endpoint.

        Args:
            path: Endpoint path, e.g. ``entity/customerorder``.
            method: GET, POST, PUT or DELETE.
            parameters: Query parameters (with optional ``filters``) for GET,
                ``data`` payload for POST and PUT.

        Returns:
            Provider response.
        """
        return self.executor.execute(path, method, parameters)
