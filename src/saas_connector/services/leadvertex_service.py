"""LeadVertex admin API service.

LeadVertex accepts GET and POST only, follows redirects, takes its API
token as a query parameter and expects form-encoded POST bodies.
"""

from collections.abc import Mapping
from typing import Any

import httpx

from saas_connector.config import Settings
from saas_connector.models.request import HttpMethod, PayloadFormat, ProviderProfile
from saas_connector.models.response import Response
from saas_connector.services.request_executor import RequestExecutor


class LeadvertexService:
    """Service for calling the LeadVertex admin API."""

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        """Initialize LeadVertex service.

        Args:
            settings: Application settings.
            transport: Optional httpx transport override.
        """
        self.settings = settings
        lv = settings.leadvertex

        default_parameters: dict[str, Any] = {}
        if lv.api_token:
            default_parameters["token"] = lv.api_token.get_secret_value()

        self.profile = ProviderProfile(
            name="leadvertex",
            base_url=lv.url,
            allowed_methods=(HttpMethod.GET, HttpMethod.POST),
            follow_redirects=lv.follow_redirects,
            pre_request_delay=lv.pre_request_delay,
            verify_tls=lv.verify_tls,
            timeout=lv.timeout,
            payload_format=PayloadFormat.FORM,
            supports_filters=False,
            default_parameters=default_parameters,
            retry_wait=settings.retry_wait,
        )
        self.executor = RequestExecutor(self.profile, transport=transport)

    def request(
        self,
        path: str,
        method: str = HttpMethod.GET.value,
        parameters: Mapping[str, Any] | None = None,
    ) -> Response:
        """Call a LeadVertex endpoint.

        Args:
            path: Endpoint path, e.g. ``getOrdersIdsInStatus.html``.
            method: GET or POST.
            parameters: Query or form parameters.

        Returns:
            Provider response.
        """
        return self.executor.execute(path, method, parameters)
