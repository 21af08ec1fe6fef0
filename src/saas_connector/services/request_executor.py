"""Request executor shared by all provider services.

Validates the method, assembles the URL and body, sends the request with
bounded retries for transient connection failures, and turns HTTP error
statuses into ProviderError.
"""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger

from saas_connector.models.request import HttpMethod, PayloadFormat, ProviderProfile, RequestSpec
from saas_connector.models.response import Response
from saas_connector.utils.error_classifier import classify_error
from saas_connector.utils.http_client import (
    MAX_PAYLOAD_BYTES,
    InvalidMethodError,
    PayloadTooLargeError,
    ProviderError,
    Throttle,
    create_http_client,
    create_retrying,
    transport_error_from,
)
from saas_connector.utils.query import FILTERS_KEY, build_query, flatten_parameters

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestExecutor:
    """Sends requests to one provider.

    One executor holds no connection between calls; every attempt opens and
    closes its own client. Instances are not thread-safe, use one per thread.
    """

    def __init__(
        self,
        profile: ProviderProfile,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the executor.

        Args:
            profile: Provider behaviour (URL, methods, redirects, pacing, auth).
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self.profile = profile
        self._transport = transport
        self._throttle = Throttle(profile.pre_request_delay)

    def execute(
        self,
        path: str,
        method: str = HttpMethod.GET.value,
        parameters: Mapping[str, Any] | None = None,
    ) -> Response:
        """Execute a request against the provider.

        Args:
            path: Endpoint path relative to the provider root.
            method: HTTP method.
            parameters: Query parameters for GET, body source for writes.

        Returns:
            Response of the successful call.

        Raises:
            InvalidMethodError: Method not supported by the provider.
            PayloadTooLargeError: Serialized body over the size ceiling.
            ProviderError: Provider answered with status >= 400.
            TransportError: Connection failure that was not or no longer retried.
        """
        spec = RequestSpec(path=path, method=method, parameters=dict(parameters or {}))
        return self.send(spec)

    def send(self, spec: RequestSpec) -> Response:
        """Execute a prepared RequestSpec. See :meth:`execute`."""
        self._validate_method(spec.method)

        parameters = {**self.profile.default_parameters, **spec.parameters}
        url = self._build_url(spec.path, spec.method, parameters)
        headers, content = self._build_body(spec.method, parameters)

        retrying = create_retrying(
            max_retries=self.profile.max_retries,
            wait=self.profile.retry_wait,
        )
        for attempt in retrying:
            with attempt:
                response = self._send_once(spec.method, url, headers, content)

        if response.status_code >= 400:
            raise self._provider_error(response)

        return response

    def _validate_method(self, method: str) -> None:
        allowed = self.profile.method_names
        if method not in allowed:
            raise InvalidMethodError(method, allowed)

    def _build_url(self, path: str, method: str, parameters: dict[str, Any]) -> str:
        url = self.profile.endpoint_root + path.lstrip("/")
        if method == HttpMethod.GET.value and parameters:
            filters_key = FILTERS_KEY if self.profile.supports_filters else None
            url += build_query(parameters, filters_key=filters_key)
        return url

    def _build_body(
        self,
        method: str,
        parameters: dict[str, Any],
    ) -> tuple[dict[str, str], bytes | None]:
        """Build request headers and body for the given method."""
        if method == HttpMethod.DELETE.value:
            return {"Content-Type": JSON_CONTENT_TYPE}, None

        if method not in (HttpMethod.POST.value, HttpMethod.PUT.value):
            return {}, None

        if self.profile.payload_format is PayloadFormat.FORM:
            if not parameters:
                return {}, None
            content = urlencode(flatten_parameters(parameters)).encode()
            self._check_size(content)
            return {"Content-Type": FORM_CONTENT_TYPE}, content

        data = parameters.get("data")
        if not data:
            return {}, None
        content = json.dumps(data).encode()
        self._check_size(content)
        return {"Content-Type": JSON_CONTENT_TYPE}, content

    @staticmethod
    def _check_size(content: bytes) -> None:
        if len(content) > MAX_PAYLOAD_BYTES:
            raise PayloadTooLargeError(len(content), MAX_PAYLOAD_BYTES)

    def _send_once(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None,
    ) -> Response:
        """Send a single attempt and wrap the raw result."""
        self._throttle.wait()

        profile = self.profile
        auth = None
        if profile.username:
            password = profile.password.get_secret_value() if profile.password else ""
            auth = httpx.BasicAuth(profile.username, password)

        client_kwargs: dict[str, Any] = {}
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        logger.debug(f"{profile.name}: {method} {url.split('?', 1)[0]}")
        with create_http_client(
            timeout=profile.timeout,
            connect_timeout=profile.connect_timeout,
            verify=profile.verify_tls,
            follow_redirects=profile.follow_redirects,
            **client_kwargs,
        ) as client:
            try:
                raw = client.request(method, url, headers=headers, content=content, auth=auth)
            except httpx.RequestError as e:
                error = transport_error_from(e)
                logger.debug(f"{profile.name}: transport error {error.code.name}: {error}")
                raise error from e

        return Response(status_code=raw.status_code, body=raw.content)

    def _provider_error(self, response: Response) -> ProviderError:
        try:
            decoded = response.decode()
        except ValueError:
            decoded = None
        message = classify_error(response.status_code, decoded)
        logger.error(f"{self.profile.name}: HTTP {response.status_code}: {message}")
        return ProviderError(message, response.status_code)
