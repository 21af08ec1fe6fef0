"""HTTP client utilities for saas-connector providers."""

import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from enum import IntEnum
from typing import Any

import httpx
from loguru import logger
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

# Upper bound for a serialized request body.
MAX_PAYLOAD_BYTES = 10 * 1024 * 1024

MAX_RETRIES = 3


class TransportErrorCode(IntEnum):
    """Low-level transport failure codes (numbered as in libcurl)."""

    UNSUPPORTED_PROTOCOL = 1
    COULDNT_RESOLVE_PROXY = 5
    COULDNT_RESOLVE_HOST = 6
    COULDNT_CONNECT = 7
    WEIRD_SERVER_REPLY = 8
    OPERATION_TIMEDOUT = 28
    SSL_CONNECT_ERROR = 35
    TOO_MANY_REDIRECTS = 47
    SEND_ERROR = 55
    RECV_ERROR = 56
    PEER_FAILED_VERIFICATION = 60
    BAD_CONTENT_ENCODING = 61


TRANSIENT_ERROR_CODES = frozenset(
    {
        TransportErrorCode.COULDNT_RESOLVE_HOST,
        TransportErrorCode.COULDNT_CONNECT,
        TransportErrorCode.OPERATION_TIMEDOUT,
        TransportErrorCode.SSL_CONNECT_ERROR,
        TransportErrorCode.PEER_FAILED_VERIFICATION,
    }
)

_RESOLVE_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)


class ConnectorError(Exception):
    """Base exception for connector request errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidMethodError(ConnectorError, ValueError):
    """Request method is not supported by the provider."""

    def __init__(self, method: str, allowed: list[str]):
        super().__init__(
            f'Method "{method}" is not valid. Allowed methods are {", ".join(allowed)}'
        )
        self.method = method
        self.allowed = allowed


class PayloadTooLargeError(ConnectorError):
    """Serialized request body exceeds the size ceiling."""

    def __init__(self, size: int, limit: int = MAX_PAYLOAD_BYTES):
        super().__init__(f"The request data size should not exceed `{limit}` bytes (got {size})")
        self.size = size
        self.limit = limit


class TransportError(ConnectorError):
    """Connection level failure reported by the HTTP transport."""

    def __init__(self, message: str, code: TransportErrorCode):
        super().__init__(message)
        self.code = code

    @property
    def is_transient(self) -> bool:
        """Whether the failure is worth retrying."""
        return self.code in TRANSIENT_ERROR_CODES


class ProviderError(ConnectorError):
    """Provider answered with an HTTP error status."""


class DecodeError(ConnectorError, ValueError):
    """Response body is not valid JSON."""


class Throttle:
    """Fixed pacing delay applied before every outbound request.

    Some providers ask clients to keep a gap between calls. This is a
    courtesy delay, not a sliding window limiter.
    """

    def __init__(self, delay: float = 0.0):
        """Initialize throttle.

        Args:
            delay: Seconds to sleep before each request. 0 disables pacing.
        """
        self.delay = delay

    def wait(self) -> None:
        """Sleep for the configured delay, if any."""
        if self.delay > 0:
            logger.debug(f"Pacing request, sleeping {self.delay:.3f}s")
            time.sleep(self.delay)


@contextmanager
def create_http_client(
    timeout: float = 30,
    connect_timeout: float | None = None,
    verify: bool = True,
    follow_redirects: bool = False,
    **kwargs: Any,
) -> Generator[httpx.Client, None, None]:
    """Create a blocking HTTP client scoped to a single request.

    Args:
        timeout: Overall request timeout in seconds.
        connect_timeout: Connection timeout in seconds. Defaults to ``timeout``.
        verify: Whether to verify TLS certificates and host names.
        follow_redirects: Whether to follow 3xx responses.
        **kwargs: Additional arguments passed to httpx.Client.

    Yields:
        Configured httpx.Client instance.
    """
    kwargs.pop("timeout", None)

    if not verify:
        logger.warning("TLS certificate verification is disabled for this request")

    with httpx.Client(
        timeout=httpx.Timeout(timeout, connect=connect_timeout or timeout),
        verify=verify,
        follow_redirects=follow_redirects,
        **kwargs,
    ) as client:
        yield client


def transport_error_from(exc: httpx.RequestError) -> TransportError:
    """Translate an httpx request exception into a TransportError.

    Args:
        exc: Exception raised by httpx while sending a request.

    Returns:
        TransportError carrying the matching transport code.
    """
    detail = str(exc) or exc.__class__.__name__
    lowered = detail.lower()

    if isinstance(exc, httpx.TimeoutException):
        code = TransportErrorCode.OPERATION_TIMEDOUT
    elif isinstance(exc, httpx.ProxyError):
        code = TransportErrorCode.COULDNT_RESOLVE_PROXY
    elif isinstance(exc, httpx.ConnectError):
        if any(marker in lowered for marker in _RESOLVE_MARKERS):
            code = TransportErrorCode.COULDNT_RESOLVE_HOST
        elif "certificate" in lowered or "hostname mismatch" in lowered:
            code = TransportErrorCode.PEER_FAILED_VERIFICATION
        elif "ssl" in lowered or "tls" in lowered:
            code = TransportErrorCode.SSL_CONNECT_ERROR
        else:
            code = TransportErrorCode.COULDNT_CONNECT
    elif isinstance(exc, httpx.UnsupportedProtocol):
        code = TransportErrorCode.UNSUPPORTED_PROTOCOL
    elif isinstance(exc, httpx.ReadError):
        code = TransportErrorCode.RECV_ERROR
    elif isinstance(exc, httpx.WriteError):
        code = TransportErrorCode.SEND_ERROR
    elif isinstance(exc, httpx.TooManyRedirects):
        code = TransportErrorCode.TOO_MANY_REDIRECTS
    elif isinstance(exc, httpx.DecodingError):
        code = TransportErrorCode.BAD_CONTENT_ENCODING
    else:
        code = TransportErrorCode.WEIRD_SERVER_REPLY

    return TransportError(detail, code)


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, TransportError) and exc.is_transient


def create_retrying(
    max_retries: int = MAX_RETRIES,
    wait: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Retrying:
    """Create a bounded retry loop for transient transport failures.

    Args:
        max_retries: Retries allowed after the first attempt.
        wait: Seconds to wait between attempts.
        sleep: Sleep function used between attempts.

    Returns:
        Configured tenacity Retrying instance. The last error is re-raised
        once retries are exhausted.
    """
    return Retrying(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_fixed(wait),
        sleep=sleep,
        reraise=True,
        before_sleep=lambda retry_state: logger.warning(
            f"Retrying request (attempt {retry_state.attempt_number}): "
            f"{retry_state.outcome.exception() if retry_state.outcome else 'unknown error'}"
        ),
    )
