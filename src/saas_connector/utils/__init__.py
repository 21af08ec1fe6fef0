"""Utility functions and helpers for saas-connector."""

from saas_connector.utils.http_client import (
    MAX_PAYLOAD_BYTES,
    ConnectorError,
    DecodeError,
    InvalidMethodError,
    PayloadTooLargeError,
    ProviderError,
    Throttle,
    TransportError,
    TransportErrorCode,
    create_http_client,
    create_retrying,
    transport_error_from,
)
from saas_connector.utils.error_classifier import classify_error
from saas_connector.utils.log import setup_logging
from saas_connector.utils.query import build_query, compile_filters, flatten_parameters

__all__ = [
    "MAX_PAYLOAD_BYTES",
    "ConnectorError",
    "DecodeError",
    "InvalidMethodError",
    "PayloadTooLargeError",
    "ProviderError",
    "Throttle",
    "TransportError",
    "TransportErrorCode",
    "build_query",
    "classify_error",
    "compile_filters",
    "create_http_client",
    "create_retrying",
    "flatten_parameters",
    "setup_logging",
    "transport_error_from",
]
