"""Data models for saas-connector."""

from saas_connector.models.request import (
    FILTER_OPERANDS,
    FilterClause,
    FilterOperand,
    HttpMethod,
    PayloadFormat,
    ProviderProfile,
    RequestSpec,
)
from saas_connector.models.response import Response

__all__ = [
    "FILTER_OPERANDS",
    "FilterClause",
    "FilterOperand",
    "HttpMethod",
    "PayloadFormat",
    "ProviderProfile",
    "RequestSpec",
    "Response",
]
