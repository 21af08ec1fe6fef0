"""Request side data models."""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr


class HttpMethod(str, Enum):
    """HTTP methods understood by the request executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class FilterOperand(str, Enum):
    """Comparison operators of the provider filter language."""

    EQ = "="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    NE = "!="


FILTER_OPERANDS = frozenset(op.value for op in FilterOperand)


class PayloadFormat(str, Enum):
    """How a provider expects write request bodies."""

    JSON = "json"
    FORM = "form"


class FilterClause(BaseModel):
    """Single ``field<operand>value`` filter condition.

    The operand is kept as free text so that clauses with unknown operands
    can be dropped at compile time instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(
        ...,
        validation_alias=AliasChoices("field", "name"),
        description="Field to filter on",
    )
    operand: str = Field(..., description="Comparison operator")
    value: Any = Field(default=None, description="Value to compare against")


class RequestSpec(BaseModel):
    """One outbound request as supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Endpoint path relative to the provider base URL")
    method: str = Field(default=HttpMethod.GET.value, description="HTTP method")
    parameters: dict[str, Any] = Field(default_factory=dict, description="Request parameters")


class ProviderProfile(BaseModel):
    """Per-provider behaviour injected into the request executor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Provider name used in log messages")
    base_url: str = Field(..., description="Provider API root URL")
    api_version: str | None = Field(
        default=None,
        description="Version path segment inserted between base URL and endpoint",
    )
    allowed_methods: tuple[HttpMethod, ...] = Field(
        default=(HttpMethod.GET, HttpMethod.POST),
        description="Methods the provider accepts",
    )
    follow_redirects: bool = Field(default=False, description="Follow 3xx responses")
    pre_request_delay: float = Field(
        default=0.0,
        ge=0,
        description="Pacing delay before every request, in seconds",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verify TLS certificates; disable only for legacy endpoints",
    )
    timeout: float = Field(default=30, gt=0, description="Overall request timeout in seconds")
    connect_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Connection timeout in seconds, defaults to the overall timeout",
    )
    payload_format: PayloadFormat = Field(
        default=PayloadFormat.JSON,
        description="Encoding of write request bodies",
    )
    supports_filters: bool = Field(
        default=False,
        description="Whether the reserved filters parameter is compiled into the query",
    )
    default_parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Parameters merged under every call's parameters",
    )
    username: str | None = Field(default=None, description="HTTP basic auth user")
    password: SecretStr | None = Field(default=None, description="HTTP basic auth password")
    max_retries: int = Field(default=3, ge=0, description="Retries for transient failures")
    retry_wait: float = Field(default=0.0, ge=0, description="Seconds between retries")

    @property
    def endpoint_root(self) -> str:
        """Base URL including the version segment, ending with a slash."""
        root = self.base_url if self.base_url.endswith("/") else f"{self.base_url}/"
        if self.api_version:
            root = f"{root}{self.api_version.strip('/')}/"
        return root

    @property
    def method_names(self) -> list[str]:
        """Allowed methods as plain strings."""
        return [method.value for method in self.allowed_methods]
