"""Query string and filter construction for provider requests."""

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote, urlencode

from loguru import logger

from saas_connector.models.request import FILTER_OPERANDS, FilterClause

FILTERS_KEY = "filters"

# Characters left unescaped in a compiled filter segment.
_FILTER_SAFE = "=<>!;:/.,-_"


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def flatten_parameters(parameters: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """Flatten nested parameters into bracketed key/value pairs.

    ``{"a": {"b": 1}, "c": [1, 2]}`` becomes
    ``[("a[b]", "1"), ("c[0]", "1"), ("c[1]", "2")]``. ``None`` values are skipped.

    Args:
        parameters: Mapping of parameter names to scalar or nested values.
        prefix: Key prefix used for nested entries.

    Returns:
        Ordered list of encoded-ready pairs.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in parameters.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(flatten_parameters(value, name))
        elif isinstance(value, list | tuple):
            pairs.extend(flatten_parameters(dict(enumerate(value)), name))
        else:
            pairs.append((name, _scalar(value)))
    return pairs


def _filter_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_clause(raw: Any) -> FilterClause | None:
    if isinstance(raw, FilterClause):
        return raw
    if not isinstance(raw, Mapping):
        return None
    field = raw.get("field", raw.get("name"))
    operand = raw.get("operand")
    if field is None or not isinstance(operand, str):
        return None
    return FilterClause(field=str(field), operand=operand, value=raw.get("value"))


def compile_filters(clauses: Iterable[FilterClause | Mapping[str, Any]]) -> str:
    """Compile filter clauses into the provider filter language.

    Clauses with an unknown or missing operand, or no field, are dropped
    without error.

    Args:
        clauses: FilterClause instances or mappings with field/operand/value keys.

    Returns:
        Semicolon separated ``field<operand>value`` segments, or "" if none remain.
    """
    segments = []
    for raw in clauses:
        clause = _as_clause(raw)
        if clause is None:
            logger.debug(f"Skipping malformed filter clause {raw!r}")
            continue
        if clause.operand not in FILTER_OPERANDS:
            logger.debug(f"Skipping filter on {clause.field!r}: unknown operand {clause.operand!r}")
            continue
        segments.append(f"{clause.field}{clause.operand}{_filter_value(clause.value)}")
    return ";".join(segments)


def build_query(parameters: Mapping[str, Any], *, filters_key: str | None = FILTERS_KEY) -> str:
    """Build a query string from request parameters.

    Args:
        parameters: Request parameters.
        filters_key: Name of the reserved entry holding filter clauses, or
            None when the provider has no server-side filtering.

    Returns:
        Query string starting with ``?``.
    """
    filters: Any = None
    plain: dict[str, Any] = {}
    for name, value in parameters.items():
        if filters_key is not None and name == filters_key:
            filters = value
            continue
        plain[name] = value

    segments = []
    encoded = urlencode(flatten_parameters(plain))
    if encoded:
        segments.append(encoded)

    if filters and not isinstance(filters, list | tuple):
        logger.debug(f"Ignoring {filters_key!r} parameter that is not a list")
        filters = None

    if filters:
        compiled = compile_filters(filters)
        if compiled:
            segments.append("filter=" + quote(compiled, safe=_FILTER_SAFE))

    return "?" + "&".join(segments)
