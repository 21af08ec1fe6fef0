"""Human readable messages for provider error responses."""

from datetime import datetime
from typing import Any

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def classify_error(
    status_code: int,
    decoded_body: Any,
    *,
    now: datetime | None = None,
) -> str:
    """Build a timestamped error message from a provider error response.

    Each entry of a non-empty ``errors`` list becomes one line, prefixed with
    the offending parameter when the provider names one. Anything else is
    reported as a generic internal server error.

    Args:
        status_code: HTTP status code of the response.
        decoded_body: Decoded JSON body, or None if it could not be decoded.
        now: Timestamp to stamp lines with. Defaults to the current local time.

    Returns:
        Error message, one line per reported error.
    """
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)

    errors = decoded_body.get("errors") if isinstance(decoded_body, dict) else None
    if not errors or not isinstance(errors, list):
        return f"[{stamp}] Internal server error"

    lines = []
    for entry in errors:
        if not isinstance(entry, dict):
            lines.append(f"[{stamp}] Error: {entry}")
            continue
        message = entry.get("error", entry.get("message", ""))
        parameter = entry.get("parameter")
        if parameter:
            lines.append(f"[{stamp}] Error {parameter}: {message}")
        else:
            lines.append(f"[{stamp}] Error: {message}")

    return "\n".join(lines)
