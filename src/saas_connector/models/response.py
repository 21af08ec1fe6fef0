"""Provider response model."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from saas_connector.utils.http_client import DecodeError


class Response(BaseModel):
    """Status code and raw body of a completed provider call.

    The body is decoded as JSON only when first asked for, so callers that
    never look at the content do not pay for parsing large payloads.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., description="HTTP status code")
    body: bytes = Field(default=b"", description="Raw response body")

    _decoded: Any = PrivateAttr(default=None)
    _is_decoded: bool = PrivateAttr(default=False)

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 text."""
        return self.body.decode("utf-8", errors="replace")

    def is_successful(self) -> bool:
        """Check for a 2xx status code."""
        return 200 <= self.status_code < 300

    def decode(self) -> Any:
        """Parse the body as JSON.

        Returns:
            Decoded JSON document, cached after the first call.

        Raises:
            DecodeError: If the body is not valid JSON.
        """
        if not self._is_decoded:
            try:
                self._decoded = json.loads(self.body)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise DecodeError(f"Invalid JSON in response body: {e}", self.status_code) from e
            self._is_decoded = True
        return self._decoded

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level key from the decoded body."""
        data = self.decode()
        if isinstance(data, dict):
            return data.get(key, default)
        return default

    def __getitem__(self, key: str) -> Any:
        data = self.decode()
        if not isinstance(data, dict):
            raise KeyError(key)
        return data[key]
