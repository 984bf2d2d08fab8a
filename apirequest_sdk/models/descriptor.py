"""Transport-agnostic request descriptor."""

import json
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from apirequest_sdk._internal.http import DEFAULT_TIMEOUT


class Method(StrEnum):
    """HTTP methods an API request can use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


class RequestDescriptor(BaseModel):
    """Fully resolved request, ready to hand to a transport.

    Fields:
        url: Absolute URL including the query string.
        method: HTTP method.
        headers: Final request headers (fixed headers plus caller overrides).
        body: JSON-encoded body, or None when the request has no body params.
        timeout: Transport timeout in seconds.
        use_cache: Whether the transport may answer from a cache. Always False
            for descriptors produced by the request builder.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    method: Method
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes | None = None
    timeout: float = DEFAULT_TIMEOUT
    use_cache: bool = False

    def json_body(self) -> Any:
        """Return the decoded JSON body, or None if there is no body."""
        if self.body is None:
            return None
        return json.loads(self.body)
