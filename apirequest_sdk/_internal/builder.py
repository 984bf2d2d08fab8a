"""Request descriptor construction."""

import json
from collections.abc import Mapping
from typing import Any

import httpx

from apirequest_sdk._internal.http import DEFAULT_TIMEOUT, build_user_agent
from apirequest_sdk.exceptions import RequestBuildError
from apirequest_sdk.models.descriptor import Method, RequestDescriptor

JSON_CONTENT_TYPE = "application/json"


def resolve_url(
    base_url: str,
    path: str | None = None,
    url_params: Mapping[str, str] | None = None,
) -> str:
    """Resolve the request URL.

    `path` replaces the path component of `base_url`; it is not appended.
    `url_params` replaces the query string.

    Raises:
        RequestBuildError: If the URL cannot be resolved.
    """
    try:
        url = httpx.URL(base_url)
        if not url.scheme or not url.host:
            raise RequestBuildError(f"Base URL must be absolute: {base_url!r}")
        if path is not None:
            url = url.copy_with(path=path)
        url = url.copy_with(params=dict(url_params) if url_params else None)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise RequestBuildError(f"Could not resolve URL from {base_url!r} and path {path!r}: {e}") from e
    return str(url)


def build_headers(
    additional_headers: Mapping[str, str] | None = None,
    *,
    user_agent: str | None = None,
) -> dict[str, str]:
    """Build request headers.

    Fixed headers are set first; `additional_headers` overwrite them, matching
    names case-insensitively.
    """
    headers = {
        "Accept": JSON_CONTENT_TYPE,
        "Content-Type": JSON_CONTENT_TYPE,
        "Cache-Control": "no-cache",
        "User-Agent": user_agent or build_user_agent(),
    }
    for name, value in (additional_headers or {}).items():
        for existing in [key for key in headers if key.lower() == name.lower()]:
            del headers[existing]
        headers[name] = value
    return headers


def encode_body(body_params: Mapping[str, Any] | None) -> bytes | None:
    """Serialise body params to compact JSON bytes.

    Raises:
        RequestBuildError: If a value is not JSON-serialisable.
    """
    if body_params is None:
        return None
    try:
        return json.dumps(body_params, separators=(",", ":"), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestBuildError(f"Body params are not JSON-serialisable: {e}") from e


def build_descriptor(
    base_url: str,
    *,
    method: Method | str = Method.POST,
    path: str | None = None,
    url_params: Mapping[str, str] | None = None,
    body_params: Mapping[str, Any] | None = None,
    additional_headers: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
) -> RequestDescriptor:
    """Build a transport-ready descriptor from declarative request fields.

    Args:
        base_url: Absolute base URL.
        method: HTTP method.
        path: Optional path that replaces the base URL's path.
        url_params: Query parameters.
        body_params: JSON body parameters.
        additional_headers: Headers overlaid on the fixed headers.
        timeout: Transport timeout in seconds.
        user_agent: Optional override of the computed User-Agent.

    Returns:
        The resolved RequestDescriptor.

    Raises:
        RequestBuildError: If the URL cannot be resolved or the body cannot
            be serialised. No network activity happens in either case.
    """
    try:
        method = Method(str(method).upper())
    except ValueError as e:
        raise RequestBuildError(f"Unsupported HTTP method: {str(method).upper()}") from e

    url = resolve_url(base_url, path, url_params)
    body = encode_body(body_params)
    return RequestDescriptor(
        url=url,
        method=method,
        headers=build_headers(additional_headers, user_agent=user_agent),
        body=body,
        timeout=timeout,
        use_cache=False,
    )
