"""Shared HTTP client configuration."""

import platform

import httpx

from apirequest_sdk._version import __version__

DEFAULT_TIMEOUT = 60.0


def build_user_agent() -> str:
    """Build the User-Agent sent with every request.

    Returns:
        A string like ``apirequest-sdk/0.1.0 python/3.12.1 Linux/6.5.0``.
    """
    return (
        f"apirequest-sdk/{__version__} "
        f"python/{platform.python_version()} "
        f"{platform.system() or 'unknown'}/{platform.release() or 'unknown'}"
    )


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=timeout,
        base_url=base_url or "",
        follow_redirects=True,
        headers={"User-Agent": build_user_agent()},
    )
