"""
HTTP helpers.

One GET-JSON entry point for upstream clients (currently the geocoder). Non-2xx
responses raise so callers decide whether to fail or fall back to cached data.
"""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_USER_AGENT = "serabutan/0.1.0"


def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_seconds: float = 15,
    client: httpx.Client | None = None,
) -> Any:
    """GET `url` and return the decoded JSON body.

    When `client` is given it is used as-is (and left open); otherwise a short-lived
    client with `timeout_seconds` is created for the call.

    Raises:
        httpx.HTTPError: On transport errors or non-2xx status codes.
        ValueError: If the body is not valid JSON.
    """
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        request_headers.update(headers)

    if client is not None:
        return _get(client, url, params, request_headers)
    with httpx.Client(timeout=timeout_seconds) as owned:
        return _get(owned, url, params, request_headers)


def _get(client: httpx.Client, url: str, params: dict[str, Any] | None, headers: dict[str, str]) -> Any:
    resp = client.get(url, params=params, headers=headers)
    resp.raise_for_status()
    return resp.json()
