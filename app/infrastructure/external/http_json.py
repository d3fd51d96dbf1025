"""Helpers shared by the JSON-over-HTTP adapters."""

from __future__ import annotations

import httpx


def error_message(response: httpx.Response, default: str) -> str:
    """Return the "error" field of a JSON error body, or default."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return default


def build_client(base_url: str, timeout: float) -> httpx.Client:
    """Return a sync httpx client for base_url sending JSON."""
    return httpx.Client(
        base_url=base_url,
        timeout=timeout,
        headers={"Content-Type": "application/json"},
    )
