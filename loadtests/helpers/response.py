"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages.
Errors arrive as ``{"success": false, "error": {"kind": "...", "message": "..."}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract ``kind: message`` from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return f"{error.get('kind', 'error')}: {error.get('message', '')}"
    if error is not None:
        return str(error)

    # Unknown shape, stringify and truncate
    return str(body)[:300]


def error_kind(response: Response) -> str | None:
    try:
        error = response.json().get("error")
    except Exception:
        return None
    return error.get("kind") if isinstance(error, dict) else None
