"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages.
Handles two response shapes:

- Envelope errors (400/401/403/404/500): {"success": false, "message": "...", ...}
- Raw FastAPI errors: {"detail": "..."} or {"detail": [{"loc": [...], "msg": "..."}]}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "message" in body:
        message = str(body["message"])
        if "available" in body:
            message += f" (available={body['available']}, requested={body.get('requested')})"
        return message

    detail = body.get("detail")
    if isinstance(detail, list):
        parts = []
        for err in detail:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)
    if detail is not None:
        return str(detail)

    return str(body)[:300]


def is_stock_rejection(response: Response) -> bool:
    """True when an order was refused because a product ran out of stock."""
    if response.status_code != 400:
        return False
    try:
        return "available" in response.json()
    except ValueError:
        return False
