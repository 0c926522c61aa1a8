"""httpx wrapper.

Why a wrapper:
- Standardizes timeout and headers (client signature, JSON accept) for every call.
- Eases testing: tests inject an `httpx.MockTransport` instead of the network.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

JSON_CONTENT_TYPE = "application/json"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the client's defaults.

    No retries and no redirects beyond httpx's defaults: failures surface as-is.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_CONTENT_TYPE,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )
