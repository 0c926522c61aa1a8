"""Authenticated URLs for the Beeminder REST API."""

from __future__ import annotations

from urllib.parse import urlencode

DEFAULT_API_ROOT = "https://www.beeminder.com/api/v1"


class BeeminderUrl:
    """Builds `<root>/users/<username><part>?auth_token=<token>`.

    Only the token is query-encoded; username and part are used verbatim.
    Pure and idempotent, nothing is cached.
    """

    def __init__(self, username: str, auth_token: str, api_root: str = DEFAULT_API_ROOT) -> None:
        self._base = f"{api_root.rstrip('/')}/users/{username}"
        self._query = urlencode({"auth_token": auth_token})

    @property
    def base(self) -> str:
        return self._base

    def build(self, part: str) -> str:
        return f"{self._base}{part}?{self._query}"

    def __repr__(self) -> str:
        # The token stays out of logs and tracebacks.
        return f"BeeminderUrl(base={self._base!r})"
