"""
Root Pytest Fixtures.

Every test runs with:
- no BEEMINDER_* variables from the developer's shell,
- a throwaway config directory (XDG_CONFIG_HOME and BEEMINDER_CONFIG_FILE),
- a temporary working directory, so no stray `.env` is read.

HTTP never leaves the process: `fake_beeminder` provides an
`httpx.MockTransport` that records every request it receives.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest
from loguru import logger

API_ROOT = "https://www.beeminder.com/api/v1"
USERNAME = "alice"
TOKEN = "s3cr3t"

BEEMINDER_ENV_VARS = (
    "BEEMINDER_USERNAME",
    "BEEMINDER_AUTH_TOKEN",
    "BEEMINDER_USER",
    "BEEMINDER_TOKEN",
    "BEEMINDER_API_ROOT",
    "BEEMINDER_HTTP_TIMEOUT_SECONDS",
    "BEEMINDER_USER_AGENT",
    "BEEMINDER_CONFIG_FILE",
)


# =============================================================================
# Environment isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point config lookups at tmp_path and clear BEEMINDER_* variables."""
    for name in BEEMINDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("BEEMINDER_CONFIG_FILE", str(config_home / "beeminder" / "default-config.toml"))
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    yield config_home
    logger.remove()


@pytest.fixture
def write_config(isolated_env: Path) -> Callable[..., Path]:
    """Write the TOML config file with the given keys."""

    def _write(**values: str) -> Path:
        path = isolated_env / "beeminder" / "default-config.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [f'{key} = "{value}"' for key, value in values.items()]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


# =============================================================================
# Sample payloads (shape of the Beeminder API responses)
# =============================================================================


@pytest.fixture
def user_payload() -> dict[str, Any]:
    return {
        "id": "5f2b",
        "username": USERNAME,
        "timezone": "Europe/Berlin",
        "goals": ["running", "reading"],
        "created_at": 1600000000,
        "updated_at": 1672914600,
        "urgency_load": 3,
        "deadbeat": False,
    }


@pytest.fixture
def goal_payload() -> dict[str, Any]:
    return {
        "slug": "running",
        "title": "Run every week",
        "goal_type": "hustler",
        "yaxis": "km",
        "goaldate": 1704067200,
        "losedate": 1673049599,
        "updated_at": 1672914600,
        "safesum": "+2 due in 1 day",
        "pledge": 5.0,
    }


@pytest.fixture
def datapoint_payload() -> dict[str, Any]:
    return {
        "id": "63b6a2e8",
        "timestamp": 1672914600,
        "daystamp": "20230105",
        "value": 12.5,
        "comment": "ran 5k",
        "updated_at": 1672914700,
        "requestid": None,
    }


# =============================================================================
# Fake Beeminder server
# =============================================================================


@dataclass
class FakeBeeminder:
    """Route table keyed by (method, path); unknown routes answer 404."""

    routes: dict[tuple[str, str], Callable[[], httpx.Response]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def respond(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
    ) -> None:
        def _build() -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json if json is not None else {})

        self.routes[(method, f"/api/v1/users/{USERNAME}{path}")] = _build

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        build = self.routes.get((request.method, request.url.path))
        if build is None:
            return httpx.Response(404, json={"errors": {"message": "not found"}})
        return build()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_beeminder() -> FakeBeeminder:
    return FakeBeeminder()
