"""State shared by the root callback and every subcommand.

Lives in its own module so `cli.main` and `cli.doctor` can both import it
without importing each other.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from core.config import AppSettings


@dataclass
class CliState:
    settings: AppSettings | None = None
    pretty: bool = False
    # Tests inject an `httpx.MockTransport` here through `CliRunner.invoke(obj=...)`.
    transport: httpx.AsyncBaseTransport | None = None
