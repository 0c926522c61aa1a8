"""Contract of the Beeminder API client.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- `adapters.beeminder_api.BeeminderClient` implements it over httpx; tests can
  pass any object with the same coroutines.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from core.domain.models import Datapoint, Goal, User


@runtime_checkable
class BeeminderApi(Protocol):
    """One coroutine per remote call.

    Design rules:
    - Each method performs exactly one HTTP round trip.
    - Transport and status errors propagate; nothing is retried.
    """

    async def get_user(self) -> User: ...

    async def list_goals(self) -> list[Goal]: ...

    async def get_goal(self, goal: str) -> Goal: ...

    async def list_datapoints(self, goal: str) -> list[Datapoint]: ...

    async def create_datapoint(
        self,
        goal: str,
        value: float,
        *,
        timestamp: int | None = None,
        daystamp: str | None = None,
        comment: str | None = None,
        request_id: str | None = None,
    ) -> None: ...

    async def create_datapoints(self, goal: str, datapoints: Sequence[Datapoint]) -> None: ...

    async def delete_datapoint(self, goal: str, datapoint_id: str) -> None: ...
