"""One value type per subcommand.

The CLI builds exactly one of these and hands it to
`core.services.dispatcher.dispatch`, which matches on the type.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShowUser:
    pass


@dataclass(frozen=True)
class ListGoals:
    pass


@dataclass(frozen=True)
class ShowGoal:
    goal: str


@dataclass(frozen=True)
class ListDatapoints:
    goal: str


@dataclass(frozen=True)
class CreateDatapoint:
    goal: str
    value: float
    timestamp: int | None = None
    daystamp: str | None = None
    comment: str | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class PutDatapoints:
    """Bulk-create from line-oriented text (normally standard input)."""

    goal: str
    text: str


@dataclass(frozen=True)
class DeleteDatapoint:
    goal: str
    id: str


Command = (
    ShowUser
    | ListGoals
    | ShowGoal
    | ListDatapoints
    | CreateDatapoint
    | PutDatapoints
    | DeleteDatapoint
)
