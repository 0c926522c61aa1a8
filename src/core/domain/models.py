"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Decoding a response body *is* validation: a body that does not match the
  expected shape raises `ValidationError` instead of printing garbage.
- The service speaks epoch seconds; in memory we keep aware UTC datetimes and
  serialize them back to integers.

Note:
- These models describe *what* Beeminder returns, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer
from pydantic.config import ConfigDict

EpochSeconds = Annotated[
    datetime,
    PlainSerializer(lambda value: int(value.timestamp()), return_type=int),
]


class Credentials(BaseModel):
    """Effective (username, token) pair, built only by `core.config.resolve_credentials`."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1, description="Beeminder username.")
    auth_token: str = Field(..., min_length=1, repr=False, description="Personal API token.")


class User(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    username: str
    timezone: str
    goals: list[str] = Field(default_factory=list, description="Goal slugs.")
    created_at: int
    updated_at: int
    urgency_load: int


class Goal(BaseModel):
    model_config = ConfigDict(extra="ignore")

    slug: str
    title: str
    goal_type: str
    yaxis: str
    goaldate: EpochSeconds
    losedate: EpochSeconds
    updated_at: EpochSeconds
    safesum: str


class Datapoint(BaseModel):
    """A single measurement on a goal.

    `id` is server-assigned for listed datapoints; for datapoints parsed from
    standard input it is a deterministic string so the service can deduplicate
    resubmissions of the same line.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    timestamp: EpochSeconds
    daystamp: str = Field(..., description="Calendar day, YYYYMMDD.")
    value: float
    comment: str | None = None
    updated_at: EpochSeconds
    requestid: str | None = None
