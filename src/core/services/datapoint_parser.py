"""Parse line-oriented text into datapoints.

Each line reads `YYYY-MM-DD HH:MM:SS <value> ['<comment>']`, e.g.

    2023-01-05 10:30:00 12.5 'ran 5k'

Known quirk: the timestamp is local wall-clock text but is stored as UTC, with
no timezone conversion. Consumers of already-submitted datapoints rely on it.

All-or-nothing: the first malformed line raises `DatapointParseError` and no
datapoints are returned.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timezone

from core.domain.errors import DatapointParseError
from core.domain.models import Datapoint

LINE_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) ([0-9]+(\.[0-9]+)?)( '([^']+)')?"
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
ID_TAG = "beeminder"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def split_lines(text: str) -> list[str]:
    """Split on LF only, dropping one trailing CR per line and a final empty line.

    Other separators known to `str.splitlines` (form feed, LINE SEPARATOR, ...)
    stay inside the line.
    """

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_line(line: str, goal: str, *, updated_at: datetime) -> Datapoint:
    match = LINE_PATTERN.search(line)
    if match is None:
        raise DatapointParseError(line)

    try:
        stamp = datetime.strptime(match.group(1), TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise DatapointParseError(line, reason=f"Invalid date ({exc})") from exc

    return Datapoint(
        id=f"{ID_TAG} {goal} {stamp}",
        timestamp=stamp.replace(tzinfo=timezone.utc),
        daystamp=stamp.strftime("%Y%m%d"),
        value=float(match.group(2)),
        comment=match.group(5),
        updated_at=updated_at,
        requestid=None,
    )


def parse_datapoints(
    text: str,
    goal: str,
    *,
    now: Callable[[], datetime] = _utcnow,
) -> list[Datapoint]:
    """Parse every line of `text`, preserving input order.

    No deduplication, no sorting. `now` stamps `updated_at` (injectable for tests).
    """

    updated_at = now()
    return [parse_line(line, goal, updated_at=updated_at) for line in split_lines(text)]
