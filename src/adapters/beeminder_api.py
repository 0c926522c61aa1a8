"""Beeminder REST API client over httpx.

Service contract quirks kept on purpose:
- POST bodies are form-encoded but declare `Content-Type: application/json`.
- The bulk endpoint takes a single form field, `datapoints`, holding a JSON array.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import TypeAdapter

from adapters.beeminder_url import BeeminderUrl
from adapters.http_client import JSON_CONTENT_TYPE
from core.domain.models import Datapoint, Goal, User
from core.interfaces.beeminder_api import BeeminderApi

_GOALS = TypeAdapter(list[Goal])
_DATAPOINTS = TypeAdapter(list[Datapoint])


def format_value(value: float) -> str:
    """`1.0` -> `"1"`, `12.5` -> `"12.5"`."""

    if value.is_integer():
        return str(int(value))
    return repr(value)


class BeeminderClient(BeeminderApi):
    def __init__(self, client: httpx.AsyncClient, url: BeeminderUrl) -> None:
        self._client = client
        self._url = url

    async def _get_json(self, part: str) -> Any:
        response = await self._client.get(self._url.build(part))
        response.raise_for_status()
        return response.json()

    async def _post_form(self, part: str, form: dict[str, str]) -> None:
        response = await self._client.post(
            self._url.build(part),
            data=form,
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )
        response.raise_for_status()

    async def get_user(self) -> User:
        return User.model_validate(await self._get_json(".json"))

    async def list_goals(self) -> list[Goal]:
        return _GOALS.validate_python(await self._get_json("/goals.json"))

    async def get_goal(self, goal: str) -> Goal:
        return Goal.model_validate(await self._get_json(f"/goals/{goal}.json"))

    async def list_datapoints(self, goal: str) -> list[Datapoint]:
        return _DATAPOINTS.validate_python(await self._get_json(f"/goals/{goal}/datapoints.json"))

    async def create_datapoint(
        self,
        goal: str,
        value: float,
        *,
        timestamp: int | None = None,
        daystamp: str | None = None,
        comment: str | None = None,
        request_id: str | None = None,
    ) -> None:
        form = {"value": format_value(value)}
        if timestamp is not None:
            form["timestamp"] = str(timestamp)
        if daystamp is not None:
            form["daystamp"] = daystamp
        if comment is not None:
            form["comment"] = comment
        if request_id is not None:
            form["requestid"] = request_id
        await self._post_form(f"/goals/{goal}/datapoints.json", form)

    async def create_datapoints(self, goal: str, datapoints: Sequence[Datapoint]) -> None:
        payload = json.dumps(_DATAPOINTS.dump_python(list(datapoints), mode="json"))
        await self._post_form(f"/goals/{goal}/datapoints/create_all.json", {"datapoints": payload})

    async def delete_datapoint(self, goal: str, datapoint_id: str) -> None:
        response = await self._client.delete(
            self._url.build(f"/goals/{goal}/datapoints/{datapoint_id}.json")
        )
        response.raise_for_status()
