"""
Unit Tests for command dispatch.

`dispatch` is exercised with an in-memory BeeminderApi; `execute` with the
FakeBeeminder transport, to check what reaches the network and what does not.
"""

from collections.abc import Sequence
from datetime import datetime, timezone

import pytest

from conftest import TOKEN, USERNAME
from core.config import load_settings
from core.domain.commands import (
    CreateDatapoint,
    DeleteDatapoint,
    ListDatapoints,
    ListGoals,
    PutDatapoints,
    ShowGoal,
    ShowUser,
)
from core.domain.errors import ConfigurationError, DatapointParseError
from core.domain.models import Datapoint, Goal, User
from core.interfaces.beeminder_api import BeeminderApi
from core.services.dispatcher import dispatch, execute


class RecordingApi:
    """BeeminderApi that records calls and returns canned models."""

    def __init__(self, user: User, goal: Goal, datapoint: Datapoint) -> None:
        self.user = user
        self.goal = goal
        self.datapoint = datapoint
        self.calls: list[tuple] = []

    async def get_user(self) -> User:
        self.calls.append(("get_user",))
        return self.user

    async def list_goals(self) -> list[Goal]:
        self.calls.append(("list_goals",))
        return [self.goal]

    async def get_goal(self, goal: str) -> Goal:
        self.calls.append(("get_goal", goal))
        return self.goal

    async def list_datapoints(self, goal: str) -> list[Datapoint]:
        self.calls.append(("list_datapoints", goal))
        return [self.datapoint]

    async def create_datapoint(self, goal, value, *, timestamp=None, daystamp=None, comment=None, request_id=None):
        self.calls.append(("create_datapoint", goal, value, timestamp, daystamp, comment, request_id))

    async def create_datapoints(self, goal: str, datapoints: Sequence[Datapoint]) -> None:
        self.calls.append(("create_datapoints", goal, list(datapoints)))

    async def delete_datapoint(self, goal: str, datapoint_id: str) -> None:
        self.calls.append(("delete_datapoint", goal, datapoint_id))


@pytest.fixture
def recording_api(user_payload, goal_payload, datapoint_payload) -> RecordingApi:
    return RecordingApi(
        User.model_validate(user_payload),
        Goal.model_validate(goal_payload),
        Datapoint.model_validate(datapoint_payload),
    )


# =============================================================================
# dispatch
# =============================================================================


class TestDispatch:
    """One command, one API call."""

    def test_recording_api_satisfies_protocol(self, recording_api):
        assert isinstance(recording_api, BeeminderApi)

    async def test_show_user(self, recording_api):
        result = await dispatch(ShowUser(), recording_api, username=USERNAME)

        assert result is recording_api.user
        assert recording_api.calls == [("get_user",)]

    async def test_list_goals(self, recording_api):
        result = await dispatch(ListGoals(), recording_api, username=USERNAME)

        assert result == [recording_api.goal]

    async def test_show_goal(self, recording_api):
        await dispatch(ShowGoal(goal="running"), recording_api, username=USERNAME)

        assert recording_api.calls == [("get_goal", "running")]

    async def test_list_datapoints(self, recording_api):
        result = await dispatch(ListDatapoints(goal="running"), recording_api, username=USERNAME)

        assert result == [recording_api.datapoint]
        assert recording_api.calls == [("list_datapoints", "running")]

    async def test_create_datapoint_is_silent(self, recording_api):
        command = CreateDatapoint(goal="running", value=2.0, daystamp="20230105", request_id="r1")

        result = await dispatch(command, recording_api, username=USERNAME)

        assert result is None
        assert recording_api.calls == [("create_datapoint", "running", 2.0, None, "20230105", None, "r1")]

    async def test_put_parses_then_submits_once(self, recording_api):
        text = "2023-01-05 10:30:00 12.5 'ran 5k'\n2023-01-06 07:00:00 3\n"

        result = await dispatch(PutDatapoints(goal="running", text=text), recording_api, username=USERNAME)

        assert result is None
        [(name, goal, points)] = recording_api.calls
        assert (name, goal) == ("create_datapoints", "running")
        assert [p.value for p in points] == [12.5, 3.0]
        assert points[0].timestamp == datetime(2023, 1, 5, 10, 30, tzinfo=timezone.utc)

    async def test_put_with_bad_line_submits_nothing(self, recording_api):
        text = "2023-01-05 10:30:00 1\n2023-01-06 10:30:00 2\nhello world\n"

        with pytest.raises(DatapointParseError, match="hello world"):
            await dispatch(PutDatapoints(goal="running", text=text), recording_api, username=USERNAME)

        assert recording_api.calls == []

    async def test_delete_datapoint(self, recording_api):
        result = await dispatch(DeleteDatapoint(goal="running", id="abc"), recording_api, username=USERNAME)

        assert result is None
        assert recording_api.calls == [("delete_datapoint", "running", "abc")]


# =============================================================================
# execute
# =============================================================================


class TestExecute:
    """Credential resolution happens before any request."""

    async def test_missing_credentials_never_reach_network(self, fake_beeminder):
        with pytest.raises(ConfigurationError):
            await execute(ListGoals(), load_settings(), transport=fake_beeminder.transport)

        assert fake_beeminder.requests == []

    async def test_missing_token_never_reaches_network(self, fake_beeminder):
        with pytest.raises(ConfigurationError) as excinfo:
            await execute(ShowUser(), load_settings(username=USERNAME), transport=fake_beeminder.transport)

        assert excinfo.value.missing == ("auth_token",)
        assert fake_beeminder.requests == []

    async def test_round_trip(self, fake_beeminder, goal_payload):
        fake_beeminder.respond("GET", "/goals/running.json", json=goal_payload)
        settings = load_settings(username=USERNAME, auth_token=TOKEN)

        goal = await execute(ShowGoal(goal="running"), settings, transport=fake_beeminder.transport)

        assert goal.slug == "running"
        [request] = fake_beeminder.requests
        assert str(request.url) == (
            f"https://www.beeminder.com/api/v1/users/{USERNAME}/goals/running.json?auth_token={TOKEN}"
        )

    async def test_put_parse_error_before_network(self, fake_beeminder):
        settings = load_settings(username=USERNAME, auth_token=TOKEN)

        with pytest.raises(DatapointParseError):
            await execute(PutDatapoints(goal="running", text="oops"), settings, transport=fake_beeminder.transport)

        assert fake_beeminder.requests == []
