"""Command dispatch.

`execute` is the single entry point used by the CLI: credentials are resolved
from the already-loaded settings, then one command runs against one client.
`dispatch` holds the command-to-call mapping and only needs a `BeeminderApi`,
which keeps it testable without HTTP.
"""

from __future__ import annotations

from typing import assert_never

import httpx
from loguru import logger
from pydantic import BaseModel

from adapters.beeminder_api import BeeminderClient
from adapters.beeminder_url import BeeminderUrl
from adapters.http_client import build_async_client
from core.config import AppSettings, resolve_credentials
from core.domain.commands import (
    Command,
    CreateDatapoint,
    DeleteDatapoint,
    ListDatapoints,
    ListGoals,
    PutDatapoints,
    ShowGoal,
    ShowUser,
)
from core.interfaces.beeminder_api import BeeminderApi
from core.services.datapoint_parser import parse_datapoints

Result = BaseModel | list[BaseModel] | None


async def dispatch(command: Command, api: BeeminderApi, *, username: str) -> Result:
    """Run one command. Returns what should be printed, `None` for silent success."""

    match command:
        case ShowUser():
            logger.info("Retrieving user data for {}", username)
            return await api.get_user()
        case ListGoals():
            logger.info("Retrieving goals for user {}", username)
            return await api.list_goals()
        case ShowGoal(goal=goal):
            logger.info("Retrieving goal data for goal {} user {}", goal, username)
            return await api.get_goal(goal)
        case ListDatapoints(goal=goal):
            logger.info("Retrieving datapoints for goal {} user {}", goal, username)
            return await api.list_datapoints(goal)
        case CreateDatapoint(goal=goal):
            logger.info("Creating new datapoint for goal {} user {}", goal, username)
            await api.create_datapoint(
                goal,
                command.value,
                timestamp=command.timestamp,
                daystamp=command.daystamp,
                comment=command.comment,
                request_id=command.request_id,
            )
            return None
        case PutDatapoints(goal=goal, text=text):
            logger.info("Creating datapoints from standard input for goal {} user {}", goal, username)
            datapoints = parse_datapoints(text, goal)
            logger.info("Parsed {} datapoints", len(datapoints))
            await api.create_datapoints(goal, datapoints)
            return None
        case DeleteDatapoint(goal=goal, id=datapoint_id):
            logger.info("Deleting datapoint {} for goal {} user {}", datapoint_id, goal, username)
            await api.delete_datapoint(goal, datapoint_id)
            return None
        case _:
            assert_never(command)


async def execute(
    command: Command,
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Result:
    """Resolve credentials, open a client and dispatch `command`.

    `ConfigurationError` is raised before any client exists, so a missing
    credential never reaches the network.
    """

    credentials = resolve_credentials(settings)
    logger.info("Authenticating as {}", credentials.username)
    url = BeeminderUrl(credentials.username, credentials.auth_token, settings.api_root)
    async with build_async_client(settings, transport=transport) as client:
        api = BeeminderClient(client, url)
        return await dispatch(command, api, username=credentials.username)
