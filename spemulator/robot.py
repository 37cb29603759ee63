"""Robot service emulator."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import AsyncIterable, Awaitable, Callable

from spemulator.behaviour import (
    EmulatedResponse,
    RandomSource,
    ServiceCall,
    emulate_cause,
    emulate_delay,
    emulate_failure,
)

SERVICE_NAME = "/robot_emulator_service"
LOGGER = logging.getLogger("robot_emulator")

MOUNTABLE_TOOLS = ("gripper_tool", "suction_tool", "none")
UNKNOWN_TOOL = "UNKNOWN"

_SIMPLE_COMMANDS = ("pick", "place", "mount", "unmount", "check_mounted_tool")
_UNKNOWN = "Failed, unknown command"


@dataclass
class RobotRequest:
    command: str
    position: str = ""
    emulated_response: EmulatedResponse = field(default_factory=EmulatedResponse)


@dataclass(frozen=True)
class RobotResponse:
    success: bool
    failure_cause: str
    info: str
    checked_mounted_tool: str


async def handle_robot_request(
    request: RobotRequest,
    rng: RandomSource = random,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> RobotResponse:
    """Emulate one robot command and produce its response."""
    emulated = request.emulated_response
    await sleep(emulate_delay(emulated, rng) / 1000)
    fail = emulate_failure(emulated, rng)
    cause = emulate_cause(emulated, rng)

    tool = UNKNOWN_TOOL
    command = request.command
    if command == "move":
        LOGGER.info("Got request to move to %s.", request.position)
        success_info = f"Succeeded to move to {request.position}."
        failure_info = f"Failed to move to {request.position} due to {cause}."
    elif command in _SIMPLE_COMMANDS:
        if command == "check_mounted_tool":
            tool = str(rng.choice(MOUNTABLE_TOOLS))
        LOGGER.info("Got request to %s.", command)
        success_info = f"Succeeded to {command}."
        failure_info = f"Failed to {command} due to {cause}."
    else:
        LOGGER.warning("Unknown command")
        fail = True
        success_info = failure_info = _UNKNOWN

    if fail:
        LOGGER.error("%s", failure_info)
        return RobotResponse(False, cause, failure_info, tool)
    LOGGER.info("%s", success_info)
    return RobotResponse(True, "", success_info, tool)


async def serve_robot(
    calls: AsyncIterable[ServiceCall[RobotRequest, RobotResponse]],
    rng: RandomSource = random,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> None:
    """Answer every incoming robot call in turn until the stream ends."""
    async for call in calls:
        call.respond(await handle_robot_request(call.message, rng, sleep))