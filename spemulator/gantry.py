"""Gantry service emulator."""

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

SERVICE_NAME = "/gantry_emulator_service"
LOGGER = logging.getLogger("gantry_emulator")

_SIMPLE_COMMANDS = ("calibrate", "lock", "unlock")
_UNKNOWN = "Failed, unknown command"


@dataclass
class GantryRequest:
    command: str
    position: str = ""
    emulated_response: EmulatedResponse = field(default_factory=EmulatedResponse)


@dataclass(frozen=True)
class GantryResponse:
    success: bool
    failure_cause: str
    info: str


async def handle_gantry_request(
    request: GantryRequest,
    rng: RandomSource = random,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> GantryResponse:
    """Emulate one gantry command and produce its response."""
    emulated = request.emulated_response
    await sleep(emulate_delay(emulated, rng) / 1000)
    fail = emulate_failure(emulated, rng)
    cause = emulate_cause(emulated, rng)

    command = request.command
    if command == "move":
        LOGGER.info("Got request to move to %s.", request.position)
        success_info = f"Succeeded to move to {request.position}."
        failure_info = f"Failed to move to {request.position} due to {cause}."
    elif command in _SIMPLE_COMMANDS:
        LOGGER.info("Got request to %s.", command)
        success_info = f"Succeeded to {command}."
        failure_info = f"Failed to {command} due to {cause}."
    else:
        LOGGER.warning("Unknown command")
        fail = True
        success_info = failure_info = _UNKNOWN

    if fail:
        LOGGER.error("%s", failure_info)
        return GantryResponse(success=False, failure_cause=cause, info=failure_info)
    LOGGER.info("%s", success_info)
    return GantryResponse(success=True, failure_cause="", info=success_info)


async def serve_gantry(
    calls: AsyncIterable[ServiceCall[GantryRequest, GantryResponse]],
    rng: RandomSource = random,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> None:
    """Answer every incoming gantry call in turn until the stream ends."""
    async for call in calls:
        call.respond(await handle_gantry_request(call.message, rng, sleep))