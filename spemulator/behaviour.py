"""Emulated execution time, failure rate and failure cause shared by the emulators."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Protocol, Sequence, TypeVar

EMULATOR_NODE_ID = "micro_sp_emulator"
NODE_ID = "micro_sp_emulator"
TEST_TICKER_RATE = 1000  # milliseconds
CLIENT_TICKER_RATE = 100  # milliseconds
PUBLISHER_TICKER_RATE = 100  # milliseconds
NUMBER_OF_TEST_CASES = 20

GENERIC_FAILURE = "generic_failure"


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the emulators draw from."""

    def randrange(self, stop: int) -> int: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[Any]) -> Any: ...


class EmulationMode(enum.IntEnum):
    """How an emulated quantity is chosen."""

    NONE = 0
    FIXED = 1
    RANDOM = 2


@dataclass
class EmulatedResponse:
    """Instructions on how a service call should behave."""

    emulate_execution_time: int = EmulationMode.NONE
    emulated_execution_time: int = 0
    emulate_failure_rate: int = EmulationMode.NONE
    emulated_failure_rate: int = 0
    emulate_failure_cause: int = EmulationMode.NONE
    emulated_failure_cause: list[str] = field(default_factory=list)


def emulate_delay(emulated: EmulatedResponse, rng: RandomSource = random) -> int:
    """Return the emulated execution time in milliseconds."""
    mode = emulated.emulate_execution_time
    if mode == EmulationMode.FIXED:
        return emulated.emulated_execution_time
    if mode == EmulationMode.RANDOM:
        if emulated.emulated_execution_time <= 0:
            raise ValueError("a random execution time needs a positive upper bound")
        return rng.randrange(emulated.emulated_execution_time)
    return 0


def emulate_failure(emulated: EmulatedResponse, rng: RandomSource = random) -> bool:
    """Decide whether the call fails."""
    mode = emulated.emulate_failure_rate
    if mode == EmulationMode.FIXED:
        return True
    if mode == EmulationMode.RANDOM:
        return rng.randint(0, 100) <= emulated.emulated_failure_rate
    return False


def emulate_cause(emulated: EmulatedResponse, rng: RandomSource = random) -> str:
    """Pick the failure cause reported if the call fails."""
    mode = emulated.emulate_failure_cause
    causes = emulated.emulated_failure_cause
    if mode in (EmulationMode.FIXED, EmulationMode.RANDOM) and not causes:
        raise ValueError("no failure causes to choose from")
    if mode == EmulationMode.FIXED:
        return str(causes[0])
    if mode == EmulationMode.RANDOM:
        return str(rng.choice(causes))
    return GENERIC_FAILURE


Req = TypeVar("Req")
Resp = TypeVar("Resp")


@dataclass
class ServiceCall(Generic[Req, Resp]):
    """One incoming service request awaiting a single response."""

    message: Req
    on_response: Callable[[Resp], None] | None = None
    response: Resp | None = field(default=None, init=False)
    _answered: bool = field(default=False, init=False, repr=False)

    @property
    def answered(self) -> bool:
        return self._answered

    def respond(self, response: Resp) -> None:
        """Send the response; a call can be answered only once."""
        if self._answered:
            raise RuntimeError("Could not send service response.")
        self._answered = True
        self.response = response
        if self.on_response is not None:
            self.on_response(response)