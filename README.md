# spemulator

Emulated services for a gantry and a robot. They answer commands the way
real equipment would, but each request decides how long it takes, whether
it fails and why. Use it to exercise a planner or controller against slow,
flaky or broken equipment, with none attached.

## Emulated behaviour

Every request carries an `EmulatedResponse` (from `spemulator.behaviour`)
with three switches, each an `EmulationMode` value (`NONE` = 0,
`FIXED` = 1, `RANDOM` = 2; any other value acts like `NONE`):

| Field pair                                                   | `NONE`            | `FIXED`                               | `RANDOM`                                              |
|--------------------------------------------------------------|-------------------|---------------------------------------|-------------------------------------------------------|
| `emulate_execution_time` / `emulated_execution_time` (ms)    | no delay          | exactly the given milliseconds        | a random whole number of ms from 0 up to, not including, the bound |
| `emulate_failure_rate` / `emulated_failure_rate`             | never fail        | always fail                           | fail when a draw from 0 to 100 inclusive is at most the rate |
| `emulate_failure_cause` / `emulated_failure_cause` (list)    | `generic_failure` | the first cause in the list           | a random cause from the list                          |

The same rules are available on their own:

- `emulate_delay(emulated, rng)` returns the delay in milliseconds. In
  `RANDOM` mode it raises `ValueError` if the bound is not positive.
- `emulate_failure(emulated, rng)` returns `True` if the call should fail.
- `emulate_cause(emulated, rng)` returns the cause string. In `FIXED` or
  `RANDOM` mode it raises `ValueError` if the list of causes is empty.

`rng` defaults to the `random` module; pass a seeded `random.Random` for
reproducible runs.

## Gantry

`spemulator.gantry.handle_gantry_request(request, rng, sleep)` is a
coroutine that takes a `GantryRequest` (`command`, `position`,
`emulated_response`) and returns a frozen `GantryResponse` (`success`,
`failure_cause`, `info`). Commands: `move`, `calibrate`, `lock`, `unlock`.

```python
import asyncio, random
from spemulator.behaviour import EmulatedResponse, EmulationMode
from spemulator.gantry import GantryRequest, handle_gantry_request

async def no_wait(seconds):
    pass

request = GantryRequest(
    "lock",
    emulated_response=EmulatedResponse(emulate_failure_rate=EmulationMode.FIXED),
)
response = asyncio.run(handle_gantry_request(request, random.Random(1), no_wait))
# GantryResponse(success=False, failure_cause='generic_failure',
#                info='Failed to lock due to generic_failure.')
```

On success `info` reads like `Succeeded to move to home.` and
`failure_cause` is empty. An unknown command always fails with the info
`Failed, unknown command`. The delay is awaited through `sleep`, which is
given seconds and defaults to `asyncio.sleep`. The failure cause is worked
out for every request, so a `FIXED` or `RANDOM` cause mode with an empty
list raises `ValueError` even when the request succeeds.

## Robot

`spemulator.robot.handle_robot_request(request, rng, sleep)` works the same
way with a `RobotRequest` and returns a `RobotResponse`, which also has
`checked_mounted_tool`. Commands: `move`, `pick`, `place`, `mount`,
`unmount`, `check_mounted_tool`. For `check_mounted_tool` the tool is drawn
from `MOUNTABLE_TOOLS` (`gripper_tool`, `suction_tool`, `none`); for every
other command it is `UNKNOWN`.

## Serving calls

`serve_gantry(calls, rng, sleep)` and `serve_robot(calls, rng, sleep)` take
an async iterable of `ServiceCall` objects, handle them one at a time and
answer each through `ServiceCall.respond`. They return when the iterable
is exhausted.

A `ServiceCall` holds the request as `message`. `respond(response)` stores
the response in `response`, sets `answered` and passes it to the optional
`on_response` callback. Answering a call a second time raises
`RuntimeError`.

The service names the emulators are meant to be offered under are
`spemulator.gantry.SERVICE_NAME` (`/gantry_emulator_service`) and
`spemulator.robot.SERVICE_NAME` (`/robot_emulator_service`).

## Logging

The emulators log to the `gantry_emulator` and `robot_emulator` loggers.
`spemulator.logformat.initialize_logger(environ)` sets up the root logger
from a mapping of environment variables (default `os.environ`) and returns
the handler it installed:

- Output goes to standard error, coloured when that is a terminal. A
  handler installed by an earlier call is replaced.
- Levels come from `RUST_LOG`, default `info`: a global level
  (`off`, `error`, `warn`, `info`, `debug`, `trace`) and/or comma-separated
  `logger=level` directives. A bare logger name enables it at trace level.
- Lines look like `[INFO] [gantry_emulator] Succeeded to calibrate.` and
  `[ERROR][robot_emulator] Failed to pick due to generic_failure.`
- With `LOG_SHOW_TIME=true` a timestamp in brackets follows the logger name.

`EmulatorFormatter(color, environ)` is the formatter used, and can be
attached to any handler.

## What it does not do

The package has no command-line program and no network or middleware
transport. It does not listen for requests itself: the caller feeds
`ServiceCall` objects to `serve_gantry` or `serve_robot` from whatever
transport it uses, or calls the request handlers directly.