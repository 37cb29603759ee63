import logging
from datetime import datetime

import pytest

from spemulator.logformat import OFF, TRACE, EmulatorFormatter, initialize_logger


def make_record(level, message, name="gantry_emulator", created=None):
    record = logging.LogRecord(name, level, __file__, 1, message, None, None)
    if created is not None:
        record.created = created
    return record


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("gantry_emulator", "robot_emulator"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_info_line_without_time():
    formatter = EmulatorFormatter(environ={})
    assert formatter.format(make_record(logging.INFO, "hello")) == "[INFO] [gantry_emulator] hello"


def test_error_line_has_no_gap_after_level():
    formatter = EmulatorFormatter(environ={"LOG_SHOW_TIME": "false"})
    line = formatter.format(make_record(logging.ERROR, "boom", name="robot_emulator"))
    assert line == "[ERROR][robot_emulator] boom"


def test_warning_uses_short_label():
    formatter = EmulatorFormatter(environ={})
    line = formatter.format(make_record(logging.WARNING, "Unknown command"))
    assert line.startswith("[WARN] [gantry_emulator]")
    assert line.endswith("Unknown command")


def test_trace_label():
    formatter = EmulatorFormatter(environ={})
    assert formatter.format(make_record(TRACE, "x")).startswith("[TRACE][")


def test_time_is_included_when_enabled():
    created = 1_700_000_000.25
    formatter = EmulatorFormatter(environ={"LOG_SHOW_TIME": "true"})
    line = formatter.format(make_record(logging.INFO, "hello", created=created))
    prefix = "[INFO] [gantry_emulator] ["
    assert line.startswith(prefix)
    stamp, _, message = line[len(prefix):].partition("] ")
    assert datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S.%f") == datetime.fromtimestamp(created)
    assert message == "hello"


def test_color_only_wraps_level():
    plain = EmulatorFormatter(environ={}).format(make_record(logging.DEBUG, "msg"))
    colored = EmulatorFormatter(color=True, environ={}).format(make_record(logging.DEBUG, "msg"))
    assert "\x1b[0m" in colored
    stripped = colored.replace("\x1b[34m", "").replace("\x1b[0m", "")
    assert stripped == plain


def test_initialize_defaults_to_info(restore_root):
    handler = initialize_logger({})
    assert handler in restore_root.handlers
    assert restore_root.level == logging.INFO
    assert isinstance(handler.formatter, EmulatorFormatter)


def test_initialize_does_not_stack_handlers(restore_root):
    first = initialize_logger({})
    second = initialize_logger({})
    ours = [h for h in restore_root.handlers if isinstance(h.formatter, EmulatorFormatter)]
    assert ours == [second]
    assert first not in restore_root.handlers or first is second


def test_initialize_reads_global_and_target_levels(restore_root):
    handler = initialize_logger({"RUST_LOG": "warn,robot_emulator=DEBUG"})
    assert handler in restore_root.handlers
    assert isinstance(handler.formatter, EmulatorFormatter)
    assert restore_root.level == logging.WARNING
    assert logging.getLogger("robot_emulator").level == logging.DEBUG


def test_initialize_target_only_turns_root_off(restore_root):
    handler = initialize_logger({"RUST_LOG": "gantry_emulator=trace"})
    assert handler in restore_root.handlers
    assert isinstance(handler.formatter, EmulatorFormatter)
    assert restore_root.level == OFF
    assert logging.getLogger("gantry_emulator").level == TRACE