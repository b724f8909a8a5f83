"""Tests for the console logger."""

import io

import pytest
from chip8vm.logging import ConsoleLogger, build_progress_bar


def make_logger(level):
    stream = io.StringIO()
    return ConsoleLogger("test", log_level=level, use_colors=False, show_timestamps=False, stream=stream), stream


def test_level_filtering():
    logger, stream = make_logger("WARNING")
    logger.info("hidden")
    logger.warning("shown")
    output = stream.getvalue()
    assert "hidden" not in output
    assert "[ WARNING][test] shown" in output


def test_log_config():
    logger, stream = make_logger("INFO")
    logger.log_config("Starting", {"rom": "pong.ch8", "frequency": 500.0})
    output = stream.getvalue()
    assert "  rom: pong.ch8" in output
    assert "  frequency: 500.0000" in output


def test_unknown_level():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="VERBOSE")


def test_progress_bar_total():
    with build_progress_bar(10, disable=True) as progress:
        assert progress.total == 10


def test_no_colors_on_plain_stream():
    logger = ConsoleLogger(log_level="INFO", use_colors=True, show_timestamps=False, stream=io.StringIO())
    logger.info("plain")
    assert "\033[" not in logger.stream.getvalue()


def test_timestamp_prefix():
    stream = io.StringIO()
    ConsoleLogger("vm", use_colors=False, stream=stream).error("late")
    assert stream.getvalue().startswith("[")
    assert "s][   ERROR][vm] late" in stream.getvalue()
