"""Console output for the emulator and its hosts.

`ConsoleLogger` prints `[elapsed][LEVEL][name] message` lines to a stream;
`build_progress_bar` is the tqdm bar shown during headless runs.
"""

import sys
import time
from typing import Any, Dict, Optional, TextIO

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ANSI = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_ANSI_RESET = "\033[0m"


class ConsoleLogger:
    """Levelled logger for VM and host messages.

    Colours are only used when the stream is a terminal. Timestamps count
    seconds since the logger was created.
    """

    def __init__(
        self,
        name: str = "chip8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.name = name
        self.log_level = level
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS.index(level.upper()) >= LEVELS.index(self.log_level)

    def _format(self, level: str, message: str) -> str:
        stamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{_ANSI[level]}{tag}{_ANSI_RESET}"
        return f"{stamp}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str) -> None:
        level = level.upper()
        if self.is_enabled_for(level):
            print(self._format(level, message), file=self.stream, flush=True)

    def debug(self, message: str) -> None:
        self.log("DEBUG", message)

    def info(self, message: str) -> None:
        self.log("INFO", message)

    def warning(self, message: str) -> None:
        self.log("WARNING", message)

    def error(self, message: str) -> None:
        self.log("ERROR", message)

    def critical(self, message: str) -> None:
        self.log("CRITICAL", message)

    def log_config(self, title: str, config: Dict[str, Any]) -> None:
        """Print `title` and one indented `key: value` line per setting, framed by rules."""
        rule = "=" * 60
        self.info(rule)
        self.info(title)
        for key, value in config.items():
            self.info(f"  {key}: {value:.4f}" if isinstance(value, float) else f"  {key}: {value}")
        self.info(rule)


def get_logger(name: str = "chip8", log_level: str = "WARNING", **kwargs) -> ConsoleLogger:
    """Quiet default logger for a VM created without one."""
    return ConsoleLogger(name, log_level=log_level, **kwargs)


def build_progress_bar(n: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """tqdm bar counting `n` emulated frames."""
    kwargs.pop("total", None)
    kwargs.pop("unit", None)
    return tqdm(total=n, desc=desc or f"Emulating ({n:,} frames)", unit="frame", **kwargs)
