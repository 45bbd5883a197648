# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Per-mutation loggers; the console shows them only at WARNING and above.
_CHATTY_PREFIXES = ("tasklist.tasks.", "tasklist.display.")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide what reaches stderr while the task list is on screen.

    Startup, load/save and command logs pass through. Store and display
    records need WARNING or higher. Anything outside the tasklist namespace,
    captured warnings included, needs ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("tasklist."):
            return record.levelno >= logging.ERROR
        if name.startswith(_CHATTY_PREFIXES):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Send tasklist logs to stderr (filtered) and to <log_dir>/tasklist.log (everything).

    Handlers already on the root logger are replaced, so calling this twice
    does not double every line. main() calls it before building AppState.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    logfile = logging.FileHandler(str(log_path / LOG_FILE_NAME), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(formatter)
    root.addHandler(logfile)

    # warnings.warn() lands in the file as "py.warnings".
    logging.captureWarnings(True)
