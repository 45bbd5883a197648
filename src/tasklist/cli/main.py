# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads saved tasks, runs the console
REPL and saves the collection once on the way out.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state, load_saved_tasks, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _handle_sigterm(signum, _frame) -> None:
    # Unwind the REPL through KeyboardInterrupt so the shutdown save still runs.
    logger.info("Signal %s received, shutting down...", signum)
    raise KeyboardInterrupt


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=getattr(settings, "data_dir", ".local/tasklist"), console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "tasklist"))

    state = create_initial_state(settings=settings)
    loaded = load_saved_tasks(state, refresh=False)
    logger.info("Startup with %d saved tasks.", loaded)

    try:
        signal.signal(signal.SIGTERM, _handle_sigterm)
    except (AttributeError, ValueError):
        # SIGTERM unsupported on this platform or not on the main thread.
        pass

    try:
        run_console_loop(state)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        save_tasks(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
