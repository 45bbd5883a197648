# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def run_console_loop(state: AppState, *, input_func: Callable[[str], str] = input) -> None:
    """
    Read lines until EOF or /exit.

    A slash command goes through the registry; any other non-empty line is
    submitted as a new task. Each line is handled to completion before the
    next prompt.
    """
    logger.info("Console connector started.")
    say = getattr(state.display, "message", print)
    say("Type a task and press Enter to add it. Use /help for commands, /exit to quit.")

    state.refresh()

    while True:
        try:
            line = input_func("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            state.store.add(line)
            continue

        try:
            reply = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            say(reply)

    logger.info("Console connector finished.")
