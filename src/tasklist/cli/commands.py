# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..display.html import write_html
from ..tasks.task_models import TaskFilter

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        raw: bool = False,
    ) -> None:
        """
        Register a handler under a name and its aliases.

        A raw handler receives the untouched text after the command name as a
        single argument instead of whitespace-split words.
        """
        key = name.lower()
        self._help[key] = help_text
        for n in [key, *(a.lower() for a in aliases or [])]:
            self._handlers[n] = handler
            if raw:
                self._raw.add(n)
            else:
                self._raw.discard(n)

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string ("" when the refreshed view says it all),
        or None if the line is not a command.
        """
        if not line.startswith("/"):
            return None

        head = line[1:].split(None, 1)
        if not head:
            return "Empty command. Use /help to list available commands."

        name = head[0].lower()
        rest = head[1].strip() if len(head) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        if name in self._raw:
            return handler(state, [rest] if rest else [])
        return handler(state, rest.split())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any line that is not a command is added as a task.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_id(state: AppState, raw: str) -> int | None:
    """
    "#<id>" names a task by its exact id; a bare number is the 1-based row
    shown in the current view. Returns the exact id, or None.
    """
    by_id = raw.startswith("#")
    try:
        n = int(raw[1:] if by_id else raw)
    except ValueError:
        return None

    if by_id:
        return n if state.store.get(n) is not None else None

    items = state.current_view().items
    if 1 <= n <= len(items):
        return items[n - 1].id
    return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    # Empty text is reported by the store itself (blocking notice).
    state.store.add(args[0] if args else "")
    return ""


def _set_completed(state: AppState, args: list[str], completed: bool, usage: str) -> str:
    if len(args) != 1:
        return usage
    task_id = resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task {args[0]}."
    state.store.toggle(task_id, completed)
    return ""


def cmd_check(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, True, "Usage: /check <row|#id>")


def cmd_uncheck(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, False, "Usage: /uncheck <row|#id>")


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <row|#id>"
    task_id = resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task {args[0]}."
    state.store.remove(task_id)
    return ""


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = state.store.clear_completed()
    return f"Removed {removed} completed task(s)."


def cmd_filter(state: AppState, args: list[str]) -> str:
    usage = "Usage: /filter all | active | completed"
    if len(args) != 1:
        return usage
    try:
        value = TaskFilter.parse(args[0])
    except ValueError:
        return usage
    state.store.set_filter(value)
    return ""


def _filter_shortcut(value: TaskFilter) -> CommandHandler:
    def handler(state: AppState, args: list[str]) -> str:
        state.store.set_filter(value)
        return ""

    return handler


def cmd_list(state: AppState, args: list[str]) -> str:
    state.refresh()
    return ""


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = state.current_stats()
    return f"Total: {s.total}  Completed: {s.completed}  Active: {s.active}"


def cmd_export(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /export <path.html>"
    try:
        path = write_html(args[0], state.current_view(), state.current_stats())
    except OSError as e:
        logger.warning("HTML export failed path=%s: %s", args[0], e)
        return f"Export failed: {e}"
    return f"Exported to {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add buy milk.", raw=True)
registry.register("check", cmd_check, help_text="Mark a task completed: /check <row|#id>.", aliases=["done"])
registry.register("uncheck", cmd_uncheck, help_text="Mark a task active again: /uncheck <row|#id>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <row|#id>.", aliases=["del"])
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register(
    "filter",
    cmd_filter,
    help_text="Show all | active | completed tasks.",
)
for _f in TaskFilter:
    registry.register(_f.value, _filter_shortcut(_f), help_text=f"Shortcut for /filter {_f.value}.")
registry.register("list", cmd_list, help_text="Show the task list again.", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show task counts.")
registry.register("export", cmd_export, help_text="Write the current view as HTML: /export out.html.")
