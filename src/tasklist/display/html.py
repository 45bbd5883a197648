# src/tasklist/display/html.py

"""
HTML rendering of a ViewModel.

Task text and dates are untrusted: everything interpolated into markup goes
through html.escape.
"""

from __future__ import annotations

import logging
import os
from html import escape
from pathlib import Path

from ..tasks.stats import TaskStats
from ..tasks.view import ViewItem, ViewModel

logger = logging.getLogger(__name__)


def _render_item(item: ViewItem) -> str:
    classes = "task-item completed" if item.completed else "task-item"
    checked = " checked" if item.completed else ""
    return (
        f'<li class="{classes}" data-id="{item.id}">'
        f'<input type="checkbox" class="task-checkbox"{checked}>'
        f'<span class="task-text">{escape(item.display_text)}</span>'
        f"<small>{escape(item.created_at)}</small>"
        f'<button class="task-delete">&times;</button>'
        "</li>"
    )


def _render_filter_button(value: str, label: str, active: bool) -> str:
    cls = ' class="active"' if active else ""
    return f'<button data-filter="{value}"{cls}>{escape(label)}</button>'


def render_html(view: ViewModel, stats: TaskStats) -> str:
    buttons = "".join(_render_filter_button(f.value, f.label, f.active) for f in view.filters)

    if view.is_empty:
        body = f'<li class="empty-state">{escape(view.empty_message)}</li>'
    else:
        body = "".join(_render_item(item) for item in view.items)

    return (
        '<section class="tasklist">\n'
        f'  <div class="filters">{buttons}</div>\n'
        f'  <ul id="taskList">{body}</ul>\n'
        '  <div class="stats">'
        f'Total: <span id="totalTasks">{stats.total}</span> '
        f'Completed: <span id="completedTasks">{stats.completed}</span>'
        "</div>\n"
        "</section>\n"
    )


def write_html(path: str | Path, view: ViewModel, stats: TaskStats) -> Path:
    """Write the rendered view atomically (tmp file + replace)."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(render_html(view, stats), "utf-8")
    os.replace(tmp, path)
    logger.info("Exported %d rows to %s", len(view.items), path)
    return path
