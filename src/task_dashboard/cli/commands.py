# src/task_dashboard/cli/commands.py

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Awaitable, Callable

from ..connectors.console_view import render_counts, render_form, render_task_table
from ..core.state import AppState
from ..tasks.task_models import TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]

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
        raw: bool = False,
    ) -> None:
        """`raw` handlers get the untouched remainder of the line as their only arg."""
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in [key, *(a.lower() for a in aliases)]:
            self._handlers[alias] = handler
            if raw:
                self._raw.add(alias)

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(None, 1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        if name in self._raw:
            args = [rest] if rest else []
        else:
            args = _split_args(rest)

        return await handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


def _split_args(text: str) -> list[str]:
    """Shell-style words; unbalanced quotes (Bob's) fall back to plain whitespace."""
    try:
        return shlex.split(text)
    except ValueError:
        return text.split()


registry = CommandRegistry()


def _resolve_task_id(state: AppState, ref: str) -> str | None:
    """Row number in the visible list, full task id, or a unique id prefix."""
    task_list = state.dashboard.task_list
    visible = task_list.visible
    if ref.isdigit() and 1 <= int(ref) <= len(visible):
        return visible[int(ref) - 1].id
    if task_list.get(ref) is not None:
        return ref
    matches = [t.id for t in task_list.tasks if t.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    return None


async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    board = state.dashboard
    header = render_counts(board.counts)
    if board.query.strip():
        header += f'\nSearch: "{board.query}"'
    return f"{header}\n{render_task_table(board.task_list)}"


async def cmd_search(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /search text  -> filter by title/description
    /search       -> clear the filter
    """
    state.dashboard.set_query(" ".join(args))
    return await cmd_list(state, [], emit)


async def cmd_counts(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_counts(state.dashboard.counts)


async def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    await state.dashboard.refresh(bump=True)
    return await cmd_list(state, [], emit)


_FIELD_KEYS = {
    "desc": "description",
    "description": "description",
    "due": "due_date",
    "due_date": "due_date",
    "status": "status",
}


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title...> [desc=...] [due=YYYY-MM-DD] [status=pending|in_progress|complete]

    Starts from a blank form, fills it and submits.
    """
    if not args:
        return "Usage: /add <title> [desc=...] [due=YYYY-MM-DD] [status=p|ip|c]"

    fields: dict[str, object] = {"description": "", "due_date": "", "status": TaskStatus.PENDING}
    title_parts: list[str] = []
    for arg in args:
        key, sep, value = arg.partition("=")
        field_name = _FIELD_KEYS.get(key.lower()) if sep else None
        if field_name is None:
            title_parts.append(arg)
            continue
        if field_name == "status":
            try:
                fields["status"] = TaskStatus.parse(value)
            except ValueError:
                return f"Invalid status: {value}. Use pending, in_progress or complete."
        else:
            fields[field_name] = value
    fields["title"] = " ".join(title_parts)

    state.dashboard.add_open = True
    state.dashboard.task_form.update(**fields)
    return await cmd_retry(state, [], emit)


async def cmd_retry(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """Submit the form as it currently stands (values are kept after a failure)."""
    form = state.dashboard.task_form
    if form.loading:
        return "A task is already being added."
    task = await state.dashboard.submit_form()
    if task is None:
        return f"Not added: {form.error}. Fix it and use /retry, or /form to review."
    return form.success or "Task added."


async def cmd_form(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    form = state.dashboard.task_form
    text = render_form(form.form)
    if form.error:
        text += f"\n  error: {form.error}"
    return text


async def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /status <row|id> <status>

    The change shows immediately; the store update runs in the background and
    is reverted if it fails.
    """
    if len(args) != 2:
        return "Usage: /status <row|id> <pending|in_progress|complete> (aliases: p, ip, c)"

    task_id = _resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task matches {args[0]!r}."
    try:
        new_status = TaskStatus.parse(args[1])
    except ValueError:
        return f"Invalid status: {args[1]}."

    task_list = state.dashboard.task_list
    current = task_list.get(task_id)
    if current is not None and current.status == new_status:
        return f"Task already {new_status.label.lower()}."

    logger.debug("Status change requested id=%s -> %s", task_id, new_status.value)
    state.spawn(task_list.set_status(task_id, new_status), name=f"set_status:{task_id}")
    # let the optimistic update land before the reply is printed
    await asyncio.sleep(0)
    title = current.title if current is not None else task_id
    return f"{title}: {new_status.label}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show counts and the visible tasks.", aliases=["ls"])
registry.register(
    "search",
    cmd_search,
    help_text="Filter by title/description: /search <text> (empty clears).",
    raw=True,
)
registry.register("add", cmd_add, help_text="Add a task: /add <title> [desc=..] [due=YYYY-MM-DD] [status=..].")
registry.register("retry", cmd_retry, help_text="Re-submit the current form (kept after a failed add).")
registry.register("form", cmd_form, help_text="Show the current form values.")
registry.register("status", cmd_status, help_text="Change status: /status <row|id> <p|ip|c>.")
registry.register("counts", cmd_counts, help_text="Show task totals per status.")
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the store.")
