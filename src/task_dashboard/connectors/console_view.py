# src/task_dashboard/connectors/console_view.py

from __future__ import annotations

from datetime import date

from ..tasks.task_list import TaskList
from ..tasks.task_models import NewTaskInput, TaskCounts, format_due_date, is_overdue

MIN_TITLE_WIDTH = 18
DUE_WIDTH = 22
STATUS_WIDTH = 12


def render_counts(counts: TaskCounts) -> str:
    return (
        f"Total: {counts.total}  "
        f"Pending: {counts.pending}  "
        f"In progress: {counts.in_progress}  "
        f"Complete: {counts.complete}"
    )


def render_task_table(task_list: TaskList, *, today: date | None = None) -> str:
    """
    Text rendering of the visible rows: # | Title | Due | Status.

    Row numbers are positions in the visible (filtered) list and can be used
    with /status.
    """
    if task_list.show_loading_indicator:
        return "Loading tasks…"

    lines: list[str] = []
    if task_list.error:
        lines.append(f"! {task_list.error}")

    empty = task_list.empty_message
    if empty is not None:
        lines.append(empty)
        return "\n".join(lines)

    visible = task_list.visible
    title_w = max([MIN_TITLE_WIDTH, *(len(t.title) for t in visible)])
    num_w = len(str(len(visible)))

    lines.append(f"{'#':>{num_w}}  {'Title':<{title_w}}  {'Due':<{DUE_WIDTH}}  Status")
    lines.append("-" * (num_w + title_w + DUE_WIDTH + STATUS_WIDTH + 6))
    for i, task in enumerate(visible, start=1):
        due = format_due_date(task)
        if is_overdue(task, today):
            due += " [Overdue]"
        lines.append(f"{i:>{num_w}}  {task.title:<{title_w}}  {due:<{DUE_WIDTH}}  {task.status.label}")
        if task.description:
            lines.append(f"{'':>{num_w}}  {task.description}")
    return "\n".join(lines)


def render_form(form: NewTaskInput) -> str:
    return (
        "Form:\n"
        f"  title:       {form.title!r}\n"
        f"  description: {form.description!r}\n"
        f"  due_date:    {form.due_date!r}\n"
        f"  status:      {form.status.value}"
    )
