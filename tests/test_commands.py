# tests/test_commands.py

from __future__ import annotations

import pytest

from task_dashboard.cli.bootstrap import create_initial_state
from task_dashboard.cli.commands import CommandRegistry, registry
from task_dashboard.tasks.task_models import TaskStatus


@pytest.fixture()
def state(settings, repo, notifier):
    return create_initial_state(settings=settings, store=repo, notifier=notifier)


@pytest.mark.asyncio
async def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    async def handler(state, args, emit):
        called.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["x"])

    assert await reg.handle(state, '/a "two words" b') == "ok"
    assert await reg.handle(state, "/X") == "ok"
    assert called == [["two words", "b"], []]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_list_and_search(state) -> None:
    await state.dashboard.start()

    out = await registry.handle(state, "/list")
    assert "Total: 3" in out and "Call vendor" in out and "Write report" in out

    out = await registry.handle(state, "/search report")
    assert "Write report" in out and "Call vendor" not in out
    assert state.dashboard.task_list.query == "report"

    out = await registry.handle(state, "/search zzz")
    assert "No matching tasks" in out

    await registry.handle(state, "/search")
    assert len(state.dashboard.task_list.visible) == 3


@pytest.mark.asyncio
async def test_add_creates_and_refreshes(state, repo) -> None:
    await state.dashboard.start()

    out = await registry.handle(state, "/add Pay invoice desc='net 30' due=2025-03-01 status=ip")

    assert out == "Task added successfully"
    assert repo.create_calls[-1] == {
        "title": "Pay invoice",
        "description": "net 30",
        "status": "in_progress",
        "due_date": "2025-03-01T00:00:00.000Z",
    }
    assert repo.list_calls == 2
    assert state.dashboard.counts.total == 4
    assert state.dashboard.refresh_key == 1


@pytest.mark.asyncio
async def test_add_failure_keeps_form_for_retry(state, repo) -> None:
    await state.dashboard.start()
    repo.create_error = "timeout"

    out = await registry.handle(state, "/add Pay invoice")
    assert "timeout" in out
    assert "Pay invoice" in await registry.handle(state, "/form")

    repo.create_error = None
    assert await registry.handle(state, "/retry") == "Task added successfully"
    assert [c["title"] for c in repo.create_calls] == ["Pay invoice", "Pay invoice"]


@pytest.mark.asyncio
async def test_status_runs_in_background(state, repo) -> None:
    await state.dashboard.start()

    # row 2 is "Write report" (newest first)
    out = await registry.handle(state, "/status 2 c")
    assert out == "Write report: Complete"
    assert state.dashboard.task_list.get("t2").status is TaskStatus.COMPLETE

    await state.drain()
    assert repo.update_calls == [("t2", TaskStatus.COMPLETE)]
    assert state.dashboard.counts.complete == 2


@pytest.mark.asyncio
async def test_status_same_value_and_bad_input(state, repo) -> None:
    await state.dashboard.start()
    assert "already" in await registry.handle(state, "/status t2 pending")
    assert "No task matches" in await registry.handle(state, "/status 99 c")
    assert "Invalid status" in await registry.handle(state, "/status t2 archived")
    await state.drain()
    assert repo.update_calls == []


@pytest.mark.asyncio
async def test_unbalanced_quote_falls_back_to_plain_words(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    async def handler(state, args, emit):
        called.append(args)
        return "ok"

    reg.register("a", handler, "a")

    assert await reg.handle(state, "/a Bob's  vendor") == "ok"
    assert called == [["Bob's", "vendor"]]


@pytest.mark.asyncio
async def test_add_title_with_apostrophe(state, repo) -> None:
    await state.dashboard.start()

    out = await registry.handle(state, "/add Call Bob's vendor due=2025-03-01")

    assert out == "Task added successfully"
    assert repo.create_calls[-1]["title"] == "Call Bob's vendor"
    assert repo.create_calls[-1]["due_date"] == "2025-03-01T00:00:00.000Z"


@pytest.mark.asyncio
async def test_search_keeps_text_exactly_as_typed(state) -> None:
    await state.dashboard.start()

    await registry.handle(state, "/search Call   vendor")
    assert state.dashboard.query == "Call   vendor"

    out = await registry.handle(state, "/search vendor's")
    assert state.dashboard.query == "vendor's"
    assert "No matching tasks" in out

    await registry.handle(state, '/search "Q3"')
    assert state.dashboard.query == '"Q3"'
