"""待办清单测试。"""
import json
from datetime import date, datetime, timedelta

import pytest

from forget_me_not.errors import TodoValidationError
from forget_me_not.todos.models import HistoryPeriod
from forget_me_not.todos.repository import TodoRepository

from conftest import FakeClock


@pytest.fixture
def local_clock() -> FakeClock:
    # 本地时间中午，避免跨日
    return FakeClock(datetime.now().astimezone().replace(hour=12, minute=0, second=0, microsecond=0))


def test_add_and_toggle(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    todo = repo.add("Call mom")
    assert todo.completed is False
    assert todo.due_date is None
    done = repo.toggle(todo.id)
    assert done.completed is True
    assert done.completed_at == local_clock.now
    assert repo.toggle(todo.id).completed_at is None
    assert repo.toggle("missing") is None


def test_add_rejects_empty_text(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    with pytest.raises(TodoValidationError):
        repo.add("  ")
    assert repo.count() == 0


def test_persisted_under_todos_key(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    todo = repo.add("Call mom", due_date=date(2024, 6, 1))
    assert repo.flush(timeout=5)
    data = json.loads(store.get("todos").decode("utf-8"))
    assert data[0]["id"] == todo.id
    assert set(data[0]) == {"id", "text", "completed", "createdAt", "completedAt", "dueDate"}


def test_list_for_date_matches_created_or_due(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    today = local_clock.now.date()
    tomorrow = today + timedelta(days=1)
    created_today = repo.add("Call mom")
    due_tomorrow = repo.add("Pay rent", due_date=tomorrow)
    assert {t.id for t in repo.list_for_date(today)} == {created_today.id, due_tomorrow.id}
    assert [t.id for t in repo.list_for_date(tomorrow)] == [due_tomorrow.id]
    assert repo.list_for_date(today - timedelta(days=3)) == []


def test_completed_within_periods(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    old = repo.add("Old")
    recent = repo.add("Recent")
    latest = repo.add("Latest")

    local_clock.advance(days=-20)
    repo.toggle(old.id)
    local_clock.advance(days=17)
    repo.toggle(recent.id)
    local_clock.advance(days=3)
    repo.toggle(latest.id)

    assert [t.id for t in repo.completed_within(HistoryPeriod.TODAY)] == [latest.id]
    assert {t.id for t in repo.completed_within(HistoryPeriod.WEEK)} == {latest.id, recent.id}
    assert {t.id for t in repo.completed_within(HistoryPeriod.MONTH)} == {latest.id, recent.id, old.id}
    assert len(repo.completed_within("all")) == 3


def test_clear_completed(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    keep = repo.add("Keep")
    drop = repo.add("Drop")
    repo.toggle(drop.id)
    assert repo.clear_completed() == 1
    assert [t.id for t in repo.list_all()] == [keep.id]
    assert repo.clear_completed() == 0


def test_marked_dates(store, local_clock) -> None:
    repo = TodoRepository(store, clock=local_clock)
    today = local_clock.now.date()
    due = today + timedelta(days=2)
    a = repo.add("A", due_date=due)
    repo.add("B", due_date=due)
    repo.toggle(a.id)
    marks = repo.marked_dates()
    assert marks[today].created is True
    assert (marks[due].due_open, marks[due].due_done) == (1, 1)
    assert marks[due].created is False
