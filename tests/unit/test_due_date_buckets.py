"""Due-date bucket windows, UTC helpers and LIKE escaping."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from taskboard.domain.enums import DueDateBucket
from taskboard.infrastructure.persistence.repositories.task_filters import (
    due_date_window,
    escape_like,
)
from taskboard.shared.utils.datetime import ensure_utc, start_of_week

# Wednesday
NOW = datetime(2025, 3, 12, 15, 30, tzinfo=UTC)


def test_week_starts_on_sunday() -> None:
    assert start_of_week(NOW) == datetime(2025, 3, 9, tzinfo=UTC)
    sunday = datetime(2025, 3, 9, 8, 0, tzinfo=UTC)
    assert start_of_week(sunday) == datetime(2025, 3, 9, tzinfo=UTC)
    saturday = datetime(2025, 3, 15, 23, 0, tzinfo=UTC)
    assert start_of_week(saturday) == datetime(2025, 3, 9, tzinfo=UTC)


def test_today_window() -> None:
    start, end = due_date_window(DueDateBucket.TODAY, NOW)
    assert start == datetime(2025, 3, 12, tzinfo=UTC)
    assert end.date() == NOW.date()
    assert end - start < timedelta(days=1)


def test_this_week_window() -> None:
    start, end = due_date_window(DueDateBucket.THIS_WEEK, NOW)
    assert start == datetime(2025, 3, 9, tzinfo=UTC)
    assert end.date() == datetime(2025, 3, 15).date()


def test_next_week_window() -> None:
    start, end = due_date_window(DueDateBucket.NEXT_WEEK, NOW)
    assert start == datetime(2025, 3, 16, tzinfo=UTC)
    assert end.date() == datetime(2025, 3, 22).date()


def test_overdue_has_no_window() -> None:
    with pytest.raises(ValueError):
        due_date_window(DueDateBucket.OVERDUE, NOW)


def test_ensure_utc_normalises() -> None:
    naive = datetime(2025, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
    plus_two = datetime(2025, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two) == datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
    assert ensure_utc(None) is None


def test_escape_like_escapes_metacharacters() -> None:
    assert escape_like("50%_off") == "50\\%\\_off"
    assert escape_like("a\\b") == "a\\\\b"
    assert escape_like("plain") == "plain"
