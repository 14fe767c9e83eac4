from datetime import date

import pytest

from services import date_resolver
from services.date_resolver import resolve_due_date


# ---------------------------------------------------------------------
# Relative words and numeric spans
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("water the beds today", date(2026, 10, 19)),
        ("water the beds tomorrow", date(2026, 10, 20)),
        ("turn the compost next week", date(2026, 10, 26)),
        ("turn the compost in a week", date(2026, 10, 26)),
        ("order seed next month", date(2026, 11, 18)),
        ("order seed in a month", date(2026, 11, 18)),
        ("harvest in 3 days", date(2026, 10, 22)),
        ("harvest in 1 day", date(2026, 10, 20)),
        ("harvest in 2 weeks", date(2026, 11, 2)),
        ("harvest in 2 months", date(2026, 12, 18)),
    ],
)
def test_relative_expressions(text, expected, monday):
    assert resolve_due_date(text, monday) == expected


def test_matching_is_case_insensitive(monday):
    assert resolve_due_date("Fix the gate TOMORROW", monday) == date(2026, 10, 20)


def test_no_deadline_returns_none(monday):
    assert resolve_due_date("mulch the orchard", monday) is None


# ---------------------------------------------------------------------
# Named weekdays
# ---------------------------------------------------------------------

def test_next_weekday_on_that_weekday_is_a_week_out(monday):
    """
    "next Monday" said on a Monday never means today.
    """
    assert resolve_due_date("finish by next Monday", monday) == date(2026, 10, 26)


def test_this_weekday_on_that_weekday_is_today(monday):
    assert resolve_due_date("finish this Monday", monday) == monday


def test_next_weekday_later_in_the_week(monday):
    assert resolve_due_date("next friday", monday) == date(2026, 10, 23)
    assert resolve_due_date("this friday", monday) == date(2026, 10, 23)


def test_weekday_already_passed_rolls_into_next_week():
    wednesday = date(2026, 10, 21)
    assert resolve_due_date("this monday", wednesday) == date(2026, 10, 26)
    assert resolve_due_date("next wednesday", wednesday) == date(2026, 10, 28)


def test_bare_weekday_is_not_a_deadline(monday):
    assert resolve_due_date("the friday market stall", monday) is None


# ---------------------------------------------------------------------
# Only the first matching rule applies
# ---------------------------------------------------------------------

def test_relative_word_wins_over_weekday(monday):
    assert resolve_due_date("next friday or maybe tomorrow", monday) == date(2026, 10, 20)


def test_numeric_span_wins_over_weekday(monday):
    assert resolve_due_date("next friday, no, in 3 days", monday) == date(2026, 10, 22)


def test_defaults_to_system_clock(monkeypatch, monday):
    monkeypatch.setattr(date_resolver, "get_today", lambda: monday)
    assert resolve_due_date("tomorrow") == date(2026, 10, 20)
