"""Message Rules — tests for validation, pagination and date formatting.

Tests cover:
    - check_submission: required fields, blank fields, name/body length limits
    - check_edit_body: required, blank, length
    - limits are measured after trimming
    - paginate: slice bounds and pagination flags
    - parse_positive_int: defaults for absent, non-numeric and < 1 values
    - format_display_date: "Month D, YYYY", English under any LC_TIME
"""

import locale
from datetime import datetime, timezone

import pytest

from guestbook.core.message_rules import (
    check_edit_body,
    check_submission,
    format_display_date,
    paginate,
    parse_positive_int,
)


# ─── check_submission ────────────────────────────────────────────

def test_valid_submission_passes():
    assert check_submission("Ada", "Hello there") is None


@pytest.mark.parametrize("name,body,field", [
    (None, "Hello", "name"),
    ("", "Hello", "name"),
    ("   ", "Hello", "name"),
    ("Ada", None, "message"),
    ("Ada", "", "message"),
    ("Ada", "\n\t ", "message"),
])
def test_missing_or_blank_fields_rejected(name, body, field):
    error = check_submission(name, body)
    assert error is not None
    assert error.message == "Name and message are required"
    assert error.field == field
    assert error.http_status == 400


def test_name_over_100_chars_rejected():
    error = check_submission("x" * 101, "Hello")
    assert error is not None
    assert error.message == "Name is too long (max 100 characters)"


def test_body_over_2000_chars_rejected():
    error = check_submission("Ada", "x" * 2001)
    assert error is not None
    assert error.message == "Message is too long (max 2000 characters)"


def test_limits_apply_after_trimming():
    assert check_submission("  " + "x" * 100 + "  ", "  " + "y" * 2000 + "  ") is None


# ─── check_edit_body ─────────────────────────────────────────────

def test_edit_body_rules():
    assert check_edit_body("Updated") is None
    assert check_edit_body(None).message == "Message is required"
    assert check_edit_body("   ").message == "Message is required"
    assert check_edit_body("x" * 2001).field == "message"


# ─── paginate ────────────────────────────────────────────────────

def test_paginate_last_partial_page():
    items, info = paginate(list(range(25)), page=3, limit=10)
    assert items == [20, 21, 22, 23, 24]
    assert info.total_pages == 3
    assert info.total_messages == 25
    assert info.has_next is False
    assert info.has_prev is True
    assert info.current_page == 3


def test_paginate_first_page():
    items, info = paginate(list(range(25)), page=1, limit=10)
    assert items == list(range(10))
    assert info.has_next is True
    assert info.has_prev is False


def test_paginate_past_the_end_is_empty():
    items, info = paginate(list(range(5)), page=4, limit=10)
    assert items == []
    assert info.total_pages == 1
    assert info.has_next is False
    assert info.has_prev is True


def test_paginate_empty_collection():
    items, info = paginate([], page=1, limit=10)
    assert items == []
    assert info.total_pages == 0
    assert info.has_next is False


def test_pagination_response_uses_camel_case():
    _, info = paginate(list(range(3)), page=1, limit=2)
    assert info.to_response() == {
        "currentPage": 1,
        "totalPages": 2,
        "totalMessages": 3,
        "hasNext": True,
        "hasPrev": False,
    }


# ─── parse_positive_int ──────────────────────────────────────────

@pytest.mark.parametrize("raw,expected", [
    (None, 7), ("", 7), ("abc", 7), ("0", 7), ("-3", 7), ("2.5", 7),
    ("3", 3), (" 4 ", 4), (5, 5), ("500", 500),
])
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 7) == expected


# ─── format_display_date ─────────────────────────────────────────

def test_format_display_date():
    moment = datetime(2026, 3, 5, 23, 59, tzinfo=timezone.utc)
    assert format_display_date(moment) == "March 5, 2026"


def test_format_display_date_last_month():
    moment = datetime(2025, 12, 31, tzinfo=timezone.utc)
    assert format_display_date(moment) == "December 31, 2025"


@pytest.fixture
def german_time_locale():
    saved = locale.setlocale(locale.LC_TIME)
    for name in ("de_DE.UTF-8", "de_DE.utf8", "de_DE"):
        try:
            locale.setlocale(locale.LC_TIME, name)
            break
        except locale.Error:
            continue
    else:
        pytest.skip("no German locale installed")
    yield
    locale.setlocale(locale.LC_TIME, saved)


def test_format_display_date_ignores_process_locale(german_time_locale):
    moment = datetime(2026, 3, 5, tzinfo=timezone.utc)
    assert format_display_date(moment) == "March 5, 2026"
