"""Message Rules — submission validation, pagination and date formatting.

Invariants:
    - All functions are PURE: no IO, no clock reads, no side effects
    - check_* functions return an error on violation, None on success
    - Length limits apply to trimmed text
    - paginate() slices [(page-1)*limit, page*limit) of a newest-first list

Design Decisions:
    - Return errors (not raise): the store decides when to raise, so a failed
      check can never interleave with a write
    - Display date formatted by hand ("October 17, 2026"): locale-independent
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence, TypeVar

from guestbook.core.domain_types import MAX_BODY_LENGTH, MAX_NAME_LENGTH
from guestbook.core.errors import InputValidationError

T = TypeVar("T")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def check_submission(
    name: str | None, body: str | None,
) -> InputValidationError | None:
    """Rules for a new message: both fields present, non-blank, within limits."""
    name_blank = not name or not name.strip()
    if name_blank or not body or not body.strip():
        return InputValidationError(
            "Name and message are required", "name" if name_blank else "message",
        )
    if len(name.strip()) > MAX_NAME_LENGTH:
        return InputValidationError(
            f"Name is too long (max {MAX_NAME_LENGTH} characters)", "name",
        )
    return check_body_length(body)


def check_edit_body(body: str | None) -> InputValidationError | None:
    """Rules for an edited body: present, non-blank, within limit."""
    if not body or not body.strip():
        return InputValidationError("Message is required", "message")
    return check_body_length(body)


def check_body_length(body: str) -> InputValidationError | None:
    if len(body.strip()) > MAX_BODY_LENGTH:
        return InputValidationError(
            f"Message is too long (max {MAX_BODY_LENGTH} characters)", "message",
        )
    return None


def format_display_date(moment: datetime) -> str:
    """English month names, independent of the process locale."""
    return f"{MONTH_NAMES[moment.month - 1]} {moment.day}, {moment.year}"


def parse_positive_int(raw: str | int | None, default: int) -> int:
    """Query param coercion: absent, non-numeric or < 1 falls back to default."""
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


@dataclass(frozen=True)
class PaginationInfo:
    current_page: int
    total_pages: int
    total_messages: int
    has_next: bool
    has_prev: bool

    def to_response(self) -> dict:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalMessages": self.total_messages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


def paginate(
    items: Sequence[T], page: int, limit: int,
) -> tuple[list[T], PaginationInfo]:
    """Slice one page out of items. page and limit must be >= 1."""
    total = len(items)
    start_index = (page - 1) * limit
    end_index = page * limit
    info = PaginationInfo(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_messages=total,
        has_next=end_index < total,
        has_prev=page > 1,
    )
    return list(items[start_index:end_index]), info
