"""Domain Types — named types and limits shared across the codebase.

Invariants:
    - MessageId is the creation time in epoch milliseconds (bumped to stay unique)
    - Tokens are 64-char lowercase hex strings (256 bits)
    - All decision outcomes encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Edit window uses 30-day months: deterministic, not calendar-accurate
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MessageId = NewType("MessageId", int)
SessionToken = NewType("SessionToken", str)
SubmitterToken = NewType("SubmitterToken", str)


# ─── Limits ──────────────────────────────────────────────────────

MAX_NAME_LENGTH = 100
MAX_BODY_LENGTH = 2000
TOKEN_BYTES = 32

DEFAULT_EDIT_WINDOW_DAYS = 6 * 30
MS_PER_DAY = 24 * 60 * 60 * 1000


# ─── Enums ───────────────────────────────────────────────────────

class Decision(str, Enum):
    """Outcome of the mutation policy for one actor and one message."""
    ALLOW = "allow"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    WINDOW_EXPIRED = "window_expired"


class ActorKind(str, Enum):
    """Who is asking — used for logs, never for decisions."""
    ADMIN = "admin"
    SUBMITTER = "submitter"
    ANONYMOUS = "anonymous"
