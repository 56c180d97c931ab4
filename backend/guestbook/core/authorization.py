"""Authorization Policy — who may edit or delete a message, and until when.

Invariants:
    - decide() is PURE: the caller passes the current time
    - Admin actors are allowed unconditionally (no ownership, no window)
    - A non-admin actor needs a matching submitter token AND an open window
    - Ownership is checked before the window: a stranger never learns a
      message's age from the error code

Decision table:
    admin          -> ALLOW
    token ok, open -> ALLOW
    token ok, late -> WINDOW_EXPIRED
    token wrong    -> FORBIDDEN
    no credential  -> UNAUTHORIZED
"""

from dataclasses import dataclass

from guestbook.core.domain_types import (
    DEFAULT_EDIT_WINDOW_DAYS, MS_PER_DAY, ActorKind, Decision,
)
from guestbook.core.message import Message
from guestbook.core.tokens import tokens_match


@dataclass(frozen=True)
class Actor:
    """Resolved identity of a mutation request."""

    is_admin: bool = False
    submitter_token: str | None = None

    @classmethod
    def admin(cls) -> "Actor":
        return cls(is_admin=True)

    @classmethod
    def submitter(cls, token: str) -> "Actor":
        return cls(submitter_token=token)

    @property
    def kind(self) -> ActorKind:
        if self.is_admin:
            return ActorKind.ADMIN
        if self.submitter_token:
            return ActorKind.SUBMITTER
        return ActorKind.ANONYMOUS


def window_ms(days: int = DEFAULT_EDIT_WINDOW_DAYS) -> int:
    return days * MS_PER_DAY


def is_within_window(created_at: int, now: int, window: int) -> bool:
    """True while (now - created_at) < window. All values in milliseconds."""
    return (now - created_at) < window


def decide(actor: Actor, message: Message, now: int, window: int) -> Decision:
    if actor.is_admin:
        return Decision.ALLOW
    if not actor.submitter_token:
        return Decision.UNAUTHORIZED
    if not tokens_match(actor.submitter_token, message.submitter_token):
        return Decision.FORBIDDEN
    if not is_within_window(message.created_at, now, window):
        return Decision.WINDOW_EXPIRED
    return Decision.ALLOW
