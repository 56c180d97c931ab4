"""Capability Tokens — unguessable secrets for admin sessions and message owners.

Invariants:
    - Every token carries TOKEN_BYTES (32) bytes from the OS CSPRNG
    - Comparison is constant-time and never matches a missing token
"""

import hmac
import secrets

from guestbook.core.domain_types import TOKEN_BYTES


def issue_token() -> str:
    """Mint a fresh 256-bit token, hex-encoded."""
    return secrets.token_hex(TOKEN_BYTES)


def tokens_match(presented: str | None, expected: str | None) -> bool:
    if not presented or not expected:
        return False
    return hmac.compare_digest(presented.encode(), expected.encode())
