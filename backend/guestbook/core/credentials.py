"""Credential Store — the single admin identity and password verification.

Invariants:
    - password_hash is a SHA-256 hex digest, never the raw password
    - AdminCredentials is frozen: built once at startup, no mutation API
    - verify() is true only when both username and digest match

Design Decisions:
    - Unsalted SHA-256 keeps ADMIN_PASSWORD_HASH values from existing
      deployments valid
    - Built-in default password is kept for first-run convenience but is
      flagged via is_default; the lifespan logs it on every boot
"""

import hashlib
import hmac
from dataclasses import dataclass

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "VeryVerySecure!"


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class AdminCredentials:
    """The one admin account. is_default marks the built-in fallback password."""

    username: str
    password_hash: str
    is_default: bool = False

    def verify(self, username: str, password: str) -> bool:
        username_ok = hmac.compare_digest(
            username.encode("utf-8"), self.username.encode("utf-8"),
        )
        digest_ok = hmac.compare_digest(
            hash_password(password).encode("ascii"),
            self.password_hash.encode("utf-8"),
        )
        return username_ok and digest_ok


def resolve_admin_credentials(
    username: str | None = None,
    password_hash: str | None = None,
    password: str | None = None,
) -> AdminCredentials:
    """Build credentials from configuration.

    Precedence: explicit digest, then a plaintext password digested here,
    then the built-in default password.
    """
    name = username or DEFAULT_ADMIN_USERNAME
    if password_hash:
        return AdminCredentials(name, password_hash.strip().lower())
    if password:
        return AdminCredentials(name, hash_password(password))
    return AdminCredentials(
        name, hash_password(DEFAULT_ADMIN_PASSWORD), is_default=True,
    )
