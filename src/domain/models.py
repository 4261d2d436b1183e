"""
Domain models - Accounts and verification sessions.

Plain dataclasses with no framework imports. Sessions are ephemeral
and never persisted.
"""

from dataclasses import dataclass, field
from enum import Flag


class Role(Flag):
    """
    Account role flags.

    STANDARD is the empty set. ADMIN and OWNER are independent flags,
    so an account may carry both.
    """

    STANDARD = 0
    ADMIN = 1
    OWNER = 2


@dataclass
class Account:
    """A registered user identity."""

    name: str
    email: str
    password_hash: str = field(repr=False)
    role: Role = Role.STANDARD

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.role

    @property
    def is_owner(self) -> bool:
        return Role.OWNER in self.role


@dataclass
class ResetSession:
    """
    One in-flight verification attempt bound to a single email.

    Only the most recently issued code is valid. ``issued_at`` is a
    reading of the issuer's clock, ``attempts`` counts failed checks
    since the last issue.
    """

    target_email: str
    issued_code: str = ""
    verified: bool = False
    issued_at: float = 0.0
    attempts: int = 0


@dataclass
class PendingLogin:
    """Credentials accepted, waiting for the emailed login code."""

    account: Account
    session: ResetSession
