"""
Verification code issuer - one-time numeric codes for a session.

Codes are 6-digit strings in [100000, 999999], drawn from the secrets
module. Re-issuing overwrites the session's code, so only the latest
code is ever valid.

Check Outcomes
==============
- MATCH: submitted digits equal the issued code
- MISMATCH: wrong code, counted as a failed attempt when lockout is on
- EXPIRED: the validity window elapsed since the code was issued
- LOCKED: the failed attempt limit was reached before this check

Expiry and lockout are both optional. ``ttl_seconds=0`` disables expiry
and ``max_attempts=0`` allows unlimited retries.
"""

import re
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .models import ResetSession
from .ports import CodeCheck

CODE_MIN = 100000
CODE_MAX = 999999

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass
class VerificationCodeIssuer:
    """Generates and checks codes for reset and login sessions."""

    ttl_seconds: int = 600
    max_attempts: int = 0
    clock: Callable[[], float] = field(default=time.monotonic)

    def issue(self, session: ResetSession) -> str:
        """
        Issue a fresh code for the session, invalidating any previous one.

        Returns:
            The new 6-digit code
        """
        code = str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))
        session.issued_code = code
        session.issued_at = self.clock()
        session.attempts = 0
        session.verified = False
        return code

    def check(self, session: ResetSession, submitted: str) -> CodeCheck:
        """
        Compare submitted input against the session's current code.

        Non-digit characters are stripped from the input first. Comparison
        is constant-time via secrets.compare_digest().
        """
        if not session.issued_code:
            return CodeCheck.MISMATCH

        if self.is_expired(session):
            return CodeCheck.EXPIRED

        if self.max_attempts and session.attempts >= self.max_attempts:
            return CodeCheck.LOCKED

        candidate = self.sanitize(submitted)
        if secrets.compare_digest(candidate.encode(), session.issued_code.encode()):
            return CodeCheck.MATCH

        if self.max_attempts:
            session.attempts += 1
        return CodeCheck.MISMATCH

    def is_expired(self, session: ResetSession) -> bool:
        if self.ttl_seconds <= 0:
            return False
        return self.clock() - session.issued_at > self.ttl_seconds

    @staticmethod
    def sanitize(submitted: str) -> str:
        """Strip everything except ASCII digits from user input."""
        return _NON_DIGITS.sub("", submitted)
