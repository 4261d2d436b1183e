"""
Password strength policy applied at registration.

Five independent rules, each reported separately so the caller can
render a per-rule checklist.
"""

import re
from dataclasses import dataclass

SPECIAL_CHARACTERS = "!@#$%^&*(),.?\":{}|<>_-+=[]\\/'`~"

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_NUMBER = re.compile(r"[0-9]")
_SPECIAL = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")


@dataclass(frozen=True)
class PasswordPolicy:
    """Pure password strength check. Any string is a legal input."""

    min_length: int = 8

    def evaluate(self, password: str) -> dict[str, bool]:
        """Return the outcome of each rule, keyed by rule name."""
        return {
            "length": len(password) >= self.min_length,
            "uppercase": _UPPERCASE.search(password) is not None,
            "lowercase": _LOWERCASE.search(password) is not None,
            "number": _NUMBER.search(password) is not None,
            "special": _SPECIAL.search(password) is not None,
        }

    def failed_rules(self, password: str) -> list[str]:
        return [rule for rule, passed in self.evaluate(password).items() if not passed]

    def is_valid(self, password: str) -> bool:
        return all(self.evaluate(password).values())
