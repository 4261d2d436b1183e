"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the enums shared across the account lifecycle and
the interfaces (ports) that the domain requires from infrastructure.
Adapters implement these protocols.
"""

from enum import Enum
from typing import Protocol

from .models import Account, Role


class FlowState(str, Enum):
    """
    Account lifecycle controller states.

    Password reset transitions:
    - IDLE -> AWAITING_EMAIL (reset flow opened)
    - AWAITING_EMAIL -> AWAITING_CODE (email confirmed, code issued)
    - AWAITING_CODE -> AWAITING_NEW_PASSWORD (code matched)
    - AWAITING_CODE -> AWAITING_EMAIL (user goes back to change the email)
    - AWAITING_NEW_PASSWORD -> COMPLETED (password replaced)

    Login verification transitions:
    - IDLE -> AWAITING_LOGIN_CODE (credentials accepted, code issued)
    - AWAITING_LOGIN_CODE -> IDLE (code matched)

    Any state returns to IDLE on cancel.
    """

    IDLE = "IDLE"
    AWAITING_EMAIL = "AWAITING_EMAIL"
    AWAITING_CODE = "AWAITING_CODE"
    AWAITING_NEW_PASSWORD = "AWAITING_NEW_PASSWORD"
    COMPLETED = "COMPLETED"
    AWAITING_LOGIN_CODE = "AWAITING_LOGIN_CODE"


class CodeCheck(Enum):
    """
    Result of a verification code check.

    Used by VerificationCodeIssuer.check() to indicate success or specific failure.
    """

    MATCH = "match"
    MISMATCH = "mismatch"
    EXPIRED = "expired"
    LOCKED = "locked"


class AccountDirectory(Protocol):
    """Port interface for the registered account store."""

    def email_exists(self, email: str) -> bool:
        """Return True if an account is registered under this email."""
        ...

    def name_exists(self, name: str) -> bool:
        """Return True if an account is registered under this display name."""
        ...

    def register(
        self, name: str, email: str, password: str, role: Role = Role.STANDARD
    ) -> Account:
        """
        Create and store a new account.

        Password strength is the caller's responsibility.

        Raises:
            DuplicateName: If the name is already registered
            DuplicateEmail: If the email is already registered
        """
        ...

    def verify_credentials(self, email: str, password: str) -> Account | None:
        """
        Return the account if the email exists and the password matches.

        Unknown email and wrong password both return None.
        """
        ...

    def replace_password(self, email: str, new_password: str) -> bool:
        """
        Overwrite the stored credential.

        Returns:
            True if replaced, False if no account has this email
        """
        ...


class CodeNotifier(Protocol):
    """Port interface for verification code delivery."""

    def send_verification_code(self, email: str, code: str) -> None:
        """
        Deliver a verification code to an email address.

        Args:
            email: Recipient email address
            code: 6-digit verification code
        """
        ...
