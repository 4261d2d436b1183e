"""
Domain exceptions - Semantic error types for the account lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Every failure is locally recoverable; callers translate them into
user-facing messages.
"""


class AccountError(Exception):
    """Base class for account lifecycle domain errors."""

    pass


class RegistrationRejected(AccountError):
    """Name or email is already taken by another account."""

    pass


class DuplicateName(RegistrationRejected):
    """Display name is already registered."""

    pass


class DuplicateEmail(RegistrationRejected):
    """Email address is already registered."""

    pass


class WeakPassword(AccountError):
    """Password does not satisfy every password policy rule."""

    def __init__(self, failed_rules: list[str]) -> None:
        super().__init__(", ".join(failed_rules))
        self.failed_rules = failed_rules


class PasswordMismatch(AccountError):
    """Password and its confirmation differ."""

    pass


class TooShort(AccountError):
    """Password is below the minimum length."""

    pass


class InvalidCredentials(AccountError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    pass


class UnknownEmail(AccountError):
    """No account is registered under this email."""

    pass


class CodeMismatch(AccountError):
    """Submitted verification code does not match the issued one."""

    pass


class CodeExpired(AccountError):
    """Verification code validity window has elapsed."""

    pass


class CodeLocked(AccountError):
    """Too many failed verification attempts for the issued code."""

    pass


class NotVerified(AccountError):
    """Password reset attempted before the code was verified."""

    pass


class InvalidTransition(AccountError):
    """Operation is not accepted in the controller's current state."""

    def __init__(self, operation: str, state: object) -> None:
        super().__init__(f"{operation} not allowed in state {state}")
        self.operation = operation
        self.state = state
