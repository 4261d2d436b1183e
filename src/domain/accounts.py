"""
Account lifecycle domain service - registration, login and password reset.

This module contains the orchestration the sign-up, sign-in and
forgot-password dialogs drive. It composes the password policy, the
account directory port and the verification code issuer.

Password Reset State Machine
============================

States:
- IDLE: No flow in progress
- AWAITING_EMAIL: Reset dialog open, waiting for the account email
- AWAITING_CODE: Code issued and sent, waiting for the user to enter it
- AWAITING_NEW_PASSWORD: Code verified, waiting for the new password
- COMPLETED: Password replaced, terminal for this attempt

Valid Transitions:
    IDLE/COMPLETED -> AWAITING_EMAIL         (open_reset)
    IDLE/AWAITING_EMAIL/COMPLETED
                   -> AWAITING_CODE          (begin_reset, known email)
    AWAITING_CODE  -> AWAITING_CODE          (resend_code, wrong code)
    AWAITING_CODE  -> AWAITING_EMAIL         (change_email)
    AWAITING_CODE  -> AWAITING_NEW_PASSWORD  (submit_code, matching code)
    AWAITING_NEW_PASSWORD -> COMPLETED       (reset_password)
    any            -> IDLE                   (cancel)

Login verification uses a separate AWAITING_LOGIN_CODE state entered by
request_login_code() and left by confirm_login_code() or cancel().

Registration and plain login are one-shot operations outside the state
machine. A failed operation never mutates the directory or the session.
"""

import logging
from dataclasses import dataclass, field

from .exceptions import (
    CodeExpired,
    CodeLocked,
    CodeMismatch,
    DuplicateEmail,
    DuplicateName,
    InvalidCredentials,
    InvalidTransition,
    NotVerified,
    PasswordMismatch,
    TooShort,
    UnknownEmail,
    WeakPassword,
)
from .models import Account, PendingLogin, ResetSession
from .password_policy import PasswordPolicy
from .ports import AccountDirectory, CodeCheck, CodeNotifier, FlowState
from .verification import VerificationCodeIssuer

logger = logging.getLogger(__name__)

_RESET_ENTRY_STATES = (FlowState.IDLE, FlowState.AWAITING_EMAIL, FlowState.COMPLETED)


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class AccountLifecycleController:
    """
    Drives one user's registration, login and password reset dialogs.

    Holds at most one active verification session. The directory and
    notifier are injected so tests can run against isolated instances.
    """

    directory: AccountDirectory
    notifier: CodeNotifier
    issuer: VerificationCodeIssuer = field(default_factory=VerificationCodeIssuer)
    policy: PasswordPolicy = field(default_factory=PasswordPolicy)
    state: FlowState = field(default=FlowState.IDLE, init=False)
    session: ResetSession | None = field(default=None, init=False)
    pending_login: PendingLogin | None = field(default=None, init=False)

    # ------------------------------------------------------------------
    # One-shot operations
    # ------------------------------------------------------------------

    def register(self, name: str, email: str, password: str, confirm_password: str) -> Account:
        """
        Register a new standard account.

        Raises:
            DuplicateName: If the name is already registered
            DuplicateEmail: If the email is already registered
            WeakPassword: If the password fails any policy rule
            PasswordMismatch: If the confirmation differs
        """
        if self.directory.name_exists(name):
            raise DuplicateName(name)
        if self.directory.email_exists(email):
            raise DuplicateEmail(normalize_email(email))

        failed = self.policy.failed_rules(password)
        if failed:
            raise WeakPassword(failed)
        if password != confirm_password:
            raise PasswordMismatch()

        account = self.directory.register(name, email, password)
        logger.info("Registered account %s", account.email)
        return account

    def login(self, email: str, password: str) -> Account:
        """
        Authenticate with email and password.

        The length check happens before the directory is consulted.

        Raises:
            TooShort: If the password is below the minimum length
            InvalidCredentials: If the email is unknown or the password wrong
        """
        self._require_min_length(password)

        account = self.directory.verify_credentials(email, password)
        if account is None:
            logger.warning("Failed login for %s", normalize_email(email))
            raise InvalidCredentials()
        return account

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    def open_reset(self) -> None:
        """Open the reset dialog at the email step."""
        if self.state not in (FlowState.IDLE, FlowState.COMPLETED):
            raise InvalidTransition("open_reset", self.state)
        self.session = None
        self.state = FlowState.AWAITING_EMAIL

    def begin_reset(self, email: str) -> str:
        """
        Start a reset attempt for a registered email and send a code.

        Returns:
            The issued code, for callers that display it directly

        Raises:
            UnknownEmail: If no account has this email (state unchanged)
        """
        if self.state not in _RESET_ENTRY_STATES:
            raise InvalidTransition("begin_reset", self.state)
        if not self.directory.email_exists(email):
            raise UnknownEmail(normalize_email(email))

        session = ResetSession(target_email=normalize_email(email))
        code = self.issuer.issue(session)
        self.notifier.send_verification_code(session.target_email, code)

        self.session = session
        self.state = FlowState.AWAITING_CODE
        logger.info("Password reset started for %s", session.target_email)
        return code

    def resend_code(self) -> str:
        """Issue a fresh code for the current reset session."""
        session = self._require_code_step("resend_code")
        code = self.issuer.issue(session)
        self.notifier.send_verification_code(session.target_email, code)
        logger.info("Reset code re-issued for %s", session.target_email)
        return code

    def change_email(self) -> None:
        """Return from the code step to the email step, discarding the code."""
        self._require_code_step("change_email")
        self.session = None
        self.state = FlowState.AWAITING_EMAIL

    def submit_code(self, code: str) -> None:
        """
        Verify the code the user entered.

        Raises:
            CodeMismatch: Wrong code, state stays AWAITING_CODE
            CodeExpired: Validity window elapsed, a resend is required
            CodeLocked: Attempt limit reached, a resend is required
        """
        session = self._require_code_step("submit_code")
        self._raise_for_check(self.issuer.check(session, code), session.target_email)

        session.verified = True
        self.state = FlowState.AWAITING_NEW_PASSWORD

    def reset_password(self, new_password: str, confirm_password: str) -> None:
        """
        Replace the password of the verified session's account.

        Only the minimum length is enforced here, not the full policy.

        Raises:
            NotVerified: If no session has a verified code
            TooShort: If the new password is below the minimum length
            PasswordMismatch: If the confirmation differs
            UnknownEmail: If the account vanished during the flow
        """
        session = self.session
        if session is None or not session.verified:
            raise NotVerified()
        self._require_min_length(new_password)
        if new_password != confirm_password:
            raise PasswordMismatch()

        if not self.directory.replace_password(session.target_email, new_password):
            raise UnknownEmail(session.target_email)

        self.session = None
        self.state = FlowState.COMPLETED
        logger.info("Password reset completed for %s", session.target_email)

    def cancel(self) -> None:
        """Abandon any flow in progress. Safe to call from any state."""
        self.session = None
        self.pending_login = None
        self.state = FlowState.IDLE

    # ------------------------------------------------------------------
    # Login verification code
    # ------------------------------------------------------------------

    def request_login_code(self, email: str, password: str) -> str:
        """
        Check credentials and send a login verification code.

        Returns:
            The issued code

        Raises:
            TooShort, InvalidCredentials: As for login()
        """
        if self.state not in (FlowState.IDLE, FlowState.COMPLETED):
            raise InvalidTransition("request_login_code", self.state)
        account = self.login(email, password)

        session = ResetSession(target_email=account.email)
        code = self.issuer.issue(session)
        self.notifier.send_verification_code(account.email, code)

        self.pending_login = PendingLogin(account=account, session=session)
        self.state = FlowState.AWAITING_LOGIN_CODE
        return code

    def confirm_login_code(self, code: str) -> Account:
        """
        Complete a login by verifying the emailed code.

        Raises:
            CodeMismatch, CodeExpired, CodeLocked: As for submit_code()
        """
        pending = self.pending_login
        if self.state != FlowState.AWAITING_LOGIN_CODE or pending is None:
            raise InvalidTransition("confirm_login_code", self.state)
        self._raise_for_check(self.issuer.check(pending.session, code), pending.account.email)

        self.pending_login = None
        self.state = FlowState.IDLE
        logger.info("Login verified for %s", pending.account.email)
        return pending.account

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _require_code_step(self, operation: str) -> ResetSession:
        if self.state != FlowState.AWAITING_CODE or self.session is None:
            raise InvalidTransition(operation, self.state)
        return self.session

    def _require_min_length(self, password: str) -> None:
        if len(password) < self.policy.min_length:
            raise TooShort()

    def _raise_for_check(self, result: CodeCheck, email: str) -> None:
        if result == CodeCheck.MATCH:
            return
        logger.warning("Verification code rejected for %s: %s", email, result.value)
        if result == CodeCheck.EXPIRED:
            raise CodeExpired()
        if result == CodeCheck.LOCKED:
            raise CodeLocked()
        raise CodeMismatch()
