"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account lifecycle core: password policy,
verification codes and the registration/login/password reset
orchestration. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .accounts import AccountLifecycleController, normalize_email
from .exceptions import (
    AccountError,
    CodeExpired,
    CodeLocked,
    CodeMismatch,
    DuplicateEmail,
    DuplicateName,
    InvalidCredentials,
    InvalidTransition,
    NotVerified,
    PasswordMismatch,
    RegistrationRejected,
    TooShort,
    UnknownEmail,
    WeakPassword,
)
from .models import Account, PendingLogin, ResetSession, Role
from .password_policy import PasswordPolicy
from .ports import AccountDirectory, CodeCheck, CodeNotifier, FlowState
from .verification import VerificationCodeIssuer

__all__ = [
    "Account",
    "AccountDirectory",
    "AccountError",
    "AccountLifecycleController",
    "CodeCheck",
    "CodeExpired",
    "CodeLocked",
    "CodeMismatch",
    "CodeNotifier",
    "DuplicateEmail",
    "DuplicateName",
    "FlowState",
    "InvalidCredentials",
    "InvalidTransition",
    "NotVerified",
    "PasswordMismatch",
    "PasswordPolicy",
    "PendingLogin",
    "RegistrationRejected",
    "ResetSession",
    "Role",
    "TooShort",
    "UnknownEmail",
    "VerificationCodeIssuer",
    "WeakPassword",
    "normalize_email",
]
