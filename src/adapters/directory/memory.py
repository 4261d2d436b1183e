"""
In-memory account directory adapter - Implements AccountDirectory protocol.

This module provides the process-local implementation of the domain's
account directory port. Accounts live in dictionaries keyed by
normalized email and by exact display name.

Security Design:
---------------
1. **bcrypt**: Passwords are stored as bcrypt hashes, never plaintext.
   bcrypt only accepts 72 bytes, so the password is first reduced to a
   base64-encoded SHA-256 digest (44 bytes). Any password length works
   and no part of a long password is ignored.

2. **_DUMMY_BCRYPT_HASH**: When an email doesn't exist we still run
   bcrypt.checkpw() against a pre-computed dummy hash, so response time
   does not reveal whether an account exists.

3. **Lock**: Every read-modify-write runs under one lock per directory
   instance. The uniqueness of names and emails therefore holds when
   the API threadpool serves concurrent requests.
"""

import base64
import hashlib
import logging
import threading

import bcrypt

from src.domain.accounts import normalize_email
from src.domain.exceptions import DuplicateEmail, DuplicateName
from src.domain.models import Account, Role

logger = logging.getLogger(__name__)

# Pre-computed bcrypt hash for timing oracle prevention.
_DUMMY_BCRYPT_HASH = bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(4)).decode()


def _prehash(password: str) -> bytes:
    """Fixed-size bcrypt input for a password of any length."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8", "surrogatepass")).digest())


class InMemoryAccountDirectory:
    """
    Implements AccountDirectory protocol with process-local dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Email lookups are case-insensitive, name lookups are exact.
    """

    def __init__(self, bcrypt_cost: int = 10) -> None:
        """
        Initialize an empty directory.

        Args:
            bcrypt_cost: bcrypt work factor for stored hashes (4-31)
        """
        self._bcrypt_cost = bcrypt_cost
        self._by_email: dict[str, Account] = {}
        self._names: set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._by_email)

    def email_exists(self, email: str) -> bool:
        return normalize_email(email) in self._by_email

    def name_exists(self, name: str) -> bool:
        return name in self._names

    def get(self, email: str) -> Account | None:
        return self._by_email.get(normalize_email(email))

    def register(
        self, name: str, email: str, password: str, role: Role = Role.STANDARD
    ) -> Account:
        """
        Atomically create and store a new account.

        Args:
            name: Display name, unique and case-sensitive
            email: Email address (normalized before storage)
            password: Plaintext password, hashed before storage
            role: Role flags, STANDARD unless seeding a privileged account

        Returns:
            The stored account

        Raises:
            DuplicateName: If the name is already registered
            DuplicateEmail: If the email is already registered
        """
        normalized_email = normalize_email(email)
        password_hash = self._hash_password(password)

        with self._lock:
            if name in self._names:
                raise DuplicateName(name)
            if normalized_email in self._by_email:
                raise DuplicateEmail(normalized_email)

            account = Account(
                name=name,
                email=normalized_email,
                password_hash=password_hash,
                role=role,
            )
            self._by_email[normalized_email] = account
            self._names.add(name)

        logger.info("Account stored: %s (%s)", normalized_email, role)
        return account

    def verify_credentials(self, email: str, password: str) -> Account | None:
        """
        Return the account if the password matches its stored hash.

        bcrypt always runs, against a dummy hash when the email is unknown.
        """
        account = self._by_email.get(normalize_email(email))
        stored_hash = account.password_hash if account is not None else _DUMMY_BCRYPT_HASH

        password_valid = bcrypt.checkpw(_prehash(password), stored_hash.encode())

        if account is None or not password_valid:
            return None
        return account

    def replace_password(self, email: str, new_password: str) -> bool:
        """
        Overwrite the stored hash for an existing account.

        Returns:
            True if replaced, False if no account has this email
        """
        normalized_email = normalize_email(email)
        password_hash = self._hash_password(new_password)

        with self._lock:
            account = self._by_email.get(normalized_email)
            if account is None:
                return False
            account.password_hash = password_hash

        logger.info("Password replaced for %s", normalized_email)
        return True

    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=self._bcrypt_cost)).decode()
