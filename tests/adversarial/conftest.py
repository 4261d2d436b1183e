"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition and brute force tests.
"""

import pytest

from src.adapters.directory.memory import InMemoryAccountDirectory
from src.domain.accounts import AccountLifecycleController
from src.domain.verification import VerificationCodeIssuer

LOCKOUT_ATTEMPTS = 3


@pytest.fixture
def victim(directory: InMemoryAccountDirectory) -> str:
    """Register the account under attack and return its email."""
    directory.register("Victim", "victim@x.com", "Victim123$")
    return "victim@x.com"


@pytest.fixture
def guarded_controller(
    directory: InMemoryAccountDirectory, notifier, clock
) -> AccountLifecycleController:
    """Controller with attempt lockout enabled."""
    return AccountLifecycleController(
        directory=directory,
        notifier=notifier,
        issuer=VerificationCodeIssuer(max_attempts=LOCKOUT_ATTEMPTS, clock=clock),
    )
