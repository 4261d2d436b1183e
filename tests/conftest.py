"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Isolated in-memory account directories (cheap bcrypt cost)
- A recording notifier that captures issued codes
- A controllable clock for expiry tests
- Controllers wired from the above
"""

from collections.abc import Generator
from dataclasses import dataclass, field

import pytest

from src.adapters.directory.memory import InMemoryAccountDirectory
from src.config.settings import get_settings
from src.domain.accounts import AccountLifecycleController
from src.domain.verification import VerificationCodeIssuer

# Minimum bcrypt work factor, keeps hashing fast in tests
TEST_BCRYPT_COST = 4

STRONG_PASSWORD = "Abcd123$"


@dataclass
class RecordingNotifier:
    """CodeNotifier that remembers every delivered code."""

    sent: list[tuple[str, str]] = field(default_factory=list)

    def send_verification_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))

    @property
    def last_code(self) -> str:
        return self.sent[-1][1]


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def directory() -> InMemoryAccountDirectory:
    """Fresh, empty directory for each test."""
    return InMemoryAccountDirectory(bcrypt_cost=TEST_BCRYPT_COST)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def issuer(clock: FakeClock) -> VerificationCodeIssuer:
    return VerificationCodeIssuer(ttl_seconds=600, max_attempts=0, clock=clock)


@pytest.fixture
def controller(
    directory: InMemoryAccountDirectory,
    notifier: RecordingNotifier,
    issuer: VerificationCodeIssuer,
) -> AccountLifecycleController:
    return AccountLifecycleController(directory=directory, notifier=notifier, issuer=issuer)


@pytest.fixture
def fast_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Use a cheap bcrypt cost for app-level tests and reset the settings cache."""
    monkeypatch.setenv("BCRYPT_COST", str(TEST_BCRYPT_COST))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
