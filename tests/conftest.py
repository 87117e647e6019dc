"""Pytest configuration and shared test helpers.

This configuration ensures:
1. Settings load in the testing environment (cheap bcrypt, in-memory SQLite)
2. Custom markers are registered
3. Async tests are always marked, even without @pytest.mark.asyncio
"""

import inspect
import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock
from urllib.parse import parse_qs, urlsplit

import pytest

# Must run before recoverkit.core.config is imported anywhere
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ROOT_URL", "https://example.com")
os.environ.setdefault("MOUNT_PATH", "/auth")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")

from recoverkit.application.services import PasswordUpdater, RecoveryFlow  # noqa: E402
from recoverkit.domain.entities.user import User  # noqa: E402
from recoverkit.infrastructure.events import InMemoryEventBus  # noqa: E402
from recoverkit.infrastructure.persistence.in_memory_store import (  # noqa: E402
    InMemoryRecoveryStore,
)
from recoverkit.infrastructure.security import (  # noqa: E402
    BcryptPasswordService,
    RecoveryTokenGenerator,
)

ROOT_URL = "https://example.com"
MOUNT_PATH = "/auth"
TOKEN_DURATION = timedelta(hours=24)


# =============================================================================
# Test Helpers
# =============================================================================


def create_user(
    primary_id: str = "alice",
    email: str | None = None,
    password_hash: str = "$2b$04$placeholderhashplaceholderhashplaceholderhashplace",
    **kwargs,
) -> User:
    """Create a User entity for testing.

    Usage:
        alice = create_user()
        bob = create_user("bob", recover_token="fp", recover_token_expiry=...)
    """
    return User(
        primary_id=primary_id,
        email=email or f"{primary_id}@example.com",
        password_hash=password_hash,
        **kwargs,
    )


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def token_from_url(reset_url: str) -> str:
    """Extract the token query value from a reset link."""
    query = parse_qs(urlsplit(reset_url).query)
    return query["token"][0]


class RecordingNotifier:
    """Notifier that remembers every reset link it was asked to send.

    With ``error`` set, the link is recorded and then the error is raised.
    """

    def __init__(self, error: Exception | None = None) -> None:
        self.sent: list[dict[str, str]] = []
        self._error = error

    async def send(self, recipient: str, subject_prefix: str, reset_url: str) -> None:
        self.sent.append(
            {
                "recipient": recipient,
                "subject_prefix": subject_prefix,
                "reset_url": reset_url,
            }
        )
        if self._error is not None:
            raise self._error

    @property
    def tokens(self) -> list[str]:
        """Token of every link sent, oldest first."""
        return [token_from_url(sent["reset_url"]) for sent in self.sent]

    @property
    def last_token(self) -> str:
        """Token of the most recent reset link."""
        return self.tokens[-1]


def build_flow(
    store,
    *,
    notifier=None,
    clock: Callable[[], datetime] | None = None,
    event_bus=None,
    logger=None,
    task_runner=None,
    password_service=None,
    token_generator=None,
    email_subject_prefix: str = "",
    mount_path: str = MOUNT_PATH,
) -> RecoveryFlow:
    """Build a RecoveryFlow with real, cheap collaborators."""
    logger = logger or Mock()
    return RecoveryFlow(
        store=store,
        token_generator=token_generator or RecoveryTokenGenerator(),
        notifier=notifier or RecordingNotifier(),
        password_updater=PasswordUpdater(
            store=store,
            password_service=password_service or BcryptPasswordService(cost_factor=4),
        ),
        event_bus=event_bus or InMemoryEventBus(logger=logger),
        logger=logger,
        root_url=ROOT_URL,
        mount_path=mount_path,
        token_duration=TOKEN_DURATION,
        email_subject_prefix=email_subject_prefix,
        task_runner=task_runner,
        clock=clock or FakeClock(),
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Fresh controllable clock."""
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier recording every sent link."""
    return RecordingNotifier()


@pytest.fixture
def store() -> InMemoryRecoveryStore:
    """In-memory store seeded with alice (no pending recovery)."""
    return InMemoryRecoveryStore(users=[create_user("alice")])


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
