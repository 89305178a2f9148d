"""Pytest fixtures for ExitCheck tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from exitcheck.config import Config, reset_config
from exitcheck.container import Container, reset_container
from exitcheck.domain.models import AuthorizationStatus, ChecklistItem, Region
from exitcheck.infra import InMemoryStore, InMemoryStreakStateRepository


class FakeLocationService:
    """Records platform calls; state is set directly by tests."""

    def __init__(
        self,
        status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_ALWAYS,
        monitoring_available: bool = True,
    ) -> None:
        self.status = status
        self.monitoring_available = monitoring_available
        self.monitored: dict[str, Region] = {}
        self.start_calls: list[Region] = []
        self.stop_calls: list[Region] = []
        self.when_in_use_requests = 0
        self.always_requests = 0
        self.location_requests = 0

    def authorization_status(self) -> AuthorizationStatus:
        return self.status

    def is_monitoring_available(self) -> bool:
        return self.monitoring_available

    def request_when_in_use_authorization(self) -> None:
        self.when_in_use_requests += 1

    def request_always_authorization(self) -> None:
        self.always_requests += 1

    def request_location(self) -> None:
        self.location_requests += 1

    def start_monitoring(self, region: Region) -> None:
        self.start_calls.append(region)
        self.monitored[region.identifier] = region

    def stop_monitoring(self, region: Region) -> None:
        self.stop_calls.append(region)
        self.monitored.pop(region.identifier, None)


class FakeNotificationService:
    def __init__(self) -> None:
        self.prompts = 0

    def schedule_exit_prompt(self) -> None:
        self.prompts += 1


class FakeClock:
    """Settable clock; advance() moves it forward."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# Monday 2024-01-08, 08:30 UTC
MONDAY_MORNING = datetime(2024, 1, 8, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_data_dir: Path) -> Generator[Config, None, None]:
    """Create a test configuration."""
    config = Config(
        data_dir=temp_data_dir,
        db_name="test_db",
        streak_state_file="test_streak.json",
        default_radius=100.0,
        auto_check_phone=True,
        ask_for_feedback=True,
        feedback_after_exits=5,
        exit_debounce_seconds=60.0,
    )
    yield config


@pytest.fixture
def location_service() -> FakeLocationService:
    return FakeLocationService()


@pytest.fixture
def notification_service() -> FakeNotificationService:
    return FakeNotificationService()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(MONDAY_MORNING)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def streak_repository() -> InMemoryStreakStateRepository:
    return InMemoryStreakStateRepository()


@pytest.fixture
def default_items(store: InMemoryStore) -> list[ChecklistItem]:
    """The starter checklist: Keys, Wallet, Phone."""
    items = [
        ChecklistItem(title="Keys", emoji="🔑", order=0),
        ChecklistItem(title="Wallet", emoji="👛", order=1),
        ChecklistItem(title="Phone", emoji="📱", order=2),
    ]
    for item in items:
        store.insert(item)
    store.save()
    return items


@pytest.fixture
def container(
    test_config: Config,
    location_service: FakeLocationService,
    notification_service: FakeNotificationService,
) -> Generator[Container, None, None]:
    """Create a test container backed by KùzuDB in the temp directory."""
    # Reset any global state
    reset_config()
    reset_container()

    container = Container.create(
        location_service=location_service,
        notification_service=notification_service,
        config=test_config,
    )
    yield container

    # Cleanup
    container.close()
    reset_container()
    reset_config()


@pytest.fixture(autouse=True)
def set_test_env(temp_data_dir: Path) -> Generator[None, None, None]:
    """Set environment variables for tests."""
    old_env = os.environ.get("EXITCHECK_DATA_DIR")
    os.environ["EXITCHECK_DATA_DIR"] = str(temp_data_dir)
    yield
    if old_env:
        os.environ["EXITCHECK_DATA_DIR"] = old_env
    else:
        os.environ.pop("EXITCHECK_DATA_DIR", None)
