"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs against an in-memory key-value store and a fake clock, so
timestamps and ids are deterministic and nothing touches the data
directory configured in storage.yaml.
"""

from collections.abc import Iterator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from blogpad.backend.context import AppContext
from blogpad.backend.core.config import get_app_config, get_settings
from blogpad.backend.repositories.entry import EntryRepository
from blogpad.backend.services.entry import EntryIdGenerator, EntryService
from blogpad.backend.storage import MemoryStore
from blogpad.backend.web.controller import BlogController, DisplayOptions

PROJECT_ROOT = Path(__file__).parent.parent


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def project_cwd(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Run every test from the project root with fresh configuration caches.

    find_project_root() walks up from the working directory, and the
    config getters are lru_cached.
    """
    monkeypatch.chdir(PROJECT_ROOT)
    monkeypatch.delenv("BLOGPAD_DATA_DIR", raising=False)
    monkeypatch.delenv("BLOGPAD_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


# =============================================================================
# Clock Fixtures
# =============================================================================


class FakeClock:
    """Returns start, start + step, start + 2 * step, ... on each call."""

    def __init__(
        self,
        start: datetime = datetime(2026, 10, 17, 7, 0, 0),
        step: timedelta = timedelta(minutes=1),
    ) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock starting 2026-10-17 07:00 UTC, one minute per call."""
    return FakeClock()


@pytest.fixture
def id_generator() -> EntryIdGenerator:
    """Id generator whose wall clock is frozen at 1000 ms."""
    return EntryIdGenerator(clock=lambda: 1000)


# =============================================================================
# Store and Service Fixtures
# =============================================================================


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def repo(store: MemoryStore) -> EntryRepository:
    """Entry repository on the in-memory store."""
    return EntryRepository(store, key="blogs")


@pytest.fixture
def service(
    repo: EntryRepository,
    clock: FakeClock,
    id_generator: EntryIdGenerator,
) -> EntryService:
    """Entry service with a fake clock and deterministic ids."""
    return EntryService(repo, clock=clock, id_generator=id_generator)


@pytest.fixture
def display() -> DisplayOptions:
    """English display options so assertions stay readable."""
    return DisplayOptions(page_title="Test Blog", locale="en_GB", timezone="UTC")


@pytest.fixture
def controller(service: EntryService, display: DisplayOptions) -> BlogController:
    """Blog controller bound to the test service."""
    return BlogController(service, display)


@pytest.fixture
def context(store: MemoryStore, display: DisplayOptions, clock: FakeClock) -> AppContext:
    """Application context on the in-memory store."""
    return AppContext.build(store, entries_key="blogs", display=display, clock=clock)


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
