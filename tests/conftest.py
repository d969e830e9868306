import sys
from pathlib import Path

import pytest


# Ensure local src/ package imports work without editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from resurfacer.core.config import QueueConfig, reset_config  # noqa: E402
from resurfacer.core.review import ReviewScheduler  # noqa: E402
from resurfacer.feed.queue import InsertionQueueManager  # noqa: E402
from resurfacer.storage import InMemoryItemStore  # noqa: E402

from tests.mocks import FakeClock, FakeRenderer, FakeSlotSource, RecordingObserver  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow-running (use pytest -m 'not slow' to skip)"
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_config():
    """Reset global config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    """Deterministic millisecond clock starting at t=0."""
    return FakeClock(0)


@pytest.fixture
def scheduler(clock):
    return ReviewScheduler(clock=clock)


@pytest.fixture
def store():
    return InMemoryItemStore()


@pytest.fixture
def slot_source():
    """30 foreign items, 100px apart, all inside the look-ahead window at scroll 0."""
    return FakeSlotSource.with_rows(30)


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def manager(slot_source, renderer, observer):
    """Queue manager driven by explicit drain_step() calls."""
    return InsertionQueueManager(
        slot_source,
        renderer,
        observer,
        config=QueueConfig(drain_delay_seconds=0),
        auto_drain=False,
    )


@pytest.fixture
def temp_test_dir(tmp_path) -> Path:
    """Clean temporary directory for file-based tests."""
    test_dir = tmp_path / "resurfacer_test"
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir
