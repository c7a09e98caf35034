import os
import sys
from pathlib import Path

import pytest

# Keep tests off any real gateway or Redis before settings import
os.environ.setdefault("GATEWAY_MODE", "mock")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ENV", "test")

# Add the backend directory so `inquiry` package imports resolve during tests
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.append(str(BACKEND_DIR))

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def _reset_shared_state():
    from inquiry.core.cache import filter_value_cache
    from inquiry.core.rate_limit import limiter
    from inquiry.services.sequencing import search_sequencer

    filter_value_cache.clear()
    search_sequencer.reset()
    limiter.reset()
    yield
    filter_value_cache.clear()
    search_sequencer.reset()
