import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure the project packages are importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class ManualClock:
    """Clock whose instant only moves when a test advances it."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def t0():
    return datetime(2024, 5, 6, 9, 0, 0)


@pytest.fixture
def clock(t0):
    return ManualClock(t0)
