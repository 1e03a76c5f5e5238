"""
Shared test fixtures
"""

import os

# Keep test runs from writing log files; must be set before settings load
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest


class FakeClock:
    """Manually advanced clock in seconds"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
