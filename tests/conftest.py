"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from driver.solvers import RecordingSolver
from tests.helpers import NOW, FixedClock
from tests.helpers.fixtures import FIXTURES_DIR


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def solver() -> RecordingSolver:
    """A solver handle that records its notifications."""
    return RecordingSolver(solver_name="test-solver")


class FailingSolver:
    """Solver whose notification endpoint is down."""

    def __init__(self) -> None:
        self.attempts = 0

    def name(self) -> str:
        return "failing-solver"

    def notify_auction_result(self, auction_id: int, result: object) -> None:
        self.attempts += 1
        raise ConnectionError("solver unreachable")


@pytest.fixture
def failing_solver() -> FailingSolver:
    """A solver that raises on every notification."""
    return FailingSolver()
