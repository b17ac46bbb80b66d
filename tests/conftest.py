"""Pytest configuration and fixtures."""

import pytest


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Deterministic clock for sliding-window assertions."""
    return FakeClock()


@pytest.fixture
def execution_log():
    """Append-only record of executed action labels."""
    return []


@pytest.fixture
def make_action(execution_log):
    """Build coroutine functions that log their label and return it."""

    def factory(label, result=None, error=None):
        async def action():
            execution_log.append(label)
            if error is not None:
                raise error
            return label if result is None else result

        return action

    return factory
