import random
import pytest
from wordscramble.game_logic import GameSession


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return GameSession(rng=random.Random(1234), clock=clock)


@pytest.fixture
def puzzle_session(clock):
    return GameSession(initial_words=["puzzle"], rng=random.Random(7), clock=clock)
