import matplotlib

matplotlib.use("Agg")

import pytest


class FixedSequenceRandom:
    """Random source replaying a fixed list of randint results."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def randint(self, a, b):
        value = self.values[self.calls]
        self.calls += 1
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def fixed_random():
    return FixedSequenceRandom
