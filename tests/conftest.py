import pytest


class ScriptedRng:
    """Stand-in for ``np.random.Generator`` that replays fixed draws."""

    def __init__(self, draws, ints=()):
        self.draws = list(draws)
        self.ints = list(ints)
        self.calls = 0

    def random(self):
        self.calls += 1
        value = self.draws[(self.calls - 1) % len(self.draws)]
        return value

    def integers(self, n):
        return self.ints.pop(0) % n


@pytest.fixture
def scripted_rng():
    return ScriptedRng
