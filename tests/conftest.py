"""Shared pytest fixtures for the simulator tests."""

import pytest

from devdeck.config import Config
from devdeck.engine.setup import setup


class ScriptedRandom:
    """Stand-in RNG: random() replays the given values, shuffle() keeps order."""

    def __init__(self, values=()):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)

    def shuffle(self, x):
        pass


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def cfg(tmp_path):
    """Reference rule set, quiet batch settings."""
    return Config(games=5, progress_every=0, out_dir=str(tmp_path / "summaries"))


@pytest.fixture
def game(cfg):
    """A fresh game whose coin flips must be scripted explicitly."""
    return setup(cfg, ScriptedRandom())


def _give(player, resources):
    for res in player.resources:
        player.resources[res] = resources.get(res, 0)
    return player


@pytest.fixture
def give():
    """Set a player's resource counts (unnamed types drop to zero)."""
    return _give
