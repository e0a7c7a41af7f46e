import numpy as np

from merge2048.config import SPAWN_PROBABILITIES, SPAWN_VALUES


class RandomSource:
    """
    Randomness collaborator for the engine.

    The engine only needs two capabilities:
    - pick one cell uniformly from a list of empty cells
    - sample a new tile value (2 with p=0.9, 4 with p=0.1)

    Both are drawn from a single numpy Generator so that a seed (or a
    generator shared with a Gymnasium environment) makes a whole game
    reproducible.
    """
    def __init__(self, seed=None, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def choose_cell(self, cells):
        """Returns one (row, col) from `cells`, uniformly."""
        index = int(self.rng.integers(len(cells)))
        return cells[index]

    def tile_value(self):
        return int(self.rng.choice(SPAWN_VALUES, p=SPAWN_PROBABILITIES))
