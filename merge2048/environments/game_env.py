import logging

import gymnasium
from gymnasium import spaces
import numpy as np

from merge2048.config import BOARD_SIZE
from merge2048.game.grid_engine import Direction, GridEngine
from merge2048.game.random_source import RandomSource
from merge2048.storage.score_store import InMemoryScoreStore

logger = logging.getLogger(__name__)


class Game2048Env(gymnasium.Env):
    """
    Gymnasium host for the 2048 engine.

    Bots, agents and demos drive the game through this class instead of
    calling the engine directly:
    1.  Actions: 0:Up, 1:Right, 2:Down, 3:Left.
    2.  Observation: a copy of the raw 4x4 board (0 = empty).
    3.  Reward: the score gained by the move, or -1 for a move that
        changes nothing.

    The engine's random source shares `self.np_random`, so
    `reset(seed=...)` makes the whole episode reproducible.
    """
    metadata = {"render_modes": ["human"]}

    def __init__(self, render_mode=None, store=None):
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unknown render_mode: {render_mode}")

        self.render_mode = render_mode
        self.store = store if store is not None else InMemoryScoreStore()
        self.engine = None

        self.action_space = spaces.Discrete(4)
        self.observation_space = spaces.Box(low=0,
                                            high=np.iinfo(np.int32).max,
                                            shape=(BOARD_SIZE, BOARD_SIZE),
                                            dtype=np.int32)

        self._action_to_direction = {
            0: Direction.UP,
            1: Direction.RIGHT,
            2: Direction.DOWN,
            3: Direction.LEFT
        }

    def _get_info(self, valid=True):
        return {
            "score": self.engine.score,
            "best_score": self.engine.best_score,
            "move_count": self.engine.move_count,
            "max_tile": self.engine.max_tile,
            "num_empty_cells": len(self.engine.empty_cells()),
            "has_won": self.engine.has_won,
            "valid": valid
        }

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.engine = GridEngine(store=self.store,
                                 random_source=RandomSource(rng=self.np_random))
        observation = self.engine.board
        info = self._get_info()

        if self.render_mode == "human":
            self.render()
        return observation, info

    def step(self, action):
        if self.engine is None:
            raise RuntimeError("Call reset() before step()")
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}. Must be in {self.action_space}.")

        direction = self._action_to_direction[int(action)]
        score_before_move = self.engine.score

        valid_move = self.engine.move(direction)
        reward = float(self.engine.score - score_before_move) if valid_move else -1.0

        terminated = self.engine.is_game_over
        truncated = False
        observation = self.engine.board
        info = self._get_info(valid=valid_move)

        if terminated:
            logger.debug("Episode finished: score=%d max_tile=%d",
                         self.engine.score, self.engine.max_tile)

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def valid_action_mask(self):
        """Boolean mask [Up, Right, Down, Left] of moves that change the board."""
        if self.engine is None:
            raise RuntimeError("Call reset() before valid_action_mask()")
        legal = set(self.engine.available_moves())
        return np.array([self._action_to_direction[a] in legal for a in range(4)])

    def render(self):
        if self.render_mode == "human":
            print(self.engine)
