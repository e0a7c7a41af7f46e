import gymnasium
from gymnasium import spaces
import numpy as np

from merge2048.config import BOARD_SIZE


class Log2Wrapper(gymnasium.ObservationWrapper):
    """
    Converts raw tile values to their log2 representation.

    Tile values grow exponentially (2, 4, ... 2048). Agents see them on a
    linear scale instead:
    - empty -> 0.0
    - 2     -> 1.0
    - 2048  -> 11.0

    Args:
        env (gymnasium.Env): The environment to wrap.
        policy_type (str): 'mlp' or 'cnn'. 'cnn' adds a leading channel
                           axis, giving (1, 4, 4).
    """
    def __init__(self, env, policy_type="mlp"):
        super().__init__(env)

        if policy_type not in ["mlp", "cnn"]:
            raise ValueError(f"Unknown policy_type: {policy_type}. Must be 'mlp' or 'cnn'.")

        self.policy_type = policy_type

        if self.policy_type == "cnn":
            self.output_shape = (1, BOARD_SIZE, BOARD_SIZE)
        else:
            self.output_shape = (BOARD_SIZE, BOARD_SIZE)

        self.observation_space = spaces.Box(
            low=0.0,
            high=32.0,  # Sufficient upper bound (2^32)
            shape=self.output_shape,
            dtype=np.float32
        )

    def observation(self, obs):
        processed_obs = np.zeros(obs.shape, dtype=np.float32)

        # log2(0) is -inf, so only transform occupied cells
        positive_mask = (obs > 0)
        processed_obs[positive_mask] = np.log2(obs[positive_mask])

        return processed_obs.reshape(self.output_shape)
