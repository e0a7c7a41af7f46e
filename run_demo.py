import argparse
import time

import numpy as np

from merge2048.environments.game_env import Game2048Env
from merge2048.storage.score_store import JsonScoreStore

# Safety cap so a broken agent can't loop forever
MAX_STEPS_PER_EPISODE = 5000

ACTION_NAMES = ['Up', 'Right', 'Down', 'Left']

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", type=int, default=None) # reproducible spawns and actions
    parser.add_argument("--delay", type=float, default=0.2) # seconds between moves
    parser.add_argument("--settings", type=str, default=None) # JSON file for the best score
    args = parser.parse_args()

    store = JsonScoreStore(args.settings) if args.settings else None
    env = Game2048Env(render_mode="human", store=store)

    print("Environment created.")
    print(f"Action space: {env.action_space}")

    print("\n--- STARTING RANDOM AGENT DEMO ---\n")
    observation, info = env.reset(seed=args.seed)
    env.action_space.seed(args.seed)
    terminated = False
    truncated = False

    step_count = 0

    while not (terminated or truncated) and step_count < MAX_STEPS_PER_EPISODE:

        # Picks a random legal action
        mask = env.valid_action_mask()
        action = env.action_space.sample(mask=mask.astype(np.int8))

        print(f"\n--- Step {step_count} ---")
        print(f"Action taken: {ACTION_NAMES[action]}")

        observation, reward, terminated, truncated, info = env.step(action)

        print(f"Reward received: {reward}")
        step_count += 1

        time.sleep(args.delay)

    print("\n--- EPISODE/GAME FINISHED ---")
    print(f"Total steps: {step_count}")
    print(f"Final score: {info['score']} (best {info['best_score']})")
    print(f"Max tile: {info['max_tile']}")
