"""
Game Configuration for the 2048 Engine.

This module acts as the central control panel for the rules of the game.
Every value here is a fixed design constant of the puzzle:
1.  Board Geometry: The grid is always BOARD_SIZE x BOARD_SIZE.
2.  Spawn Rule: New tiles are 2 (90%) or 4 (10%).
3.  Persistence: Keys and the default location of the settings file.
"""

import os

# --- Board Configuration ---
BOARD_SIZE = 4

# The objective tile. Reaching this sets the one-way "won" flag.
WIN_TILE = 2048

# --- Spawn Config ---
STARTING_TILES = 2
SPAWN_VALUES = (2, 4)
SPAWN_PROBABILITIES = (0.9, 0.1)

# --- Persistence Config ---
BEST_SCORE_KEY = "TwentyFortyEight_BestScore"
COLOR_SCHEME_KEY = "TwentyFortyEight_ColorScheme"
DEFAULT_SETTINGS_PATH = os.path.expanduser("~/.merge2048/settings.json")
