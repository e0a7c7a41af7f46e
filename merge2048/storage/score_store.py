"""
Persistence collaborators for the 2048 engine.

The engine never touches storage directly. It is handed a store at
construction, reads the best score (and the player's colour scheme) once,
and writes back only when a new best is reached or the scheme changes.
The storage key and format belong entirely to the store.
"""

import json
import logging
import os

from merge2048.config import BEST_SCORE_KEY, COLOR_SCHEME_KEY, DEFAULT_SETTINGS_PATH

logger = logging.getLogger(__name__)


class ScoreStore:
    """Interface every persistence backend implements."""

    def load_best_score(self):
        raise NotImplementedError

    def save_best_score(self, best_score):
        raise NotImplementedError

    def load_color_scheme(self):
        """Returns the saved scheme name, or None if nothing was saved."""
        raise NotImplementedError

    def save_color_scheme(self, name):
        raise NotImplementedError


class InMemoryScoreStore(ScoreStore):
    """
    Keeps the values in a dict. Used by tests, simulations and the
    Gymnasium environment, where nothing should leak to disk.
    """
    def __init__(self, best_score=0, color_scheme=None):
        self.values = {BEST_SCORE_KEY: best_score, COLOR_SCHEME_KEY: color_scheme}

    def load_best_score(self):
        return self.values[BEST_SCORE_KEY]

    def save_best_score(self, best_score):
        self.values[BEST_SCORE_KEY] = best_score

    def load_color_scheme(self):
        return self.values[COLOR_SCHEME_KEY]

    def save_color_scheme(self, name):
        self.values[COLOR_SCHEME_KEY] = name


class JsonScoreStore(ScoreStore):
    """
    Stores the settings as a single JSON object on disk.

    A missing file means "no data yet". A corrupt or unreadable file is
    logged and treated the same way, so a broken settings file never
    stops a game from starting. Write errors propagate.
    """
    def __init__(self, path=DEFAULT_SETTINGS_PATH):
        self.path = path

    def _read(self):
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read settings from %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring settings in %s: expected a JSON object", self.path)
            return {}
        return data

    def _write(self, key, value):
        data = self._read()
        data[key] = value

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.debug("Saved %s=%r to %s", key, value, self.path)

    def load_best_score(self):
        value = self._read().get(BEST_SCORE_KEY, 0)
        # bool is an int subclass; a stray true/false is not a score
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning("Ignoring invalid best score %r in %s", value, self.path)
            return 0
        return value

    def save_best_score(self, best_score):
        self._write(BEST_SCORE_KEY, int(best_score))

    def load_color_scheme(self):
        value = self._read().get(COLOR_SCHEME_KEY)
        return value if isinstance(value, str) else None

    def save_color_scheme(self, name):
        self._write(COLOR_SCHEME_KEY, name)
