"""
Tile Palettes for the 2048 Board.

The engine does not render anything. It only remembers which palette the
player picked, and hosts look up colours here. Every colour is a
hex string without the leading '#'.
"""

from enum import Enum


class ColorScheme(Enum):
    CLASSIC = "Classic"
    DARK = "Dark Mode"
    OCEAN = "Ocean"
    SUNSET = "Sunset"
    FOREST = "Forest"
    CANDY = "Candy"

    @classmethod
    def from_name(cls, name):
        """
        Looks a scheme up by its display name ("Dark Mode") or member
        name ("DARK"). Raises ValueError for anything else.
        """
        if isinstance(name, cls):
            return name
        for scheme in cls:
            if name == scheme.value or name == scheme.name:
                return scheme
        raise ValueError(f"Unknown color scheme: {name!r}")

    def tile_color(self, value):
        """Background colour for a tile, or None for an empty cell."""
        if not value:
            return None
        palette, fallback = _TILE_COLORS[self]
        return palette.get(value, fallback)

    def text_color(self, value):
        """Label colour for a tile, or None for an empty cell."""
        if not value:
            return None
        light_text, dark_text = _TEXT_COLORS[self]
        # Small tiles are pale in most palettes and need dark labels
        if dark_text is not None and value <= 4:
            return dark_text
        return light_text


def _palette(*colors):
    return {2 ** (i + 1): color for i, color in enumerate(colors)}


# (palette for 2..2048, colour for anything above 2048)
_TILE_COLORS = {
    ColorScheme.CLASSIC: (_palette(
        "eee4da", "ede0c8", "f2b179", "f59563", "f67c5f", "f65e3b",
        "edcf72", "edcc61", "edc850", "edc53f", "edc22e"), "3c3a32"),
    ColorScheme.DARK: (_palette(
        "2d2d2d", "3d3d3d", "4d4d4d", "5d5d5d", "6d6d6d", "7d7d7d",
        "8d8d8d", "9d9d9d", "adadad", "bdbdbd", "cdcdcd"), "1a1a1a"),
    ColorScheme.OCEAN: (_palette(
        "dfe6e9", "b2bec3", "74b9ff", "0984e3", "00b894", "00cec9",
        "6c5ce7", "a29bfe", "fd79a8", "fdcb6e", "ffeaa7"), "0a3d62"),
    ColorScheme.SUNSET: (_palette(
        "fff5e6", "ffe4cc", "ffc299", "ff9966", "ff7033", "ff4500",
        "ff1a75", "e600ac", "cc00cc", "9900cc", "6600cc"), "d63031"),
    ColorScheme.FOREST: (_palette(
        "e8f5e9", "c8e6c9", "a5d6a7", "81c784", "66bb6a", "4caf50",
        "43a047", "388e3c", "2e7d32", "1b5e20", "0d3d10"), "0b6623"),
    ColorScheme.CANDY: (_palette(
        "ffccff", "ff99ff", "ff66ff", "ff33ff", "ff00ff", "cc00ff",
        "9900ff", "6600ff", "3300ff", "0000ff", "0000cc"), "e84393"),
}

# (default label colour, label colour for 2 and 4 or None)
_TEXT_COLORS = {
    ColorScheme.CLASSIC: ("ffffff", "776e65"),
    ColorScheme.DARK: ("ffffff", None),
    ColorScheme.OCEAN: ("ffffff", "0a3d62"),
    ColorScheme.SUNSET: ("ffffff", "5f3a22"),
    ColorScheme.FOREST: ("ffffff", "0b6623"),
    ColorScheme.CANDY: ("ffffff", None),
}
