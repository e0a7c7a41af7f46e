import unittest

from merge2048.game.color_schemes import ColorScheme


class TestColorScheme(unittest.TestCase):

    def test_six_schemes(self):
        self.assertEqual([s.value for s in ColorScheme],
                         ["Classic", "Dark Mode", "Ocean", "Sunset", "Forest", "Candy"])

    def test_from_name(self):
        self.assertIs(ColorScheme.from_name("Dark Mode"), ColorScheme.DARK)
        self.assertIs(ColorScheme.from_name("SUNSET"), ColorScheme.SUNSET)
        self.assertIs(ColorScheme.from_name(ColorScheme.OCEAN), ColorScheme.OCEAN)
        with self.assertRaises(ValueError):
            ColorScheme.from_name("Neon")

    def test_classic_tile_colors(self):
        self.assertEqual(ColorScheme.CLASSIC.tile_color(2), "eee4da")
        self.assertEqual(ColorScheme.CLASSIC.tile_color(2048), "edc22e")
        self.assertEqual(ColorScheme.CLASSIC.tile_color(4096), "3c3a32")

    def test_every_scheme_covers_standard_tiles(self):
        for scheme in ColorScheme:
            for exponent in range(1, 12):
                self.assertIsNotNone(scheme.tile_color(2 ** exponent))
                self.assertIsNotNone(scheme.text_color(2 ** exponent))

    def test_empty_cell_has_no_color(self):
        for scheme in ColorScheme:
            self.assertIsNone(scheme.tile_color(None))
            self.assertIsNone(scheme.text_color(None))
            self.assertIsNone(scheme.tile_color(0))

    def test_text_color_for_small_tiles(self):
        self.assertEqual(ColorScheme.CLASSIC.text_color(2), "776e65")
        self.assertEqual(ColorScheme.CLASSIC.text_color(8), "ffffff")
        self.assertEqual(ColorScheme.DARK.text_color(2), "ffffff")


if __name__ == "__main__":
    unittest.main()
