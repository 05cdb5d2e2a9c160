import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from engine.state import SPIDER
from play import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                self.assertEqual(settings_store.DEFAULT_SETTINGS, settings_store.load_settings())

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", path):
                settings = dict(settings_store.DEFAULT_SETTINGS, game_type="Spider", spider_suits="4")
                settings_store.save_settings(settings)
                self.assertIn("[game]", path.read_text(encoding="utf-8"))
                self.assertEqual(settings, settings_store.load_settings())

    def test_invalid_values_fall_back(self):
        data = settings_store._sanitize({"game_type": "Hearts", "solitaire_draw_count": "2",
                                         "spider_suits": "x", "auto_move": "maybe", "card_style": "retro"})
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_json_shape(self):
        settings = settings_store.settings_from_json(
            '{"gameType": "Spider", "spiderSuits": 1, "autoMove": false, "theme": "dark"}'
        )
        self.assertEqual("Spider", settings["game_type"])
        self.assertEqual("1", settings["spider_suits"])
        self.assertEqual("false", settings["auto_move"])
        self.assertEqual("dark", settings["theme"])
        with self.assertLogs("play.settings_store", level="WARNING"):
            self.assertEqual(settings_store.DEFAULT_SETTINGS, settings_store.settings_from_json("{oops"))

    def test_config_from_settings(self):
        config = settings_store.config_from_settings({"gameType": SPIDER, "spiderSuits": "4", "autoMove": "off"},
                                                     seed=9)
        self.assertEqual(SPIDER, config.game_type)
        self.assertEqual(4, config.spider_suits)
        self.assertFalse(config.auto_move)
        self.assertEqual(9, config.seed)


if __name__ == "__main__":
    unittest.main()
