"""Tests for JSON config loading and browser settings."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from thunars import config
from thunars.errors import ConfigError
from thunars.hints import DEFAULT_HINT_ALPHABET


class BrowserSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "thunars" / "config.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def write(self, payload: object) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(payload), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        settings = config.load_settings()

        self.assertEqual(settings.hint_alphabet, DEFAULT_HINT_ALPHABET)
        self.assertFalse(settings.show_hidden)
        self.assertTrue(settings.preview)
        self.assertEqual(settings.keymap.action_for("normal", "q"), "exit")

    def test_malformed_json_raises_config_error(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")

        with self.assertRaises(ConfigError):
            config.load_settings()

    def test_non_object_raises_config_error(self) -> None:
        self.write(["show_hidden"])

        with self.assertRaises(ConfigError):
            config.load_settings()

    def test_key_override_replaces_action_keys(self) -> None:
        self.write({"keys": {"normal": {"scroll_down": ["j", "down"], "scroll_up": "k"}}})

        keymap = config.load_settings().keymap

        self.assertEqual(keymap.action_for("normal", "j"), "scroll_down")
        self.assertEqual(keymap.action_for("normal", "DOWN"), "scroll_down")
        self.assertEqual(keymap.action_for("normal", "k"), "scroll_up")
        self.assertIsNone(keymap.action_for("normal", "n"))

    def test_unknown_action_raises_config_error(self) -> None:
        self.write({"keys": {"normal": {"teleport": "t"}}})

        with self.assertRaises(ConfigError):
            config.load_settings()

    def test_bad_hint_alphabet_raises_config_error(self) -> None:
        self.write({"hint_alphabet": "aaaa"})

        with self.assertRaises(ConfigError):
            config.load_settings()

    def test_hint_alphabet_is_deduplicated(self) -> None:
        self.write({"hint_alphabet": "ABab"})

        self.assertEqual(config.load_settings().hint_alphabet, "ab")

    def test_scalars_fall_back_on_wrong_types(self) -> None:
        self.write(
            {
                "scroll_step": True,
                "max_candidates": -3,
                "show_hidden": "yes",
                "style": "   ",
                "search_command": "fd",
                "open_command": ["code", "--wait", "{path}"],
            }
        )

        settings = config.load_settings()

        self.assertEqual(settings.scroll_step, 1)
        self.assertEqual(settings.max_candidates, config.DEFAULT_MAX_CANDIDATES)
        self.assertFalse(settings.show_hidden)
        self.assertEqual(settings.style, config.DEFAULT_STYLE)
        self.assertIsNone(settings.search_command)
        self.assertEqual(settings.open_command, ("code", "--wait", "{path}"))

    def test_show_hidden_round_trips_and_keeps_other_keys(self) -> None:
        self.write({"style": "nord"})

        config.save_show_hidden(True)

        self.assertTrue(config.load_settings().show_hidden)
        data = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(data, {"style": "nord", "show_hidden": True})

    def test_show_hidden_save_skips_broken_file(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[", encoding="utf-8")

        config.save_show_hidden(True)

        self.assertEqual(self.config_path.read_text(encoding="utf-8"), "[")

    def test_resolve_config_path(self) -> None:
        self.assertEqual(config.resolve_config_path(None), self.config_path)
        self.assertEqual(config.resolve_config_path("/tmp/x.json"), Path("/tmp/x.json"))


if __name__ == "__main__":
    unittest.main()
