"""Tests for preview payloads and the preview cache."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from thunars.ansi import strip_ansi
from thunars.preview import PreviewCache, build_preview, colorize_source, looks_binary, sanitize_terminal_text


class PreviewPayloadTests(unittest.TestCase):
    def test_text_file_is_highlighted_and_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "mod.py"
            path.write_text("".join(f"value_{idx} = {idx}\n" for idx in range(50)), encoding="utf-8")

            preview = build_preview(path, is_dir=False, max_lines=10)

        self.assertEqual(preview.kind, "text")
        self.assertEqual(len(preview.lines), 10)
        self.assertEqual(strip_ansi(preview.lines[0]), "value_0 = 0")
        self.assertIn("\033[", "".join(preview.lines))

    def test_binary_file_gets_placeholder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.bin"
            path.write_bytes(b"\x00\x01\x02" * 10)

            preview = build_preview(path, is_dir=False)

        self.assertEqual(preview.kind, "binary")
        self.assertIn("binary file: 30 bytes", strip_ansi(preview.lines[0]))

    def test_directory_preview_lists_children(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / ".hidden").write_text("h", encoding="utf-8")

            preview = build_preview(root, is_dir=True)
            with_hidden = build_preview(root, is_dir=True, show_hidden=True)

        self.assertEqual([strip_ansi(line) for line in preview.lines], ["sub/", "a.txt"])
        self.assertIn(".hidden", [strip_ansi(line) for line in with_hidden.lines])

    def test_unreadable_directory_preview_is_an_error_payload(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            preview = build_preview(Path(tmp) / "gone", is_dir=True)

        self.assertEqual(preview.kind, "error")

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\tc\n"), "a\\x1b[2Jb\tc\n")
        self.assertTrue(looks_binary(b"ab\x00cd"))
        self.assertFalse(looks_binary(b"plain text"))

    def test_unknown_style_falls_back(self) -> None:
        rendered = colorize_source("x = 1\n", Path("x.py"), style="no-such-style")

        self.assertEqual(strip_ansi(rendered), "x = 1\n")


class PreviewCacheTests(unittest.TestCase):
    def test_cache_reuses_until_file_changes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_text("first\n", encoding="utf-8")
            cache = PreviewCache()

            first = cache.get(path, is_dir=False)
            self.assertIs(cache.get(path, is_dir=False), first)

            path.write_text("second version\n", encoding="utf-8")
            updated = cache.get(path, is_dir=False)

        self.assertEqual(strip_ansi(updated.lines[0]), "second version")

    def test_cache_is_bounded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = PreviewCache(max_entries=2)
            for idx in range(4):
                path = Path(tmp) / f"f{idx}.txt"
                path.write_text(f"{idx}\n", encoding="utf-8")
                cache.get(path, is_dir=False)

            self.assertEqual(len(cache._items), 2)


if __name__ == "__main__":
    unittest.main()
