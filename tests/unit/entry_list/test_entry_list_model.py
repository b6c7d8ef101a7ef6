"""Tests for the entry-list model: cursor bounds, scrolling, and loads."""

from __future__ import annotations

import random
import tempfile
import unittest
from pathlib import Path

from thunars.entry_list import EntryListModel
from thunars.errors import AccessError
from thunars.file_model import Entry, EntryKind


def _entry(directory: Path, name: str, is_dir: bool = False) -> Entry:
    kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
    return Entry(name=name, kind=kind, path=directory / name)


class FakeLister:
    """In-memory directory tree keyed by absolute path."""

    def __init__(self, tree: dict[Path, list[Entry]]) -> None:
        self.tree = tree
        self.calls: list[tuple[Path, bool]] = []

    def __call__(self, directory: Path, show_hidden: bool) -> list[Entry]:
        self.calls.append((directory, show_hidden))
        if directory not in self.tree:
            raise AccessError(f"Cannot read {directory}")
        entries = self.tree[directory]
        if not show_hidden:
            entries = [entry for entry in entries if not entry.name.startswith(".")]
        return list(entries)


def _scenario_tree() -> dict[Path, list[Entry]]:
    root = Path("/")
    a = Path("/a")
    b = a / "b"
    return {
        root: [_entry(root, "a", is_dir=True)],
        a: [_entry(a, "b", is_dir=True), _entry(a, "c.txt"), _entry(a, "d.txt")],
        b: [_entry(b, "inner.txt")],
    }


def _numbered(directory: Path, count: int) -> list[Entry]:
    return [_entry(directory, f"f{idx:03d}") for idx in range(count)]


class EntryListModelTests(unittest.TestCase):
    def test_load_resets_cursor_and_scroll(self) -> None:
        model = EntryListModel(lister=FakeLister(_scenario_tree()))
        model.load(Path("/a"))

        self.assertEqual(model.cursor, 0)
        self.assertEqual(model.scroll_offset, 0)
        self.assertEqual(model.selected_entry.name, "b")

    def test_down_twice_then_select_returns_file_to_open(self) -> None:
        model = EntryListModel(lister=FakeLister(_scenario_tree()))
        model.load(Path("/a"))

        model.move_cursor(1)
        model.move_cursor(1)
        opened = model.enter_selected()

        self.assertEqual(model.selected_entry.name, "d.txt")
        self.assertEqual(opened, Path("/a/d.txt"))
        self.assertEqual(model.directory, Path("/a"))

    def test_enter_directory_loads_it(self) -> None:
        model = EntryListModel(lister=FakeLister(_scenario_tree()))
        model.load(Path("/a"))

        self.assertIsNone(model.enter_selected())
        self.assertEqual(model.directory, Path("/a/b"))
        self.assertEqual(model.selected_entry.name, "inner.txt")

    def test_empty_listing_has_no_cursor_and_ignores_moves(self) -> None:
        empty = Path("/empty")
        model = EntryListModel(lister=FakeLister({empty: []}))
        model.load(empty)

        self.assertIsNone(model.cursor)
        self.assertFalse(model.move_cursor(3))
        self.assertIsNone(model.enter_selected())
        self.assertIsNone(model.cursor)

    def test_cursor_clamps_to_bounds(self) -> None:
        model = EntryListModel(lister=FakeLister(_scenario_tree()))
        model.load(Path("/a"))

        model.move_cursor(50)
        self.assertEqual(model.cursor, 2)
        model.move_cursor(-50)
        self.assertEqual(model.cursor, 0)
        self.assertFalse(model.move_cursor(-1))

    def test_scroll_follows_cursor_through_viewport(self) -> None:
        directory = Path("/many")
        model = EntryListModel(lister=FakeLister({directory: _numbered(directory, 30)}), viewport_height=5)
        model.load(directory)

        model.move_cursor(7)
        self.assertEqual(model.scroll_offset, 3)
        self.assertEqual(model.visible_entries()[-1].name, "f007")

        model.move_cursor(-6)
        self.assertEqual(model.scroll_offset, 1)
        self.assertEqual(model.visible_entries()[0].name, "f001")

    def test_shrinking_viewport_keeps_cursor_visible(self) -> None:
        directory = Path("/many")
        model = EntryListModel(lister=FakeLister({directory: _numbered(directory, 30)}), viewport_height=20)
        model.load(directory)
        model.move_to(15)

        model.set_viewport_height(4)

        self.assertTrue(model.scroll_offset <= model.cursor < model.scroll_offset + 4)

    def test_failed_load_retains_previous_listing(self) -> None:
        model = EntryListModel(lister=FakeLister(_scenario_tree()))
        model.load(Path("/a"))
        model.move_cursor(2)

        with self.assertRaises(AccessError):
            model.load(Path("/missing"))

        self.assertEqual(model.directory, Path("/a"))
        self.assertEqual(model.cursor, 2)
        self.assertEqual([entry.name for entry in model.entries], ["b", "c.txt", "d.txt"])

    def test_ascend_selects_directory_just_left(self) -> None:
        model = EntryListModel(lister=FakeLister(_scenario_tree()))
        model.load(Path("/a/b"))

        self.assertTrue(model.ascend())
        self.assertEqual(model.directory, Path("/a"))
        self.assertEqual(model.selected_entry.name, "b")

    def test_ascend_at_root_is_noop(self) -> None:
        lister = FakeLister(_scenario_tree())
        model = EntryListModel(lister=lister)
        model.load(Path("/"))
        calls_before = len(lister.calls)

        self.assertFalse(model.ascend())
        self.assertEqual(model.directory, Path("/"))
        self.assertEqual(len(lister.calls), calls_before)

    def test_toggle_hidden_reloads_and_keeps_selection(self) -> None:
        directory = Path("/dots")
        entries = [_entry(directory, ".env"), _entry(directory, "main.py"), _entry(directory, "setup.py")]
        model = EntryListModel(lister=FakeLister({directory: entries}))
        model.load(directory)
        model.move_cursor(1)

        model.set_show_hidden(True)

        self.assertEqual([entry.name for entry in model.entries], [".env", "main.py", "setup.py"])
        self.assertEqual(model.selected_entry.name, "setup.py")

    def test_reload_falls_back_to_same_index_when_entry_vanished(self) -> None:
        directory = Path("/shrink")
        tree = {directory: _numbered(directory, 5)}
        model = EntryListModel(lister=FakeLister(tree))
        model.load(directory)
        model.move_to(4)

        tree[directory] = _numbered(directory, 3)
        model.reload()

        self.assertEqual(model.cursor, 2)

    def test_cursor_invariant_holds_under_random_operations(self) -> None:
        tree = _scenario_tree()
        many = Path("/a/b")
        tree[many] = _numbered(many, 40) + [_entry(many, "zz", is_dir=True)]
        tree[many / "zz"] = []
        model = EntryListModel(lister=FakeLister(tree), viewport_height=6)
        model.load(Path("/a"))
        rng = random.Random(7)

        for _ in range(500):
            op = rng.choice(["move", "move", "enter", "ascend", "resize"])
            if op == "move":
                model.move_cursor(rng.randint(-10, 10))
            elif op == "enter":
                model.enter_selected()
            elif op == "ascend":
                model.ascend()
            else:
                model.set_viewport_height(rng.randint(1, 12))

            if not model.entries:
                self.assertIsNone(model.cursor)
                continue
            self.assertIsNotNone(model.cursor)
            self.assertTrue(0 <= model.cursor < len(model.entries))
            self.assertTrue(model.scroll_offset <= model.cursor < model.scroll_offset + model.viewport_height)

    def test_real_directory_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "b").mkdir()
            (root / "c.txt").write_text("c", encoding="utf-8")
            model = EntryListModel()
            model.load(root)

            self.assertEqual([entry.name for entry in model.entries], ["b", "c.txt"])
            self.assertIsNone(model.enter_selected())
            self.assertEqual(model.directory, root / "b")
            self.assertIsNone(model.cursor)
            self.assertTrue(model.ascend())
            self.assertEqual(model.selected_entry.name, "b")


if __name__ == "__main__":
    unittest.main()
