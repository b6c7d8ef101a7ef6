"""Tests for launching the external open command."""

from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from thunars.errors import LaunchError
from thunars.launcher import build_open_argv, default_open_command, open_path


class DefaultOpenCommandTests(unittest.TestCase):
    def test_visual_wins_over_editor(self) -> None:
        with mock.patch.dict("os.environ", {"VISUAL": "code --wait", "EDITOR": "vim"}, clear=True):
            self.assertEqual(default_open_command(), (["code", "--wait"], False))

    def test_editor_used_when_visual_missing(self) -> None:
        with mock.patch.dict("os.environ", {"EDITOR": "nvim"}, clear=True):
            self.assertEqual(default_open_command(), (["nvim"], False))

    def test_desktop_opener_runs_in_background(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            argv, background = default_open_command()

        self.assertIn(argv, (["xdg-open"], ["open"]))
        self.assertTrue(background)

    def test_path_placeholder_or_append(self) -> None:
        target = Path("/a/d.txt")

        self.assertEqual(build_open_argv(["less"], target), ["less", "/a/d.txt"])
        self.assertEqual(build_open_argv(["vim", "+1", "{path}"], target), ["vim", "+1", "/a/d.txt"])


class OpenPathTests(unittest.TestCase):
    def test_foreground_command_suspends_tui(self) -> None:
        calls: list[str] = []
        completed = subprocess.CompletedProcess(["vim"], 0)
        with mock.patch("thunars.launcher.shutil.which", return_value="/usr/bin/vim"), mock.patch(
            "thunars.launcher.subprocess.run", side_effect=lambda *a, **k: calls.append("run") or completed
        ) as run:
            open_path(
                Path("/a/d.txt"),
                command=["vim"],
                disable_tui_mode=lambda: calls.append("disable"),
                enable_tui_mode=lambda: calls.append("enable"),
            )

        self.assertEqual(calls, ["disable", "run", "enable"])
        self.assertEqual(run.call_args.args[0], ["vim", "/a/d.txt"])

    def test_nonzero_exit_raises_launch_error(self) -> None:
        with mock.patch("thunars.launcher.shutil.which", return_value="/usr/bin/vim"), mock.patch(
            "thunars.launcher.subprocess.run", return_value=subprocess.CompletedProcess(["vim"], 2)
        ):
            with self.assertRaises(LaunchError):
                open_path(Path("/a/d.txt"), command=["vim"])

    def test_missing_program_raises_launch_error(self) -> None:
        with mock.patch("thunars.launcher.shutil.which", return_value=None):
            with self.assertRaises(LaunchError) as ctx:
                open_path(Path("/a/d.txt"), command=["nosuchopener"])

        self.assertIn("nosuchopener", str(ctx.exception))

    def test_background_command_is_detached(self) -> None:
        with mock.patch("thunars.launcher.shutil.which", return_value="/usr/bin/xdg-open"), mock.patch(
            "thunars.launcher.subprocess.Popen"
        ) as popen:
            open_path(Path("/a/d.txt"), command=["xdg-open"], background=True)

        popen.assert_called_once()
        self.assertEqual(popen.call_args.args[0], ["xdg-open", "/a/d.txt"])
        self.assertTrue(popen.call_args.kwargs["start_new_session"])

    def test_background_start_failure_raises_launch_error(self) -> None:
        with mock.patch("thunars.launcher.shutil.which", return_value="/usr/bin/xdg-open"), mock.patch(
            "thunars.launcher.subprocess.Popen", side_effect=OSError("exec format error")
        ):
            with self.assertRaises(LaunchError):
                open_path(Path("/a/d.txt"), command=["xdg-open"], background=True)


if __name__ == "__main__":
    unittest.main()
