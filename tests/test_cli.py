"""Tests for the Typer CLI wiring."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from git_smart_permalink.cli import app, parse_lines
from git_smart_permalink.exceptions import GitCommandError, ValidationError
from git_smart_permalink.models import PermalinkCandidate, RepositoryType, SelectedLines

ONE = PermalinkCandidate(
    label="a.py",
    detail="master | https://github.com/o/r",
    description="[file]",
    url="https://github.com/o/r/blob/master/a.py",
)
TWO = PermalinkCandidate(
    label="a.py",
    detail="abc123 | https://github.com/o/r",
    description="[file]",
    url="https://github.com/o/r/blob/abc123/a.py",
)


class ParseLinesTests(unittest.TestCase):
    def test_valid_selections(self) -> None:
        self.assertEqual(parse_lines("10"), SelectedLines(10))
        self.assertEqual(parse_lines("10-15"), SelectedLines(10, 15))
        self.assertEqual(parse_lines(" 7 - 7 "), SelectedLines(7, 7))

    def test_invalid_selections(self) -> None:
        for value in ("", "0", "abc", "15-10", "1-"):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    parse_lines(value)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.file_path = Path(tmp.name) / "a.py"
        self.file_path.write_text("pass\n")

    def _invoke(self, *args: str):
        return self.runner.invoke(app, list(args), env={"GIT_PERMALINK_REPOSITORY_TYPE": ""})

    def test_single_candidate_is_printed_without_prompt(self) -> None:
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", return_value=[ONE]) as build:
            result = self._invoke("--repo-type", "github", "file", str(self.file_path), "--print")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), ONE.url)
        settings = build.call_args.args[3]
        self.assertIs(settings.repository_type, RepositoryType.GITHUB)
        self.assertIsNone(build.call_args.args[2])
        self.assertEqual(build.call_args.kwargs["command_name"], "file")

    def test_lines_command_passes_selection_and_launches(self) -> None:
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", return_value=[ONE]) as build:
            with mock.patch("git_smart_permalink.cli.typer.launch") as launch:
                result = self._invoke("lines", str(self.file_path), "--lines", "3-9")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(build.call_args.args[2], SelectedLines(3, 9))
        self.assertEqual(build.call_args.kwargs["command_name"], "lines")
        launch.assert_called_once_with(ONE.url)

    def test_picker_choice_is_opened(self) -> None:
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", return_value=[ONE, TWO]):
            with mock.patch("git_smart_permalink.cli.pick_candidate", return_value=TWO):
                result = self._invoke("file", str(self.file_path), "--print")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), TWO.url)

    def test_several_candidates_without_tty_fail(self) -> None:
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", return_value=[ONE, TWO]):
            result = self._invoke("file", str(self.file_path), "--print")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("requires a TTY", result.output)

    def test_ls_json(self) -> None:
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", return_value=[ONE, TWO]):
            result = self._invoke("ls", str(self.file_path), "--json")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), [ONE.as_dict(), TWO.as_dict()])

    def test_empty_resolution_is_not_an_error(self) -> None:
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", return_value=[]):
            with mock.patch("git_smart_permalink.cli.typer.launch") as launch:
                result = self._invoke("file", str(self.file_path))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No branch", result.output)
        launch.assert_not_called()

    def test_git_failure_is_reported(self) -> None:
        error = GitCommandError(["git", "remote", "-v"], 1, stderr="fatal: boom")
        with mock.patch("git_smart_permalink.cli.build_permalink_candidates", side_effect=error):
            result = self._invoke("file", str(self.file_path))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("fatal: boom", result.output)

    def test_missing_file(self) -> None:
        result = self._invoke("file", str(self.file_path.with_name("missing.py")))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("File not found", result.output)

    def test_invalid_repository_type(self) -> None:
        result = self._invoke("--repo-type", "gitlab", "file", str(self.file_path))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unsupported repository type", result.output)


if __name__ == "__main__":
    unittest.main()
