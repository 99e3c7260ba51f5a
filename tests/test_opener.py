"""Tests for spawning the configured opener program."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from linkpager.controller import OpenRequest
from linkpager.opener import launch_opener


class LaunchOpenerTests(unittest.TestCase):
    def test_spawns_detached_process_with_target_argument(self) -> None:
        with mock.patch("linkpager.opener.subprocess.Popen") as popen:
            popen.return_value.pid = 4321
            error = launch_opener(OpenRequest(program="/usr/bin/opener", target="file://h/a.py#3"))
        self.assertIsNone(error)
        popen.assert_called_once_with(
            ["/usr/bin/opener", "file://h/a.py#3"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    def test_blank_program_is_rejected_without_spawning(self) -> None:
        with mock.patch("linkpager.opener.subprocess.Popen") as popen:
            error = launch_opener(OpenRequest(program="   ", target="http://x"))
        popen.assert_not_called()
        self.assertEqual(error, "Cannot open link: opener is empty.")

    def test_spawn_failure_becomes_message(self) -> None:
        with mock.patch(
            "linkpager.opener.subprocess.Popen",
            side_effect=FileNotFoundError("no such file"),
        ):
            error = launch_opener(OpenRequest(program="/missing", target="http://x"))
        self.assertIsNotNone(error)
        self.assertTrue(error.startswith("Failed to run opener /missing:"))
        self.assertIn("no such file", error)


if __name__ == "__main__":
    unittest.main()
