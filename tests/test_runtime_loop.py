"""Tests for the interactive loop and pager bootstrap with fake terminals."""

from __future__ import annotations

import contextlib
import io
import os
import unittest
from unittest import mock

from linkpager.controller import PagerConfig
from linkpager.input import keys
from linkpager.runtime import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from linkpager.runtime import app as app_mod
from support import make_controller, numbered_links


class FakeTerminal:
    def __init__(self) -> None:
        self.events: list[str] = []

    @contextlib.contextmanager
    def raw_mode(self):
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("exit")


class ScriptedInput:
    def __init__(self, tokens) -> None:
        self.tokens = list(tokens)
        self.timeouts: list[int | None] = []

    def __call__(self, fd: int, timeout_ms: int | None = None) -> str:
        self.timeouts.append(timeout_ms)
        if not self.tokens:
            raise AssertionError("loop asked for more keys than scripted")
        return self.tokens.pop(0)


class RunMainLoopTests(unittest.TestCase):
    def run_loop(self, controller, tokens, sizes=None, terminal=None):
        terminal = FakeTerminal() if terminal is None else terminal
        reader = ScriptedInput(tokens)
        frames = []
        size_iter = iter(sizes or [])
        default = os.terminal_size((80, controller.term_rows))

        def terminal_size() -> os.terminal_size:
            return next(size_iter, default)

        callbacks = RuntimeLoopCallbacks(
            read_key=reader,
            render_frame=lambda frame, width: frames.append((frame, width)),
            terminal_size=terminal_size,
        )
        run_main_loop(controller, terminal, 0, RuntimeLoopTiming(), callbacks)
        return terminal, reader, frames

    def test_renders_only_when_something_changed(self) -> None:
        controller, _, _ = make_controller(numbered_links(3))
        terminal, _, frames = self.run_loop(controller, ["n", "", "z", "q"])
        self.assertEqual(terminal.events, ["enter", "exit"])
        self.assertEqual(len(frames), 2)
        self.assertEqual(frames[1][0].selected.index, 0)
        self.assertTrue(controller.finished)

    def test_width_change_forces_render(self) -> None:
        controller, _, _ = make_controller(numbered_links(3), term_rows=24)
        sizes = [os.terminal_size((80, 24)), os.terminal_size((100, 24))]
        _, _, frames = self.run_loop(controller, ["", "q"], sizes=sizes)
        self.assertEqual([width for _, width in frames], [80, 100])

    def test_height_change_resizes_controller(self) -> None:
        controller, _, _ = make_controller(numbered_links(3), term_rows=24)
        sizes = [os.terminal_size((80, 24)), os.terminal_size((80, 8))]
        _, _, frames = self.run_loop(controller, ["", "q"], sizes=sizes)
        self.assertEqual(frames[-1][0].document_rows, 7)

    def test_status_message_uses_short_poll(self) -> None:
        controller, _, _ = make_controller(numbered_links(1), config=PagerConfig())
        _, reader, _ = self.run_loop(controller, ["n", keys.ENTER_CR, "q"])
        timing = RuntimeLoopTiming()
        self.assertEqual(reader.timeouts[0], timing.idle_poll_ms)
        self.assertEqual(reader.timeouts[-1], timing.status_poll_ms)

    def test_closed_keyboard_ends_loop(self) -> None:
        controller, _, _ = make_controller(numbered_links(2))
        terminal, reader, frames = self.run_loop(controller, [keys.EOF])
        self.assertEqual(terminal.events, ["enter", "exit"])
        self.assertEqual(len(reader.timeouts), 1)
        self.assertEqual(len(frames), 1)

    def test_terminal_restored_when_loop_raises(self) -> None:
        controller, _, _ = make_controller(numbered_links(1))
        terminal = FakeTerminal()
        with self.assertRaises(AssertionError):
            self.run_loop(controller, ["n"], terminal=terminal)
        self.assertEqual(terminal.events, ["enter", "exit"])


class RunPagerTests(unittest.TestCase):
    def test_nopager_writes_content_through(self) -> None:
        out = io.StringIO()
        with mock.patch.object(app_mod.sys, "stdout", out):
            app_mod.run_pager(b"a \x1b]8;;x\x1b\\link\x1b]8;;\x1b\\\n", PagerConfig(), nopager=True)
        self.assertEqual(out.getvalue(), "a \x1b]8;;x\x1b\\link\x1b]8;;\x1b\\\n")

    def test_nopager_keeps_bytes_that_are_not_utf8(self) -> None:
        raw = io.BytesIO()
        out = io.TextIOWrapper(raw, encoding="utf-8")
        with mock.patch.object(app_mod.sys, "stdout", out):
            app_mod.run_pager(b"caf\xe9 \xff\n", PagerConfig(), nopager=True)
        self.assertEqual(raw.getvalue(), b"caf\xe9 \xff\n")

    def test_interactive_session_is_wired_to_tty(self) -> None:
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, write_fd)
        stdout = mock.Mock()
        stdout.fileno.return_value = 1
        with contextlib.ExitStack() as stack:
            stack.enter_context(mock.patch.object(app_mod.sys, "stdout", stdout))
            stack.enter_context(mock.patch.object(app_mod.os, "isatty", return_value=True))
            stack.enter_context(mock.patch.object(app_mod, "open_keyboard_tty", return_value=read_fd))
            terminal_cls = stack.enter_context(mock.patch.object(app_mod, "TerminalController"))
            terminal_cls.return_value.size.return_value = os.terminal_size((80, 10))
            run_loop = stack.enter_context(mock.patch.object(app_mod, "run_main_loop"))
            app_mod.run_pager(numbered_links(4), PagerConfig(opener="/bin/open"))

        terminal_cls.assert_called_once_with(read_fd, 1)
        controller, terminal, keyboard_fd = run_loop.call_args.args[:3]
        self.assertIs(terminal, terminal_cls.return_value)
        self.assertEqual(keyboard_fd, read_fd)
        self.assertEqual(controller.document.link_count, 4)
        self.assertEqual(controller.term_rows, 10)
        with self.assertRaises(OSError):
            os.fstat(read_fd)


if __name__ == "__main__":
    unittest.main()
