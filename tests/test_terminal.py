"""Tests for terminal mode switching and signal-to-exit conversion."""

from __future__ import annotations

import os
import signal
import termios
import unittest
from unittest import mock

from acli.runtime.terminal import TerminalController, exit_on_signals


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("acli.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "acli.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("acli.runtime.terminal.os.write") as write_mock, mock.patch(
            "acli.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("acli.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


class ExitOnSignalsTests(unittest.TestCase):
    def test_sigterm_becomes_system_exit_and_handler_is_restored(self) -> None:
        before = signal.getsignal(signal.SIGTERM)

        with self.assertRaises(SystemExit) as ctx:
            with exit_on_signals((signal.SIGTERM,)):
                os.kill(os.getpid(), signal.SIGTERM)

        self.assertEqual(ctx.exception.code, 128 + signal.SIGTERM)
        self.assertEqual(signal.getsignal(signal.SIGTERM), before)


if __name__ == "__main__":
    unittest.main()
