"""Regression tests for raw-key decoding and the key-combo registry.

Bytes are fed through a real pipe so ``select`` timing behaves like a tty.
"""

import os
import time
import unittest

from acli.input import KeyComboBinding, KeyComboRegistry
from acli.input import keys as keys_mod


def _read_keys(payload: bytes, count: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, payload)
        return [keys_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        keys_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        keys_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        key = _read_keys(b"\x1b")[0]
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_and_ss3_sequences(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[A\x1b[B\x1bOC\x1b[D", 4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_tilde_sequences(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[5~\x1b[6~\x1b[3~", 3), ["PAGE_UP", "PAGE_DOWN", "DELETE"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_keys(b"\x1ba", 2), ["ESC", "a"])

    def test_control_tokens(self) -> None:
        self.assertEqual(
            _read_keys(b"\x03\x15\x7f\r\n", 5),
            ["CTRL_C", "CTRL_U", "BACKSPACE", "ENTER_CR", "ENTER_LF"],
        )

    def test_multibyte_utf8_is_one_key(self) -> None:
        self.assertEqual(_read_keys("é".encode("utf-8")), ["é"])

    def test_mouse_wheel_reports(self) -> None:
        self.assertEqual(
            _read_keys(b"\x1b[<64;10;5M\x1b[<65;3;4M", 2),
            ["MOUSE_WHEEL_UP:10:5", "MOUSE_WHEEL_DOWN:3:4"],
        )

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertEqual(keys_mod.read_key(read_fd, timeout_ms=5), "")
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_is_printable_key(self) -> None:
        self.assertTrue(keys_mod.is_printable_key("a"))
        self.assertTrue(keys_mod.is_printable_key(" "))
        self.assertFalse(keys_mod.is_printable_key("UP"))
        self.assertFalse(keys_mod.is_printable_key("\t"))


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_returns_handler_result(self) -> None:
        registry = KeyComboRegistry[str]().register_bindings(
            KeyComboBinding(("UP", "k"), lambda: "up"),
        )

        self.assertEqual(registry.dispatch("k"), "up")
        self.assertIn("UP", registry)
        self.assertIsNone(registry.dispatch("x"))

    def test_later_binding_overrides_and_normalizer_applies(self) -> None:
        registry = KeyComboRegistry[str](normalize=str.lower)
        registry.register_binding(KeyComboBinding(("Q",), lambda: "first"))

        @registry.bind("q")
        def _second() -> str:
            return "second"

        self.assertEqual(registry.dispatch("Q"), "second")


if __name__ == "__main__":
    unittest.main()
