"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens
such as ``UP``, ``PAGE_DOWN``, ``ENTER_CR`` or a single printable character.
Mouse wheel reports arrive as ``MOUSE_WHEEL_UP:<col>:<row>`` tokens.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\x01": "CTRL_A",
    b"\x05": "CTRL_E",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_TILDE_TOKENS: dict[bytes, str] = {
    b"1": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_text(fd: int, ch: bytes) -> str:
    data = ch
    for _ in range(_utf8_length(ch[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _decode_mouse(fd: int) -> str:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return "ESC"
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return "ESC"
    if btn & 0b0100_0000:
        if btn & 0b11 == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if btn & 0b11 == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
    return "MOUSE"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        return _decode_text(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_TOKENS.get(final, "ESC")
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    token = _CSI_FINAL_TOKENS.get(seq)
    if token is not None:
        return token
    if seq == b"<":
        return _decode_mouse(fd)
    if seq in _TILDE_TOKENS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _TILDE_TOKENS[seq]
    return "ESC"


def is_printable_key(key: str) -> bool:
    """True for single-character text tokens (never control or named keys)."""
    return len(key) == 1 and key.isprintable()
