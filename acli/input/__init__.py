"""Input-layer public API: raw key decoding and key-combo dispatch tables."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import _PENDING_BYTES, ESC_SEQUENCE_TIMEOUT_MS, is_printable_key, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "_PENDING_BYTES",
    "is_printable_key",
    "read_key",
]
