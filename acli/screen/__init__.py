"""Interactive screen state: intents, reducer, and key translation."""

from __future__ import annotations

from . import intents
from .keymap import key_hints, translate_key
from .machine import TRANSITIONS, ScreenStateMachine, Transition
from .state import AppState, CommandBuilder, CommandStep, Screen

__all__ = [
    "AppState",
    "CommandBuilder",
    "CommandStep",
    "Screen",
    "ScreenStateMachine",
    "TRANSITIONS",
    "Transition",
    "intents",
    "key_hints",
    "translate_key",
]
