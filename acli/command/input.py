"""Single-line editable text buffer for command arguments."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TextInput:
    text: str = ""
    cursor: int = 0

    def insert(self, chunk: str) -> None:
        self.text = self.text[: self.cursor] + chunk + self.text[self.cursor :]
        self.cursor += len(chunk)

    def delete_back(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete_forward(self) -> None:
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def move(self, delta: int) -> None:
        self.cursor = max(0, min(len(self.text), self.cursor + delta))

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0
