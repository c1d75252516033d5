"""
TextEditor: a small originator with content, selection and clipboard.

All three parts form the editor's state, so an undo restores the text *and*
where the caret was *and* what was on the clipboard.

State shape
-----------
    {"content": str, "selection": {"start": int, "end": int}, "clipboard": str}
"""

from __future__ import annotations

from typing import TypedDict

from statecraft.core.snapshot.snapshot import Snapshot


class Selection(TypedDict):
    start: int
    end: int


class EditorState(TypedDict):
    content: str
    selection: Selection
    clipboard: str


class TextEditor:
    """Plain-text buffer whose edits always apply to the current selection."""

    def __init__(self, content: str = "") -> None:
        self._content = content
        self._start = self._end = len(content)
        self._clipboard = ""

    # ------------------------------- Editing --------------------------------

    def insert(self, text: str) -> None:
        """Replace the selection with ``text`` and put the caret after it."""
        self._content = self._content[: self._start] + text + self._content[self._end :]
        caret = self._start + len(text)
        self._start = self._end = caret

    def select(self, start: int, end: int) -> None:
        """Select ``content[start:end]``; raises ``ValueError`` if out of range."""
        if not 0 <= start <= end <= len(self._content):
            raise ValueError(
                f"invalid selection ({start}, {end}) for content of length {len(self._content)}"
            )
        self._start, self._end = start, end

    def copy(self) -> None:
        self._clipboard = self._content[self._start : self._end]

    def paste(self) -> None:
        self.insert(self._clipboard)

    def delete(self) -> None:
        self.insert("")

    # ------------------------------- Queries --------------------------------

    @property
    def text(self) -> str:
        return self._content

    @property
    def selection(self) -> tuple[int, int]:
        return self._start, self._end

    @property
    def clipboard(self) -> str:
        return self._clipboard

    # ------------------------------- Originator -----------------------------

    def get_state(self) -> EditorState:
        return {
            "content": self._content,
            "selection": {"start": self._start, "end": self._end},
            "clipboard": self._clipboard,
        }

    def restore(self, snapshot: Snapshot[EditorState]) -> None:
        state = snapshot.value()
        self._content = state["content"]
        self._start = state["selection"]["start"]
        self._end = state["selection"]["end"]
        self._clipboard = state["clipboard"]


__all__ = ["EditorState", "Selection", "TextEditor"]
