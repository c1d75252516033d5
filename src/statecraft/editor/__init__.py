"""Text editor originator used with the undo history."""

from __future__ import annotations

from .text_editor import EditorState, TextEditor

__all__ = ["EditorState", "TextEditor"]
