"""MaskedField — a headless input-field controller around a MaskEngine.

Widget bindings translate their events into edit operations and hand them
here; the field answers with the text to show and where the caret goes,
and reports the bound value through one ``on_change`` callback.

Usage:

    values = []
    field = MaskedField("(NNN) NNN-NNNN", unmask=True, on_change=values.append)

    field.focus()              # caret snaps to the first slot (1)
    field.type_text("555")     # display "(555)    -    ", caret 6
    field.backspace()          # display "(55 )    -    ", caret 3
    values[-1]                 # "55"
"""

from __future__ import annotations
import logging
import re
from typing import Callable

from .engine import MaskEngine
from .tokens import TokenRegistry, TokenSpec
from .types import (
    Backspace,
    DeleteRange,
    EditOperation,
    EditResult,
    FocusSnap,
    Insert,
    MaskConfigError,
    Paste,
)

logger = logging.getLogger(__name__)

FieldValue = str | int

# Masked text that still reads as a number (surrounding blanks allowed)
_NUMERIC = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*")


class MaskedField:
    """Current text + selection of one masked input, and what it emits."""

    def __init__(
        self,
        pattern: str,
        registry: TokenRegistry | TokenSpec | None = None,
        *,
        initial: str | int | None = "",
        unmask: bool = False,
        parse_int: bool = False,
        hide_on_empty: bool = False,
        init_change: bool = False,
        on_change: Callable[[FieldValue], None] | None = None,
    ) -> None:
        if not pattern:
            raise MaskConfigError("Mask not provided")
        self.engine = MaskEngine(pattern, registry)
        self.unmask = unmask
        self.parse_int = parse_int
        self.hide_on_empty = hide_on_empty
        self._on_change = on_change
        self.text = self.engine.mask(initial)
        self.selection: tuple[int, int] = (0, 0)
        if init_change:
            self._emit()

    # ------------------------------------------------------------------
    # Edit operations
    # ------------------------------------------------------------------

    def apply(self, op: EditOperation) -> EditResult:
        """Run one edit operation against the engine and emit the new value."""
        handler = self._handlers.get(type(op))
        if handler is None:
            raise TypeError(f"Unsupported edit operation: {op!r}")
        result = handler(self, op)
        logger.debug("%s -> %r caret=%d", op, result.text, result.caret)
        self._commit(result)
        return result

    def _insert(self, op: Insert) -> EditResult:
        text, at = self._drop_selection(op.at)
        return self.engine.insert_at(text, at, op.text)

    def _paste(self, op: Paste) -> EditResult:
        if len(op.text) == len(self.engine.pattern):
            # Clipboard already holds a full masked value: replace everything
            masked = self.engine.mask(self.engine.unmask(op.text))
            return EditResult(masked, self.engine.next_editable_index(masked))
        text, at = self._drop_selection(op.at)
        return self.engine.insert_at(text, at, op.text)

    def _delete_range(self, op: DeleteRange) -> EditResult:
        return self.engine.delete_range(self.text, op.start, op.end)

    def _backspace(self, op: Backspace) -> EditResult:
        start, end = self.selection if op.at is None else (op.at, op.at)
        if start == end:
            # Remove the nearest filled slot to the left, stepping over literals
            target = self.engine.last_filled_index_at_or_before(self.text, start - 1)
            if target < 0:
                return EditResult(self.text, max(0, min(start, len(self.text))))
            start, end = target, target + 1
        return self.engine.delete_range(self.text, start, end)

    def _focus(self, op: FocusSnap) -> EditResult:
        return EditResult(self.text, self.engine.caret_on_focus_or_click(self.text, op.requested))

    _handlers: dict[type, Callable[[MaskedField, EditOperation], EditResult]] = {
        Insert: _insert,
        Paste: _paste,
        DeleteRange: _delete_range,
        Backspace: _backspace,
        FocusSnap: _focus,
    }

    def _drop_selection(self, at: int | None) -> tuple[str, int]:
        """Typing over a selection replaces it."""
        start, end = self.selection
        if at is None and start != end:
            cleared = self.engine.delete_range(self.text, start, end)
            return cleared.text, cleared.caret
        return self.text, self.caret if at is None else at

    def _commit(self, result: EditResult) -> None:
        changed = result.text != self.text
        self.text = result.text
        self.selection = (result.caret, result.caret)
        if changed:
            self._emit()

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    def type_text(self, text: str, at: int | None = None) -> EditResult:
        return self.apply(Insert(text, at))

    def paste(self, text: str, at: int | None = None) -> EditResult:
        return self.apply(Paste(text, at))

    def delete(self, start: int, end: int) -> EditResult:
        return self.apply(DeleteRange(start, end))

    def backspace(self, at: int | None = None) -> EditResult:
        return self.apply(Backspace(at))

    def focus(self, requested: int = 0) -> EditResult:
        return self.apply(FocusSnap(requested))

    click = focus

    def select(self, start: int, end: int | None = None) -> None:
        """Move the caret (or selection) without editing."""
        size = len(self.text)
        start = max(0, min(start, size))
        end = start if end is None else max(0, min(end, size))
        self.selection = (min(start, end), max(start, end))

    def set_value(self, value: str | int | None) -> None:
        """Replace the whole value from bound host state (treated as raw input)."""
        self.text = self.engine.mask(value)
        caret = self.engine.next_editable_index(self.text)
        self.selection = (caret, caret)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def caret(self) -> int:
        return self.selection[1]

    @property
    def is_empty(self) -> bool:
        return self.text == self.engine.skeleton

    @property
    def display(self) -> str:
        """What the widget should show."""
        if self.hide_on_empty and self.is_empty:
            return ""
        return self.text

    @property
    def value(self) -> FieldValue:
        """What gets written to the bound host state."""
        if self.hide_on_empty and self.is_empty:
            return ""
        if not self.unmask:
            # Masked text goes out as-is only while it still reads as a number
            if self.parse_int and not _NUMERIC.fullmatch(self.text):
                return ""
            return self.text
        raw = self.engine.unmask(self.text, self.parse_int)
        # A failed integer parse reads as "field cleared"
        return "" if raw is None else raw

    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(self.value)
