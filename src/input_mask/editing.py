"""Cursor-aware edit primitives.

Every primitive takes the current masked text plus the pattern and
registry, and works in masked-text coordinates.  Edits are applied to the
raw stream and re-masked, so the greedy fill in ``mask`` decides where
characters land and literals never have to be stepped over by hand.

Indices are clamped to ``[0, len(pattern)]``; nothing here raises on a bad
offset.
"""

from __future__ import annotations

from .tokens import TokenRegistry, TokenSpec, resolve
from .transforms import mask, unmask
from .types import BLANK, EditResult


def _clamp(index: int, upper: int) -> int:
    return max(0, min(index, upper))


def _is_filled(masked: str, pattern: str, reg: TokenRegistry, index: int) -> bool:
    if index >= len(masked):
        return False
    char = masked[index]
    return char != BLANK and reg.accepts(pattern[index], char)


def _raw_between(masked: str, pattern: str, reg: TokenRegistry, start: int, end: int) -> str:
    """Raw characters held by the token slots in ``[start, end)``."""
    return unmask(masked[start:end], pattern[start:end], reg)


def next_editable_index(
    masked: str,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None = None,
) -> int:
    """First unfilled token slot, or ``len(pattern)`` when the mask is full."""
    reg = resolve(registry)
    for i, symbol in enumerate(pattern):
        if reg.is_token(symbol) and (i >= len(masked) or masked[i] == BLANK):
            return i
    return len(pattern)


def last_filled_index_at_or_before(
    masked: str,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None,
    from_index: int,
) -> int:
    """Highest filled token slot ``<= from_index``, or -1 if there is none."""
    reg = resolve(registry)
    for i in range(min(from_index, len(pattern) - 1), -1, -1):
        if reg.is_token(pattern[i]) and _is_filled(masked, pattern, reg, i):
            return i
    return -1


def insert_at(
    masked: str,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None,
    caret: int,
    text: str,
) -> EditResult:
    """Splice ``text`` into the raw stream at ``caret`` and re-mask.

    The new caret sits right after the inserted content (the next editable
    slot of ``prefix + text``), not at the end of the whole value.
    """
    reg = resolve(registry)
    caret = _clamp(caret, len(pattern))
    prefix = _raw_between(masked, pattern, reg, 0, caret)
    suffix = _raw_between(masked, pattern, reg, caret, len(pattern))

    new_text = mask(prefix + text + suffix, pattern, reg)
    head = mask(prefix + text, pattern, reg)
    return EditResult(new_text, next_editable_index(head, pattern, reg))


def delete_range(
    masked: str,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None,
    start: int,
    end: int,
) -> EditResult:
    """Blank every token slot in ``[start, end)`` and re-mask.

    Re-masking from the raw text closes the gap.  The caret stays at
    ``start`` when a slot was freed; a range holding only literals moves
    it right after the last filled slot before ``start``, so backspacing
    walks left over literals without stopping on them.
    """
    reg = resolve(registry)
    size = len(pattern)
    start, end = sorted((_clamp(start, size), _clamp(end, size)))

    chars = list(masked[:size])
    freed = False
    for i in range(start, min(end, len(chars))):
        if reg.is_token(pattern[i]):
            chars[i] = BLANK
            freed = True

    new_text = mask(unmask("".join(chars), pattern, reg), pattern, reg)
    if freed or start == end:
        return EditResult(new_text, start)
    previous = last_filled_index_at_or_before(new_text, pattern, reg, start - 1)
    return EditResult(new_text, previous + 1 if previous >= 0 else start)


def caret_on_focus_or_click(
    masked: str,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None,
    requested: int,
) -> int:
    """Snap the caret to the first gap; leave it where asked once the mask is full."""
    reg = resolve(registry)
    index = next_editable_index(masked, pattern, reg)
    if index < len(pattern):
        return index
    return _clamp(requested, len(masked))
