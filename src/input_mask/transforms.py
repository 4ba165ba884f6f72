"""Core transforms — raw text ⇄ masked text.

    mask("1234", "(N) NNN")     -> "(1) 234"
    unmask("(1) 234", "(N) NNN") -> "1234"

Filling is greedy and single-pass: each raw character is offered to the
next unfilled slot only.  If that slot rejects it, the character is
dropped; it is never retried against a later slot.
"""

from __future__ import annotations
import re

from .tokens import TokenRegistry, TokenSpec, resolve
from .types import BLANK

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def token_slots(pattern: str, registry: TokenRegistry | TokenSpec | None = None) -> list[int]:
    """Indices of every token slot in ``pattern``, left to right."""
    reg = resolve(registry)
    return [i for i, symbol in enumerate(pattern) if reg.is_token(symbol)]


def blank_skeleton(pattern: str, registry: TokenRegistry | TokenSpec | None = None) -> str:
    """The empty mask: literals verbatim, every token slot blank."""
    reg = resolve(registry)
    return "".join(BLANK if reg.is_token(symbol) else symbol for symbol in pattern)


def mask(
    raw: str | int | None,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None = None,
) -> str:
    """Format ``raw`` into ``pattern``.  Result is always ``len(pattern)`` long."""
    reg = resolve(registry)
    text = "" if raw is None else str(raw)
    out = list(blank_skeleton(pattern, reg))
    slots = token_slots(pattern, reg)

    filled = 0
    for char in text:
        if filled >= len(slots):
            break
        index = slots[filled]
        # A blank never counts as filling a slot, even for "X"
        if char != BLANK and reg.accepts(pattern[index], char):
            out[index] = char
            filled += 1
    return "".join(out)


def unmask(
    masked: str | None,
    pattern: str,
    registry: TokenRegistry | TokenSpec | None = None,
    parse_int: bool = False,
) -> str | int | None:
    """Strip literals and blanks from ``masked``.

    With ``parse_int`` the raw text is coerced to an ``int``; ``None`` is
    returned when it doesn't start with an integer.
    """
    reg = resolve(registry)
    text = masked or ""
    raw = "".join(
        text[i]
        for i, symbol in enumerate(pattern[:len(text)])
        if text[i] != BLANK and reg.accepts(symbol, text[i])
    )
    return parse_leading_int(raw) if parse_int else raw


def parse_leading_int(text: str) -> int | None:
    """Leading-integer parse: ``"12ab"`` → 12, ``""`` or ``"ab"`` → None."""
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None
