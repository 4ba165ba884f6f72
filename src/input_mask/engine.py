"""MaskEngine — a pattern and a registry bound together.

Usage:
    from input_mask import MaskEngine

    phone = MaskEngine("(NNN) NNN-NNNN")   # immutable, share freely

    phone.mask("5551234567")               # "(555) 123-4567"
    phone.unmask("(555) 123-4567")         # "5551234567"

    edit = phone.insert_at("(555)    -    ", 6, "1")
    edit.text, edit.caret                  # "(555) 1  -    ", 7
"""

from __future__ import annotations
from dataclasses import dataclass

from . import editing, transforms
from .tokens import TokenRegistry, TokenSpec, resolve
from .types import EditResult


@dataclass(frozen=True)
class MaskEngine:
    """Stateless formatter for one mask pattern."""

    pattern: str
    registry: TokenRegistry | TokenSpec | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", self.pattern or "")
        object.__setattr__(self, "registry", resolve(self.registry))

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    @property
    def skeleton(self) -> str:
        return transforms.blank_skeleton(self.pattern, self.registry)

    @property
    def slot_count(self) -> int:
        return len(transforms.token_slots(self.pattern, self.registry))

    def mask(self, raw: str | int | None) -> str:
        return transforms.mask(raw, self.pattern, self.registry)

    def unmask(self, masked: str | None, parse_int: bool = False) -> str | int | None:
        return transforms.unmask(masked, self.pattern, self.registry, parse_int)

    def is_complete(self, masked: str) -> bool:
        """True when every token slot is filled."""
        return self.next_editable_index(masked) == len(self.pattern)

    # ------------------------------------------------------------------
    # Edit primitives
    # ------------------------------------------------------------------

    def next_editable_index(self, masked: str) -> int:
        return editing.next_editable_index(masked, self.pattern, self.registry)

    def last_filled_index_at_or_before(self, masked: str, from_index: int) -> int:
        return editing.last_filled_index_at_or_before(
            masked, self.pattern, self.registry, from_index,
        )

    def insert_at(self, masked: str, caret: int, text: str) -> EditResult:
        return editing.insert_at(masked, self.pattern, self.registry, caret, text)

    def delete_range(self, masked: str, start: int, end: int) -> EditResult:
        return editing.delete_range(masked, self.pattern, self.registry, start, end)

    def caret_on_focus_or_click(self, masked: str, requested: int) -> int:
        return editing.caret_on_focus_or_click(masked, self.pattern, self.registry, requested)
