"""input-mask — format free-form text through fixed input masks and back."""

from .engine import MaskEngine
from .field import MaskedField
from .tokens import TokenRegistry, DEFAULT_REGISTRY, DEFAULT_TOKENS
from .transforms import blank_skeleton, mask, unmask, token_slots
from .editing import (
    next_editable_index, last_filled_index_at_or_before,
    insert_at, delete_range, caret_on_focus_or_click,
)
from .config import create_engine, create_field, load_config, load_from_yaml
from .types import (
    BLANK, EditResult, MaskConfigError,
    Insert, Paste, DeleteRange, Backspace, FocusSnap,
)

__all__ = [
    "MaskEngine", "MaskedField",
    "TokenRegistry", "DEFAULT_REGISTRY", "DEFAULT_TOKENS",
    "blank_skeleton", "mask", "unmask", "token_slots",
    "next_editable_index", "last_filled_index_at_or_before",
    "insert_at", "delete_range", "caret_on_focus_or_click",
    "create_engine", "create_field", "load_config", "load_from_yaml",
    "BLANK", "EditResult", "MaskConfigError",
    "Insert", "Paste", "DeleteRange", "Backspace", "FocusSnap",
]
__version__ = "0.1.0"
