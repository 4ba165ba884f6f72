"""YAML/dict config loader for input-mask.

Supports loading from a YAML file or a plain dict (for embedding
a field definition in a larger form config).

Example YAML:

    input_mask:
      mask: "(NNN) NNN-NNNN"
      unmask: true             # emit raw text instead of masked text
      parse_int: false         # emit an int (requires unmask)
      hide_on_empty: false     # show "" while nothing is filled
      init_change: false       # emit the initial value on setup
      tokens:                  # extra / overridden token symbols
        H: "[0-9a-fA-F]"
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Callable

from .engine import MaskEngine
from .field import FieldValue, MaskedField
from .tokens import TokenRegistry, resolve
from .types import MaskConfigError

logger = logging.getLogger(__name__)


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "input_mask" key or flat
    if "input_mask" in data:
        data = data["input_mask"] or {}

    mask = data.get("mask")
    if not mask or not isinstance(mask, str):
        raise MaskConfigError("Mask not provided")

    tokens = data.get("tokens") or {}
    if not isinstance(tokens, dict):
        raise MaskConfigError(f"'tokens' must be a mapping, got {type(tokens).__name__}")

    return {
        "mask": mask,
        "tokens": {str(k): v for k, v in tokens.items()},
        "unmask": bool(data.get("unmask", False)),
        "parse_int": bool(data.get("parse_int", False)),
        "hide_on_empty": bool(data.get("hide_on_empty", False)),
        "init_change": bool(data.get("init_change", False)),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        cfg = load_config(yaml.safe_load(f))
    logger.debug("Loaded mask config from %s: %r", path, cfg["mask"])
    return cfg


def build_registry(tokens: dict[str, Any] | None) -> TokenRegistry:
    """Default registry plus any configured symbols."""
    return resolve(tokens or None)


def create_engine(config: dict[str, Any]) -> MaskEngine:
    """Create a MaskEngine from a config dict."""
    cfg = load_config(config)
    return MaskEngine(cfg["mask"], build_registry(cfg["tokens"]))


def create_field(
    config: dict[str, Any],
    *,
    initial: str | int | None = "",
    on_change: Callable[[FieldValue], None] | None = None,
) -> MaskedField:
    """Create a fully configured field from a config dict."""
    cfg = load_config(config)
    return MaskedField(
        cfg["mask"],
        build_registry(cfg["tokens"]),
        initial=initial,
        unmask=cfg["unmask"],
        parse_int=cfg["parse_int"],
        hide_on_empty=cfg["hide_on_empty"],
        init_change=cfg["init_change"],
        on_change=on_change,
    )

