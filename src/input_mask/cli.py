"""CLI interface for input-mask.

Usage:
    # Mask raw values (stdin: one value per line, stdout: masked values)
    printf '5551234567\n' | input-mask --mask '(NNN) NNN-NNNN' mask

    # Unmask (optionally as integers)
    printf '(555) 123-4567\n' | input-mask --mask '(NNN) NNN-NNNN' unmask --parse-int

    # Replay edit operations (stdin: JSON array, stdout: final field state)
    echo '[{"op":"type","text":"555"},{"op":"backspace"}]' | \
        input-mask --mask '(NNN) NNN-NNNN' replay

    # Custom tokens, or a YAML field config
    input-mask --mask 'HH:HH' --token 'H=[0-9a-fA-F]' mask
    input-mask --config field.yaml skeleton
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any

from .config import create_engine, create_field, load_config, load_from_yaml
from .types import Backspace, DeleteRange, EditOperation, FocusSnap, Insert, MaskConfigError, Paste


def _field_config(args: argparse.Namespace) -> dict[str, Any]:
    cfg: dict[str, Any] = load_from_yaml(args.config) if args.config else {}
    overrides: dict[str, Any] = {}
    if args.mask:
        overrides["mask"] = args.mask
    if args.token:
        tokens = dict(cfg.get("tokens", {}))
        for item in args.token:
            symbol, sep, pattern = item.partition("=")
            if not sep:
                raise MaskConfigError(f"--token expects SYMBOL=REGEX, got {item!r}")
            tokens[symbol] = pattern
        overrides["tokens"] = tokens
    return load_config({**cfg, **overrides})


def _lines() -> list[str]:
    return sys.stdin.read().splitlines()


def cmd_mask(args: argparse.Namespace) -> None:
    """Mask each stdin line."""
    engine = create_engine(_field_config(args))
    for line in _lines():
        sys.stdout.write(engine.mask(line) + "\n")


def cmd_unmask(args: argparse.Namespace) -> None:
    """Unmask each stdin line."""
    engine = create_engine(_field_config(args))
    for line in _lines():
        raw = engine.unmask(line, args.parse_int)
        sys.stdout.write(("" if raw is None else str(raw)) + "\n")


def cmd_skeleton(args: argparse.Namespace) -> None:
    """Print the blank mask."""
    engine = create_engine(_field_config(args))
    sys.stdout.write(engine.skeleton + "\n")


def _int(data: dict[str, Any], key: str, default: int | None = None, *, required: bool = False) -> int | None:
    """Integer field of a JSON op; a missing or null value falls back to ``default``."""
    value = data.get(key)
    if value is None:
        if required:
            raise ValueError(f"missing {key!r}")
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} must be an integer, got {value!r}")
    return value


def _text(data: dict[str, Any]) -> str:
    value = data.get("text", "")
    if not isinstance(value, str):
        raise ValueError(f"'text' must be a string, got {value!r}")
    return value


_OPS = {
    "type": lambda d: Insert(_text(d), _int(d, "at")),
    "insert": lambda d: Insert(_text(d), _int(d, "at")),
    "paste": lambda d: Paste(_text(d), _int(d, "at")),
    "delete": lambda d: DeleteRange(_int(d, "start", required=True), _int(d, "end", required=True)),
    "backspace": lambda d: Backspace(_int(d, "at")),
    "focus": lambda d: FocusSnap(_int(d, "at", 0)),
    "click": lambda d: FocusSnap(_int(d, "at", 0)),
}


def parse_operation(data: Any) -> EditOperation | tuple[int, int]:
    """Turn one JSON op into an edit operation (or a bare selection move).

    Raises ValueError for anything malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Edit operation must be an object, got {data!r}")
    kind = data.get("op")
    if kind == "select":
        start = _int(data, "start", 0)
        return start, _int(data, "end", start)
    if not isinstance(kind, str) or kind not in _OPS:
        raise ValueError(f"Unknown op {kind!r}")
    try:
        return _OPS[kind](data)
    except ValueError as e:
        raise ValueError(f"Malformed {kind!r} op: {e}") from e


def cmd_replay(args: argparse.Namespace) -> None:
    """Replay JSON edit operations from stdin against a fresh field."""
    emitted: list[Any] = []
    field = create_field(_field_config(args), initial=args.initial, on_change=emitted.append)

    ops = json.loads(sys.stdin.read() or "[]")
    if not isinstance(ops, list):
        raise ValueError("Expected a JSON array of edit operations")

    for data in ops:
        op = parse_operation(data)
        if isinstance(op, tuple):
            field.select(*op)
        else:
            field.apply(op)

    output = {
        "text": field.text,
        "display": field.display,
        "caret": field.caret,
        "value": field.value,
        "changes": len(emitted),
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="input-mask",
        description="Format and unformat text through a fixed input mask",
    )
    parser.add_argument("--mask", default="", help="Mask pattern, e.g. '(NNN) NNN-NNNN'")
    parser.add_argument("--config", default="", help="YAML field config")
    parser.add_argument("--token", action="append", default=[], help="Extra token SYMBOL=REGEX (repeatable)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("mask", help="Mask raw values (stdin lines)")
    p_unmask = sub.add_parser("unmask", help="Unmask values (stdin lines)")
    p_unmask.add_argument("--parse-int", action="store_true", help="Emit integers")
    sub.add_parser("skeleton", help="Print the blank mask")
    p_replay = sub.add_parser("replay", help="Replay edit operations (JSON stdin)")
    p_replay.add_argument("--initial", default="", help="Initial raw value")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "mask": cmd_mask,
        "unmask": cmd_unmask,
        "skeleton": cmd_skeleton,
        "replay": cmd_replay,
    }
    try:
        cmds[args.command](args)
    except MaskConfigError as e:
        sys.stderr.write(f"input-mask: {e}\n")
        return 2
    except ValueError as e:
        sys.stderr.write(f"input-mask: bad input: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
