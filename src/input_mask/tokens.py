"""Token registry — which mask characters are placeholders, and what they accept.

A mask pattern such as ``(NNN) NNN-NNNN`` mixes token symbols (``N``) with
literals (everything else).  The registry is the single source of truth for
that split: any symbol it doesn't know is a literal.

Registries are immutable.  ``extend`` hands back a new one, so adding a
symbol for one field never leaks into another.
"""

from __future__ import annotations
import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .types import MaskConfigError

# Each token: (symbol, compiled_regex)
_TOKENS: list[tuple[str, re.Pattern]] = [
    # Digit
    ("N", re.compile(r"[0-9]")),
    # ASCII letter
    ("S", re.compile(r"[a-zA-Z]")),
    # Digit or letter
    ("A", re.compile(r"[0-9a-zA-Z]")),
    # Anything at all, newline included
    ("X", re.compile(r".", re.DOTALL)),
]

DEFAULT_TOKENS: Mapping[str, re.Pattern] = MappingProxyType(dict(_TOKENS))

TokenSpec = Mapping[str, "str | re.Pattern"]


def _compile(symbol: str, pattern: str | re.Pattern) -> re.Pattern:
    if not isinstance(symbol, str) or len(symbol) != 1:
        raise MaskConfigError(f"Token symbol must be a single character, got {symbol!r}")
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except (re.error, TypeError) as e:
        raise MaskConfigError(f"Invalid pattern for token {symbol!r}: {e}") from e


class TokenRegistry:
    """Immutable symbol → acceptance-regex lookup table."""

    __slots__ = ("_tokens",)

    def __init__(
        self,
        tokens: TokenSpec | None = None,
        *,
        base: Mapping[str, re.Pattern] = DEFAULT_TOKENS,
    ) -> None:
        merged = dict(base)
        for symbol, pattern in (tokens or {}).items():
            merged[symbol] = _compile(symbol, pattern)
        self._tokens: Mapping[str, re.Pattern] = MappingProxyType(merged)

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def is_token(self, symbol: str) -> bool:
        """True when ``symbol`` is a placeholder rather than a literal."""
        return symbol in self._tokens

    def accepts(self, symbol: str, char: str) -> bool:
        """Does the token ``symbol`` accept ``char``?  Literals accept nothing."""
        pattern = self._tokens.get(symbol)
        if pattern is None or not char:
            return False
        return pattern.search(char) is not None

    def extend(self, tokens: TokenSpec) -> TokenRegistry:
        """Return a new registry with ``tokens`` added or overridden."""
        return TokenRegistry(tokens, base=self._tokens)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def symbols(self) -> frozenset[str]:
        return frozenset(self._tokens)

    def pattern_for(self, symbol: str) -> re.Pattern | None:
        return self._tokens.get(symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def _key(self) -> frozenset[tuple[str, str, int]]:
        return frozenset((s, p.pattern, p.flags) for s, p in self._tokens.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenRegistry):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"TokenRegistry({sorted(self._tokens)})"


DEFAULT_REGISTRY = TokenRegistry()


def resolve(registry: TokenRegistry | TokenSpec | None) -> TokenRegistry:
    """Accept a registry, a plain symbol → pattern mapping, or None (defaults)."""
    if registry is None:
        return DEFAULT_REGISTRY
    if isinstance(registry, TokenRegistry):
        return registry
    return DEFAULT_REGISTRY.extend(registry)
