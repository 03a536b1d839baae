"""
registry.py — Process-wide symbol sets with lock-free reads

================================================================================
CONCURRENCY MODEL
================================================================================

Registrations happen at startup, lookups happen everywhere. The set of
symbols is therefore an immutable frozenset snapshot:

- writers serialize on a threading.Lock, build a new frozenset and publish
  it with one reference assignment
- readers never lock: they load the current reference and see either the
  old or the new snapshot, never a partial one

A batch registration is all-or-nothing: a failure halfway through leaves
the published snapshot untouched.

================================================================================
"""

from __future__ import annotations

import threading
from typing import Callable, Iterable

from .errors import ConflictError, InvalidValueError
from .logging_config import get_logger


def normalize_symbol(symbol: str) -> str:
    """Trim and uppercase."""
    if not isinstance(symbol, str):
        raise InvalidValueError(
            "symbol must be a string",
            context={"received_type": type(symbol).__name__},
        )
    return symbol.strip().upper()


class SymbolRegistry:
    """
    Copy-on-write set of normalized symbols.

    Args:
        kind: name used in error context and log records ("unit", ...).
        normalize: symbol normalization applied on write and on lookup.
    """

    def __init__(
        self,
        kind: str,
        normalize: Callable[[str], str] = normalize_symbol,
    ):
        self._kind = kind
        self._normalize = normalize
        self._lock = threading.Lock()
        self._symbols: frozenset[str] = frozenset()
        self._logger = get_logger(f"registry.{kind}")

    @property
    def kind(self) -> str:
        return self._kind

    def normalize(self, symbol: str) -> str:
        return self._normalize(symbol)

    def register(self, symbols: Iterable[str], *, strict: bool = False) -> frozenset[str]:
        """
        Add symbols to the registry.

        Duplicates are ignored unless strict is set, in which case a symbol
        already present raises ConflictError and nothing is published.

        Returns:
            The newly added symbols.
        """
        batch: list[str] = []
        for raw in symbols:
            symbol = self._normalize(raw)
            if not symbol:
                raise InvalidValueError(
                    f"{self._kind} symbol cannot be empty",
                    context={"input": raw},
                )
            batch.append(symbol)

        with self._lock:
            current = self._symbols
            if strict:
                for symbol in batch:
                    if symbol in current:
                        raise ConflictError(
                            f"{self._kind} already registered",
                            context={self._kind: symbol},
                        )
            added = frozenset(batch) - current
            if added:
                self._symbols = current | added

        if added:
            self._logger.info(
                "%s symbols registered",
                self._kind,
                extra={"symbols": sorted(added), "total": len(current) + len(added)},
            )
        return added

    def contains(self, symbol: str) -> bool:
        if not isinstance(symbol, str):
            return False
        return self._normalize(symbol) in self._symbols

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.contains(symbol)

    def snapshot(self) -> frozenset[str]:
        return self._symbols

    def clear(self) -> None:
        with self._lock:
            self._symbols = frozenset()
        self._logger.debug("%s registry cleared", self._kind)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind!r}, symbols={sorted(self._symbols)!r})"
