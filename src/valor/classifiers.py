"""
classifiers.py — Application-defined labels: statuses, roles, entity types

Each label kind has its own allow-list. Register the labels at startup;
afterwards only those labels construct:

    register_statuses("pending", "ACTIVE")
    Status(" active ").value       # "ACTIVE"
    Status("ARCHIVED")             # InvalidValueError: not registered

Labels are trimmed and uppercased. The empty label is the unset value:
it always constructs, reports is_zero() and is stored as SQL NULL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .errors import InvalidValueError
from .registry import SymbolRegistry, normalize_symbol
from .serialization import TextValue, text_from_db

_statuses = SymbolRegistry("status")
_roles = SymbolRegistry("role")
_entity_types = SymbolRegistry("entity_type")


@dataclass(frozen=True, slots=True)
class _Label(TextValue):
    value: str = ""

    _registry: ClassVar[SymbolRegistry]
    _context_key: ClassVar[str]

    def __post_init__(self) -> None:
        label = normalize_symbol(self.value)
        if label and label not in self._registry:
            raise InvalidValueError(
                f"{self._registry.kind} is not registered as a valid {self._registry.kind}",
                context={self._context_key: self.value},
            )
        object.__setattr__(self, "value", label)

    def is_zero(self) -> bool:
        return not self.value

    def to_db(self) -> str | None:
        return self.value or None

    @classmethod
    def from_db(cls, src: Any):
        return cls(text_from_db(src, cls.__name__) or "")


@dataclass(frozen=True, slots=True)
class Status(_Label):
    """State in a workflow, e.g. PENDING, ACTIVE, INACTIVE."""
    _registry: ClassVar[SymbolRegistry] = _statuses
    _context_key: ClassVar[str] = "input_status"


@dataclass(frozen=True, slots=True)
class Role(_Label):
    _registry: ClassVar[SymbolRegistry] = _roles
    _context_key: ClassVar[str] = "input_role"


@dataclass(frozen=True, slots=True)
class EntityType(_Label):
    """Kind of a record when one table holds several, e.g. PERSON or COMPANY."""
    _registry: ClassVar[SymbolRegistry] = _entity_types
    _context_key: ClassVar[str] = "input_type"


def register_statuses(*statuses: str) -> None:
    _statuses.register(statuses)


def registered_statuses() -> frozenset[str]:
    return _statuses.snapshot()


def clear_registered_statuses() -> None:
    _statuses.clear()


def register_roles(*roles: str) -> None:
    _roles.register(roles)


def registered_roles() -> frozenset[str]:
    return _roles.snapshot()


def clear_registered_roles() -> None:
    _roles.clear()


def register_entity_types(*types: str) -> None:
    _entity_types.register(types)


def registered_entity_types() -> frozenset[str]:
    return _entity_types.snapshot()


def clear_registered_entity_types() -> None:
    _entity_types.clear()
