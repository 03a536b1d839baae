"""
audit.py — Who changed a record, when, and how many times

================================================================================
BUILDING BLOCKS
================================================================================

Version        non-negative counter for optimistic locking
AuditUser      an Email or the literal "system"
CreatedAt      UTC timestamp fixed at creation
UpdatedAt      UTC timestamp; touch() returns a new one set to now
NullableTime   optional UTC timestamp (archived_at, deleted_at)
Audit          the record combining all of the above

Every "mutation" returns a new value:

    audit = Audit.new(AuditUser.system())
    audit = audit.touch(AuditUser("ana@example.com"))   # version 2
    audit = audit.archive(AuditUser.system())           # version 3

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any

from .contact import Email
from .errors import InvalidValueError, ValueObjectError
from .serialization import (
    as_invalid,
    datetime_from_db,
    int_from_db,
    json_int,
    json_object,
    json_str,
    parse_timestamp,
    text_from_db,
)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: Any, type_name: str) -> datetime:
    if not isinstance(value, datetime):
        raise InvalidValueError(
            f"{type_name} requires a datetime",
            context={"received_type": type(value).__name__},
        )
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# ==============================================================================
# VERSION
# ==============================================================================

@dataclass(frozen=True, slots=True, order=True)
class Version:
    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(
                "version must be an integer",
                context={"received_type": type(self.value).__name__},
            )
        if self.value < 0:
            raise InvalidValueError(
                "version cannot be negative",
                context={"input_value": self.value},
            )

    @classmethod
    def initial(cls) -> Version:
        return cls(1)

    def increment(self) -> Version:
        return Version(self.value + 1)

    def previous(self) -> Version:
        """One version back; zero stays zero."""
        return Version(max(self.value - 1, 0))

    def is_zero(self) -> bool:
        return self.value == 0

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> int:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> Version:
        try:
            return cls(json_int(data, "Version"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Version")

    def to_db(self) -> int:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> Version:
        value = int_from_db(src, "Version")
        if value is None:
            return cls()
        return cls(value)


# ==============================================================================
# AUDIT USER
# ==============================================================================

SYSTEM_USER = "system"


@dataclass(frozen=True, slots=True)
class AuditUser:
    """The literal "system" or a normalized email address."""
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError(
                "audit user must be a string",
                context={"received_type": type(self.value).__name__},
            )
        trimmed = self.value.strip()
        if trimmed.lower() == SYSTEM_USER:
            object.__setattr__(self, "value", SYSTEM_USER)
            return
        try:
            email = Email(trimmed)
        except InvalidValueError as exc:
            raise InvalidValueError(
                "audit user must be a valid email or 'system'",
                context={"input": self.value},
                cause=exc,
            ) from exc
        object.__setattr__(self, "value", email.value)

    @classmethod
    def system(cls) -> AuditUser:
        return cls(SYSTEM_USER)

    def is_system(self) -> bool:
        return self.value == SYSTEM_USER

    def is_email(self) -> bool:
        return not self.is_system()

    @property
    def email(self) -> Email | None:
        return None if self.is_system() else Email(self.value)

    def __str__(self) -> str:
        return self.value

    def to_json(self) -> str:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> AuditUser:
        try:
            return cls(json_str(data, "AuditUser"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "AuditUser")

    def to_db(self) -> str:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> AuditUser | None:
        text = text_from_db(src, "AuditUser")
        if text is None:
            return None
        return cls(text)


# ==============================================================================
# TIMESTAMPS
# ==============================================================================

@dataclass(frozen=True, slots=True, order=True)
class _Timestamp:
    value: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _as_utc(self.value, type(self).__name__))

    @classmethod
    def now(cls):
        return cls(_utc_now())

    def __str__(self) -> str:
        return self.value.isoformat()

    def to_json(self) -> str:
        return self.value.isoformat()

    @classmethod
    def from_json(cls, data: Any):
        try:
            return cls(parse_timestamp(json_str(data, cls.__name__), cls.__name__))
        except ValueObjectError as exc:
            raise as_invalid(exc, cls.__name__)

    def to_db(self) -> datetime:
        return self.value

    @classmethod
    def from_db(cls, src: Any):
        value = datetime_from_db(src, cls.__name__)
        if value is None:
            return None
        return cls(value)


@dataclass(frozen=True, slots=True, order=True)
class CreatedAt(_Timestamp):
    """Creation instant, always UTC."""


@dataclass(frozen=True, slots=True, order=True)
class UpdatedAt(_Timestamp):
    """Last-modification instant, always UTC."""

    def touch(self) -> UpdatedAt:
        return UpdatedAt(_utc_now())


@dataclass(frozen=True, slots=True)
class NullableTime:
    """A UTC timestamp that may be absent (SQL NULL, JSON null)."""
    value: datetime | None = None

    def __post_init__(self) -> None:
        if self.value is not None:
            object.__setattr__(self, "value", _as_utc(self.value, "NullableTime"))

    @classmethod
    def now(cls) -> NullableTime:
        return cls(_utc_now())

    def is_zero(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return "" if self.value is None else self.value.isoformat()

    def to_json(self) -> str | None:
        return None if self.value is None else self.value.isoformat()

    @classmethod
    def from_json(cls, data: Any) -> NullableTime:
        if data is None:
            return cls()
        try:
            return cls(parse_timestamp(json_str(data, "NullableTime"), "NullableTime"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "NullableTime")

    def to_db(self) -> datetime | None:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> NullableTime:
        return cls(datetime_from_db(src, "NullableTime"))


# ==============================================================================
# AUDIT RECORD
# ==============================================================================

@dataclass(frozen=True, slots=True)
class Audit:
    created_at: CreatedAt
    created_by: AuditUser
    updated_at: UpdatedAt
    updated_by: AuditUser
    archived_at: NullableTime = NullableTime()
    deleted_at: NullableTime = NullableTime()
    version: Version = Version(1)

    @classmethod
    def new(cls, created_by: AuditUser) -> Audit:
        now = _utc_now()
        return cls(
            created_at=CreatedAt(now),
            created_by=created_by,
            updated_at=UpdatedAt(now),
            updated_by=created_by,
            version=Version.initial(),
        )

    def touch(self, updated_by: AuditUser) -> Audit:
        return replace(
            self,
            updated_at=self.updated_at.touch(),
            updated_by=updated_by,
            version=self.version.increment(),
        )

    def archive(self, archived_by: AuditUser) -> Audit:
        return replace(self, archived_at=NullableTime.now()).touch(archived_by)

    def unarchive(self, updated_by: AuditUser) -> Audit:
        return replace(self, archived_at=NullableTime()).touch(updated_by)

    def delete(self, deleted_by: AuditUser) -> Audit:
        return replace(self, deleted_at=NullableTime.now()).touch(deleted_by)

    def undelete(self, updated_by: AuditUser) -> Audit:
        return replace(self, deleted_at=NullableTime()).touch(updated_by)

    def is_archived(self) -> bool:
        return not self.archived_at.is_zero()

    def is_deleted(self) -> bool:
        return not self.deleted_at.is_zero()

    def is_active(self) -> bool:
        return not self.is_archived() and not self.is_deleted()

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "created_at": self.created_at.to_json(),
            "created_by": self.created_by.to_json(),
            "updated_at": self.updated_at.to_json(),
            "updated_by": self.updated_by.to_json(),
            "version": self.version.to_json(),
        }
        if self.is_archived():
            data["archived_at"] = self.archived_at.to_json()
        if self.is_deleted():
            data["deleted_at"] = self.deleted_at.to_json()
        return data

    @classmethod
    def from_json(cls, data: Any) -> Audit:
        obj = json_object(
            data, "Audit", "created_at", "created_by", "updated_at", "updated_by", "version"
        )
        try:
            return cls(
                created_at=CreatedAt.from_json(obj["created_at"]),
                created_by=AuditUser.from_json(obj["created_by"]),
                updated_at=UpdatedAt.from_json(obj["updated_at"]),
                updated_by=AuditUser.from_json(obj["updated_by"]),
                archived_at=NullableTime.from_json(obj.get("archived_at")),
                deleted_at=NullableTime.from_json(obj.get("deleted_at")),
                version=Version.from_json(obj["version"]),
            )
        except ValueObjectError as exc:
            raise as_invalid(exc, "Audit")
