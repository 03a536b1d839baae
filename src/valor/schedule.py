"""
schedule.py — Weekly opening hours and timezones

================================================================================
TYPES
================================================================================

    DayOfWeek        SUNDAY=0 .. SATURDAY=6
    TimeOfDay        minutes since midnight, 00:00 .. 23:59
    TimeRange        [start, end) within one day, start < end
    BusinessHours    DayOfWeek -> TimeRange; a missing day means closed
    Timezone         registered IANA zone name

    hours = BusinessHours({
        DayOfWeek.MONDAY: TimeRange.parse("08:00-18:00"),
        DayOfWeek.SATURDAY: TimeRange.parse("09:00-13:00"),
    })
    hours.is_open(datetime(2024, 3, 25, 17, 59))   # True (a Monday)
    hours.is_open(datetime(2024, 3, 25, 18, 0))    # False, end is exclusive

TimeRange and BusinessHours are stored as JSON text; an empty schedule is
stored as SQL NULL.

================================================================================
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidValueError, ValueObjectError
from .registry import SymbolRegistry
from .serialization import (
    TextValue,
    as_invalid,
    int_from_db,
    json_from_db,
    json_object,
    json_str,
)

MINUTES_PER_DAY = 24 * 60


# ==============================================================================
# DAY OF WEEK
# ==============================================================================

class DayOfWeek(Enum):
    """Numbered from Sunday, matching SQL's EXTRACT(DOW)."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def parse(cls, text: str) -> DayOfWeek:
        """Full English day name, any case."""
        name = text.strip().upper() if isinstance(text, str) else ""
        try:
            return cls[name]
        except KeyError:
            raise InvalidValueError(
                "invalid day of week string",
                context={"input_value": str(text)},
            ) from None

    @classmethod
    def of(cls, day: date) -> DayOfWeek:
        return cls(day.isoweekday() % 7)

    def is_weekend(self) -> bool:
        return self in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)

    def is_weekday(self) -> bool:
        return not self.is_weekend()

    def __str__(self) -> str:
        return self.name.capitalize()

    def to_json(self) -> str:
        return self.name.lower()

    @classmethod
    def from_json(cls, data: Any) -> DayOfWeek:
        try:
            return cls.parse(json_str(data, "DayOfWeek"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "DayOfWeek")

    def to_db(self) -> int:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> DayOfWeek | None:
        number = int_from_db(src, "DayOfWeek")
        if number is None:
            return None
        if not 0 <= number <= 6:
            raise InvalidValueError(
                "value out of range for DayOfWeek",
                context={"value": number},
            )
        return cls(number)


# ==============================================================================
# TIME OF DAY
# ==============================================================================

_HH_MM = re.compile(r"^(\d{2}):(\d{2})$")


@dataclass(frozen=True, slots=True, order=True)
class TimeOfDay:
    """Wall-clock time with minute resolution and no date or zone."""
    minutes: int

    def __post_init__(self) -> None:
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise InvalidValueError(
                "time of day must be an integer number of minutes",
                context={"received_type": type(self.minutes).__name__},
            )
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise InvalidValueError(
                "value out of range for TimeOfDay",
                context={"value": self.minutes},
            )

    @classmethod
    def of(cls, hour: int, minute: int) -> TimeOfDay:
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise InvalidValueError(
                "invalid hour or minute for TimeOfDay",
                context={"hour": hour, "minute": minute},
            )
        return cls(hour * 60 + minute)

    @classmethod
    def parse(cls, text: str) -> TimeOfDay:
        """Strict "HH:MM", both parts two digits."""
        match = _HH_MM.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise InvalidValueError(
                "time must use two digits for hour and minute (HH:MM)",
                context={"input": str(text)},
            )
        return cls.of(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_time(cls, value: time | datetime) -> TimeOfDay:
        """Seconds and below are dropped."""
        return cls.of(value.hour, value.minute)

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    def is_zero(self) -> bool:
        return self.minutes == 0

    def is_before(self, other: TimeOfDay) -> bool:
        return self.minutes < other.minutes

    def is_after(self, other: TimeOfDay) -> bool:
        return self.minutes > other.minutes

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, data: Any) -> TimeOfDay:
        try:
            return cls.parse(json_str(data, "TimeOfDay"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "TimeOfDay")

    def to_db(self) -> int:
        return self.minutes

    @classmethod
    def from_db(cls, src: Any) -> TimeOfDay | None:
        minutes = int_from_db(src, "TimeOfDay")
        if minutes is None:
            return None
        return cls(minutes)


# ==============================================================================
# TIME RANGE
# ==============================================================================

@dataclass(frozen=True, slots=True)
class TimeRange:
    """
    Half-open interval [start, end) inside a single day.

    Ranges crossing midnight are not representable; split them in two.
    """
    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self) -> None:
        if not isinstance(self.start, TimeOfDay) or not isinstance(self.end, TimeOfDay):
            raise InvalidValueError(
                "TimeRange requires TimeOfDay bounds",
                context={
                    "start_type": type(self.start).__name__,
                    "end_type": type(self.end).__name__,
                },
            )
        if not self.start.is_before(self.end):
            raise InvalidValueError(
                "start time must be before end time",
                context={"start": str(self.start), "end": str(self.end)},
            )

    @classmethod
    def parse(cls, text: str) -> TimeRange:
        """"HH:MM-HH:MM"."""
        parts = text.split("-") if isinstance(text, str) else []
        if len(parts) != 2:
            raise InvalidValueError(
                "time range must be in HH:MM-HH:MM format",
                context={"input": str(text)},
            )
        return cls(TimeOfDay.parse(parts[0]), TimeOfDay.parse(parts[1]))

    def contains(self, moment: TimeOfDay) -> bool:
        return self.start <= moment < self.end

    @property
    def duration_minutes(self) -> int:
        return self.end.minutes - self.start.minutes

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    def to_json(self) -> dict[str, str]:
        return {"start": self.start.to_json(), "end": self.end.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> TimeRange:
        obj = json_object(data, "TimeRange", "start", "end")
        try:
            return cls(TimeOfDay.from_json(obj["start"]), TimeOfDay.from_json(obj["end"]))
        except ValueObjectError as exc:
            raise as_invalid(exc, "TimeRange")

    def to_db(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_db(cls, src: Any) -> TimeRange | None:
        data = json_from_db(src, "TimeRange")
        if data is None:
            return None
        return cls.from_json(data)


# ==============================================================================
# BUSINESS HOURS
# ==============================================================================

@dataclass(frozen=True, slots=True, init=False)
class BusinessHours:
    """
    Opening hours per weekday, one range per day.

    Stored as (day, range) pairs sorted by day so equal schedules compare
    and hash equal regardless of the order they were given in.
    """
    schedule: tuple[tuple[DayOfWeek, TimeRange], ...] = ()

    def __init__(self, schedule: Mapping[DayOfWeek, TimeRange] | None = None):
        pairs: dict[DayOfWeek, TimeRange] = {}
        for day, hours in (schedule or {}).items():
            if not isinstance(day, DayOfWeek):
                raise InvalidValueError(
                    "invalid DayOfWeek key in schedule",
                    context={"received_type": type(day).__name__},
                )
            if not isinstance(hours, TimeRange):
                raise InvalidValueError(
                    "schedule values must be TimeRange",
                    context={"day": day.to_json(), "received_type": type(hours).__name__},
                )
            pairs[day] = hours
        ordered = sorted(pairs.items(), key=lambda pair: pair[0].value)
        object.__setattr__(self, "schedule", tuple(ordered))

    @classmethod
    def empty(cls) -> BusinessHours:
        return cls()

    def for_day(self, day: DayOfWeek) -> TimeRange | None:
        for scheduled, hours in self.schedule:
            if scheduled is day:
                return hours
        return None

    def is_open(self, moment: datetime) -> bool:
        """Uses the weekday and wall-clock time of moment as given, in its own zone."""
        hours = self.for_day(DayOfWeek.of(moment.date()))
        if hours is None:
            return False
        return hours.contains(TimeOfDay.from_time(moment))

    def is_zero(self) -> bool:
        return not self.schedule

    def __len__(self) -> int:
        return len(self.schedule)

    def __str__(self) -> str:
        return ", ".join(f"{day}: {hours}" for day, hours in self.schedule)

    def to_json(self) -> dict[str, dict[str, str]]:
        return {day.to_json(): hours.to_json() for day, hours in self.schedule}

    @classmethod
    def from_json(cls, data: Any) -> BusinessHours:
        if data is None:
            return cls()
        obj = json_object(data, "BusinessHours")
        try:
            return cls({
                DayOfWeek.parse(day): TimeRange.from_json(hours)
                for day, hours in obj.items()
            })
        except ValueObjectError as exc:
            raise as_invalid(exc, "BusinessHours")

    def to_db(self) -> str | None:
        if self.is_zero():
            return None
        return json.dumps(self.to_json())

    @classmethod
    def from_db(cls, src: Any) -> BusinessHours:
        return cls.from_json(json_from_db(src, "BusinessHours"))


# ==============================================================================
# TIMEZONE
# ==============================================================================

def _zone_name(name: str) -> str:
    if not isinstance(name, str):
        raise InvalidValueError(
            "timezone name must be a string",
            context={"received_type": type(name).__name__},
        )
    return name.strip()


# IANA names are case-sensitive ("America/Sao_Paulo")
_timezones = SymbolRegistry("timezone", _zone_name)


def _load_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidValueError(
            "failed to validate timezone for registration",
            context={"name": name},
            cause=exc,
        ) from exc


def register_timezones(*names: str) -> None:
    """Allow IANA zones. Every name is loaded first; one bad name registers none."""
    for name in names:
        _load_zone(_zone_name(name))
    _timezones.register(names)


def is_timezone_registered(name: str) -> bool:
    return _timezones.contains(name)


def registered_timezones() -> frozenset[str]:
    return _timezones.snapshot()


def clear_registered_timezones() -> None:
    _timezones.clear()


@dataclass(frozen=True, slots=True)
class Timezone(TextValue):
    """
    A registered IANA timezone:

        register_timezones("America/Sao_Paulo")
        Timezone("America/Sao_Paulo").convert(datetime(2024, 1, 1, 12, tzinfo=timezone.utc))
        # 2024-01-01 09:00-03:00
    """
    value: str

    def __post_init__(self) -> None:
        name = _zone_name(self.value)
        if not name:
            raise InvalidValueError("timezone name cannot be empty")
        if not _timezones.contains(name):
            raise InvalidValueError(
                "timezone is not registered in the allowed list",
                context={"input_name": self.value},
            )
        object.__setattr__(self, "value", name)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.value)

    def convert(self, moment: datetime) -> datetime:
        """Same instant in this zone; naive datetimes are taken as UTC."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.zone)
