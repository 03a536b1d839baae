"""
temporal.py — Calendar value objects

================================================================================
TYPES
================================================================================

Date       calendar date with no time or offset ("YYYY-MM-DD")
DateRange  closed interval [start, end] of Dates, start <= end
BirthDate  Date not in the future, with age and legal-age checks
Day        day of month (1..31) for due dates and billing cycles

Month arithmetic clamps to the last valid day:

    Date.of(2024, 1, 31).add_months(1)   # 2024-02-29

The legal age used by BirthDate.is_legal_age() is process-wide
(set_legal_age, default 18).

================================================================================
"""

from __future__ import annotations

import calendar
import re
import threading
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from .errors import InvalidValueError, ValueObjectError
from .logging_config import get_logger
from .serialization import (
    as_invalid,
    date_from_db,
    int_from_db,
    json_int,
    json_object,
    json_str,
)

logger = get_logger("temporal")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_LEGAL_AGE = 18

_legal_age = DEFAULT_LEGAL_AGE
_legal_age_lock = threading.Lock()


def set_legal_age(age: int) -> None:
    """Set the legal-age threshold (>= 0) for every BirthDate."""
    global _legal_age
    if isinstance(age, bool) or not isinstance(age, int) or age < 0:
        raise InvalidValueError(
            "legal age must be a non-negative integer",
            context={"input_value": age},
        )
    with _legal_age_lock:
        previous = _legal_age
        _legal_age = age
    if previous != age:
        logger.info("legal age changed", extra={"previous": previous, "legal_age": age})


def legal_age() -> int:
    return _legal_age


def _days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


# ==============================================================================
# DATE
# ==============================================================================

@dataclass(frozen=True, slots=True, order=True)
class Date:
    value: date

    def __post_init__(self) -> None:
        if not isinstance(self.value, date):
            raise InvalidValueError(
                "Date requires a datetime.date value",
                context={"received_type": type(self.value).__name__},
            )
        # a datetime is a date subclass; keep only the calendar part
        if type(self.value) is not date:
            object.__setattr__(
                self, "value", date(self.value.year, self.value.month, self.value.day)
            )

    @classmethod
    def of(cls, year: int, month: int, day: int) -> Date:
        try:
            return cls(date(year, month, day))
        except (ValueError, TypeError) as exc:
            raise InvalidValueError(
                "invalid date",
                context={"year": year, "month": month, "day": day},
                cause=exc,
            ) from exc

    @classmethod
    def parse(cls, text: str) -> Date:
        """Parse strict "YYYY-MM-DD"."""
        if not isinstance(text, str) or not _ISO_DATE.match(text.strip()):
            raise InvalidValueError(
                "date must be in YYYY-MM-DD format",
                context={"input": str(text)},
            )
        try:
            return cls(date.fromisoformat(text.strip()))
        except ValueError as exc:
            raise InvalidValueError(
                "date must be in YYYY-MM-DD format",
                context={"input": text},
                cause=exc,
            ) from exc

    @classmethod
    def today(cls) -> Date:
        return cls(date.today())

    @property
    def year(self) -> int:
        return self.value.year

    @property
    def month(self) -> int:
        return self.value.month

    @property
    def day(self) -> int:
        return self.value.day

    def is_before(self, other: Date) -> bool:
        return self.value < other.value

    def is_after(self, other: Date) -> bool:
        return self.value > other.value

    def add_days(self, days: int) -> Date:
        return Date(self.value + timedelta(days=days))

    def add_months(self, months: int) -> Date:
        index = self.value.year * 12 + (self.value.month - 1) + months
        year, month = divmod(index, 12)
        month += 1
        day = min(self.value.day, _days_in_month(year, month))
        return Date.of(year, month, day)

    def add_years(self, years: int) -> Date:
        return self.add_months(years * 12)

    def __str__(self) -> str:
        return self.value.isoformat()

    def to_json(self) -> str:
        return self.value.isoformat()

    @classmethod
    def from_json(cls, data: Any) -> Date:
        try:
            return cls.parse(json_str(data, "Date"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Date")

    def to_db(self) -> date:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> Date | None:
        value = date_from_db(src, "Date")
        if value is None:
            return None
        return cls(value)


# ==============================================================================
# DATE RANGE
# ==============================================================================

@dataclass(frozen=True, slots=True)
class DateRange:
    start: Date
    end: Date

    def __post_init__(self) -> None:
        # plain dates come back from composite columns
        for name in ("start", "end"):
            bound = getattr(self, name)
            if isinstance(bound, date):
                object.__setattr__(self, name, Date(bound))
        if not isinstance(self.start, Date) or not isinstance(self.end, Date):
            raise InvalidValueError(
                "DateRange requires Date bounds",
                context={
                    "start_type": type(self.start).__name__,
                    "end_type": type(self.end).__name__,
                },
            )
        if self.start > self.end:
            raise InvalidValueError(
                "start date cannot be after end date",
                context={"start": str(self.start), "end": str(self.end)},
            )

    def contains(self, day: Date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, other: DateRange) -> bool:
        return self.start <= other.end and other.start <= self.end

    @property
    def days(self) -> int:
        """Number of days, both bounds included."""
        return (self.end.value - self.start.value).days + 1

    def __str__(self) -> str:
        return f"{self.start} to {self.end}"

    def to_json(self) -> dict[str, str]:
        return {"start": self.start.to_json(), "end": self.end.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> DateRange:
        obj = json_object(data, "DateRange", "start", "end")
        try:
            return cls(Date.from_json(obj["start"]), Date.from_json(obj["end"]))
        except ValueObjectError as exc:
            raise as_invalid(exc, "DateRange")

    def to_db(self) -> tuple[date, date]:
        return self.start.value, self.end.value

    @classmethod
    def from_db(cls, start: Any, end: Any) -> DateRange | None:
        if start is None and end is None:
            return None
        first, last = Date.from_db(start), Date.from_db(end)
        if first is None or last is None:
            raise InvalidValueError(
                "date range columns must be both NULL or both set",
                context={"start_is_null": first is None, "end_is_null": last is None},
            )
        return cls(first, last)

    def __composite_values__(self) -> tuple[date, date]:
        return self.start.value, self.end.value


# ==============================================================================
# BIRTH DATE
# ==============================================================================

@dataclass(frozen=True, slots=True)
class BirthDate:
    date: Date

    def __post_init__(self) -> None:
        value = self.date
        if isinstance(value, date):
            value = Date(value)
        if not isinstance(value, Date):
            raise InvalidValueError(
                "BirthDate requires a Date",
                context={"received_type": type(self.date).__name__},
            )
        if value > Date.today():
            raise InvalidValueError(
                "birth date cannot be in the future",
                context={"input": str(value)},
            )
        object.__setattr__(self, "date", value)

    @classmethod
    def of(cls, year: int, month: int, day: int) -> BirthDate:
        return cls(Date.of(year, month, day))

    @classmethod
    def parse(cls, text: str) -> BirthDate:
        return cls(Date.parse(text))

    def age(self, today: Date | None = None) -> int:
        """Age in whole years."""
        today = today or Date.today()
        born = self.date
        years = today.year - born.year
        if (today.month, today.day) < (born.month, born.day):
            years -= 1
        return years

    def is_legal_age(self, today: Date | None = None) -> bool:
        return self.age(today) >= legal_age()

    def anniversary(self, year: int) -> Date:
        """Birthday in the given year; Feb 29 falls on Feb 28 in common years."""
        day = min(self.date.day, _days_in_month(year, self.date.month))
        return Date.of(year, self.date.month, day)

    def has_anniversary_passed(self, today: Date | None = None) -> bool:
        today = today or Date.today()
        return today > self.anniversary(today.year)

    def __str__(self) -> str:
        return str(self.date)

    def to_json(self) -> str:
        return self.date.to_json()

    @classmethod
    def from_json(cls, data: Any) -> BirthDate:
        try:
            return cls(Date.from_json(data))
        except ValueObjectError as exc:
            raise as_invalid(exc, "BirthDate")

    def to_db(self) -> date:
        return self.date.value

    @classmethod
    def from_db(cls, src: Any) -> BirthDate | None:
        value = Date.from_db(src)
        if value is None:
            return None
        return cls(value)


# ==============================================================================
# DAY OF MONTH
# ==============================================================================

@dataclass(frozen=True, slots=True, order=True)
class Day:
    """
    Day of the month, e.g. an invoice due day.

        Day(10).days_until(Date.of(2024, 3, 25))    # 16 (April 10th)
        Day(10).days_overdue(Date.of(2024, 3, 25))  # 15
    """
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(
                "day must be an integer",
                context={"received_type": type(self.value).__name__},
            )
        if not 1 <= self.value <= 31:
            raise InvalidValueError(
                "day must be between 1 and 31",
                context={"input_value": self.value},
            )

    def has_passed(self, today: Date | None = None) -> bool:
        today = today or Date.today()
        return self.value < today.day

    def days_until(self, today: Date | None = None) -> int:
        """Days until the next occurrence (0 when it is today)."""
        today = today or Date.today()
        if self.value >= today.day:
            return self.value - today.day
        return _days_in_month(today.year, today.month) - today.day + self.value

    def days_overdue(self, today: Date | None = None) -> int:
        """Days since the last occurrence (0 when it is today)."""
        today = today or Date.today()
        if self.value <= today.day:
            return today.day - self.value
        previous = today.add_months(-1)
        return _days_in_month(previous.year, previous.month) - self.value + today.day

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> int:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> Day:
        try:
            return cls(json_int(data, "Day"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Day")

    def to_db(self) -> int:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> Day | None:
        value = int_from_db(src, "Day")
        if value is None:
            return None
        return cls(value)
