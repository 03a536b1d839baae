"""Weekdays, times of day, opening hours and timezones."""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest
from hypothesis import given
from hypothesis import strategies as st

from valor import (
    BusinessHours,
    DayOfWeek,
    InvalidValueError,
    TimeOfDay,
    TimeRange,
    Timezone,
    dumps,
    is_timezone_registered,
    loads,
    register_timezones,
)


class TestDayOfWeek:

    @pytest.mark.parametrize("raw, expected", [
        ("Monday", DayOfWeek.MONDAY),
        (" sunday ", DayOfWeek.SUNDAY),
        ("SATURDAY", DayOfWeek.SATURDAY),
    ])
    def test_parse(self, raw, expected):
        assert DayOfWeek.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["mon", "", "segunda"])
    def test_parse_invalid(self, raw):
        with pytest.raises(InvalidValueError) as exc_info:
            DayOfWeek.parse(raw)
        assert exc_info.value.context == {"input_value": raw}

    def test_of_date(self):
        assert DayOfWeek.of(date(2024, 3, 24)) is DayOfWeek.SUNDAY
        assert DayOfWeek.of(date(2024, 3, 25)) is DayOfWeek.MONDAY
        assert DayOfWeek.of(date(2024, 3, 30)) is DayOfWeek.SATURDAY

    def test_weekend(self):
        assert DayOfWeek.SATURDAY.is_weekend()
        assert DayOfWeek.SUNDAY.is_weekend()
        assert DayOfWeek.FRIDAY.is_weekday()

    def test_formatting(self):
        assert str(DayOfWeek.MONDAY) == "Monday"
        assert DayOfWeek.MONDAY.to_json() == "monday"

    def test_json_and_db(self):
        assert loads(dumps(DayOfWeek.FRIDAY), DayOfWeek) is DayOfWeek.FRIDAY
        assert DayOfWeek.WEDNESDAY.to_db() == 3
        assert DayOfWeek.from_db(6) is DayOfWeek.SATURDAY
        assert DayOfWeek.from_db(None) is None
        with pytest.raises(InvalidValueError):
            DayOfWeek.from_json(5)

    def test_db_out_of_range(self):
        with pytest.raises(InvalidValueError) as exc_info:
            DayOfWeek.from_db(7)
        assert exc_info.value.context == {"value": 7}
        with pytest.raises(InvalidValueError):
            DayOfWeek.from_db("1")


class TestTimeOfDay:

    def test_parse(self):
        t = TimeOfDay.parse("08:30")
        assert t.minutes == 510
        assert (t.hour, t.minute) == (8, 30)
        assert str(t) == "08:30"
        assert t.to_time() == time(8, 30)

    @pytest.mark.parametrize("raw", ["8:30", "08:5", "0830", "24:00", "12:60", "ab:cd", ""])
    def test_parse_invalid(self, raw):
        with pytest.raises(InvalidValueError):
            TimeOfDay.parse(raw)

    def test_out_of_range_components(self):
        with pytest.raises(InvalidValueError) as exc_info:
            TimeOfDay.of(24, 0)
        assert exc_info.value.context == {"hour": 24, "minute": 0}

    @pytest.mark.parametrize("minutes", [-1, 1440, True])
    def test_minutes_out_of_range(self, minutes):
        with pytest.raises(InvalidValueError):
            TimeOfDay(minutes)

    def test_from_time_drops_seconds(self):
        assert TimeOfDay.from_time(time(9, 15, 59)) == TimeOfDay.of(9, 15)
        assert TimeOfDay.from_time(datetime(2024, 1, 1, 23, 59, 59)) == TimeOfDay(1439)

    def test_ordering(self):
        early, late = TimeOfDay.of(8, 0), TimeOfDay.of(9, 0)
        assert early < late
        assert early.is_before(late)
        assert late.is_after(early)
        assert TimeOfDay(0).is_zero()

    def test_json_and_db(self):
        t = TimeOfDay.of(18, 5)
        assert t.to_json() == "18:05"
        assert loads(dumps(t), TimeOfDay) == t
        assert TimeOfDay.from_db(t.to_db()) == t
        assert TimeOfDay.from_db(None) is None
        with pytest.raises(InvalidValueError):
            TimeOfDay.from_db(1440)

    @given(st.integers(min_value=0, max_value=1439))
    def test_text_form_parses_back(self, minutes):
        t = TimeOfDay(minutes)
        assert TimeOfDay.parse(str(t)) == t


class TestTimeRange:

    def test_half_open(self):
        shift = TimeRange.parse("08:00-18:00")
        assert shift.contains(TimeOfDay.of(8, 0))
        assert shift.contains(TimeOfDay.of(17, 59))
        assert not shift.contains(TimeOfDay.of(18, 0))
        assert not shift.contains(TimeOfDay.of(7, 59))
        assert shift.duration_minutes == 600
        assert str(shift) == "08:00-18:00"

    def test_start_must_precede_end(self):
        with pytest.raises(InvalidValueError) as exc_info:
            TimeRange(TimeOfDay.of(18, 0), TimeOfDay.of(8, 0))
        assert exc_info.value.context == {"start": "18:00", "end": "08:00"}
        with pytest.raises(InvalidValueError):
            TimeRange(TimeOfDay.of(8, 0), TimeOfDay.of(8, 0))

    @pytest.mark.parametrize("raw", ["08:00", "08:00-18:00-20:00", "8:00-18:00"])
    def test_parse_invalid(self, raw):
        with pytest.raises(InvalidValueError):
            TimeRange.parse(raw)

    def test_bound_types(self):
        with pytest.raises(InvalidValueError):
            TimeRange("08:00", "18:00")

    def test_json(self):
        shift = TimeRange.parse("08:00-18:00")
        assert shift.to_json() == {"start": "08:00", "end": "18:00"}
        assert loads(dumps(shift), TimeRange) == shift
        with pytest.raises(InvalidValueError):
            TimeRange.from_json({"start": "08:00"})
        with pytest.raises(InvalidValueError):
            TimeRange.from_json({"start": "18:00", "end": "08:00"})

    def test_db(self):
        shift = TimeRange.parse("08:00-18:00")
        assert shift.to_db() == '{"start": "08:00", "end": "18:00"}'
        assert TimeRange.from_db(shift.to_db().encode()) == shift
        assert TimeRange.from_db(None) is None


@pytest.fixture
def hours():
    return BusinessHours({
        DayOfWeek.SATURDAY: TimeRange.parse("09:00-13:00"),
        DayOfWeek.MONDAY: TimeRange.parse("08:00-18:00"),
    })


class TestBusinessHours:

    @pytest.mark.parametrize("moment, expected", [
        (datetime(2024, 3, 25, 8, 0), True),
        (datetime(2024, 3, 25, 17, 59), True),
        (datetime(2024, 3, 25, 18, 0), False),
        (datetime(2024, 3, 24, 10, 0), False),
        (datetime(2024, 3, 26, 10, 0), False),
        (datetime(2024, 3, 30, 12, 59, tzinfo=UTC), True),
    ])
    def test_is_open(self, hours, moment, expected):
        assert hours.is_open(moment) is expected

    def test_for_day(self, hours):
        assert hours.for_day(DayOfWeek.MONDAY) == TimeRange.parse("08:00-18:00")
        assert hours.for_day(DayOfWeek.TUESDAY) is None
        assert len(hours) == 2

    def test_order_independent(self, hours):
        same = BusinessHours({
            DayOfWeek.MONDAY: TimeRange.parse("08:00-18:00"),
            DayOfWeek.SATURDAY: TimeRange.parse("09:00-13:00"),
        })
        assert same == hours
        assert hash(same) == hash(hours)

    def test_empty(self):
        assert BusinessHours().is_zero()
        assert BusinessHours.empty() == BusinessHours({})
        assert not BusinessHours().is_open(datetime(2024, 3, 25, 10, 0))

    def test_invalid_schedule(self):
        with pytest.raises(InvalidValueError):
            BusinessHours({1: TimeRange.parse("08:00-18:00")})
        with pytest.raises(InvalidValueError) as exc_info:
            BusinessHours({DayOfWeek.MONDAY: "08:00-18:00"})
        assert exc_info.value.context == {"day": "monday", "received_type": "str"}

    def test_json(self, hours):
        assert hours.to_json() == {
            "monday": {"start": "08:00", "end": "18:00"},
            "saturday": {"start": "09:00", "end": "13:00"},
        }
        assert loads(dumps(hours), BusinessHours) == hours
        assert BusinessHours.from_json(None).is_zero()
        assert BusinessHours.from_json({}).is_zero()
        assert BusinessHours.from_json(
            {"Monday": {"start": "08:00", "end": "18:00"}}
        ).for_day(DayOfWeek.MONDAY) == TimeRange.parse("08:00-18:00")

    def test_json_invalid(self):
        with pytest.raises(InvalidValueError):
            BusinessHours.from_json({"funday": {"start": "08:00", "end": "18:00"}})
        with pytest.raises(InvalidValueError):
            BusinessHours.from_json(["monday"])

    def test_db(self, hours):
        assert BusinessHours.from_db(hours.to_db()) == hours
        assert BusinessHours().to_db() is None
        assert BusinessHours.from_db(None) == BusinessHours()
        assert BusinessHours.from_db("{}") == BusinessHours()


class TestTimezone:

    def test_registered(self):
        register_timezones("America/Sao_Paulo", "UTC")
        tz = Timezone(" America/Sao_Paulo ")
        assert tz.value == "America/Sao_Paulo"
        assert tz.zone == ZoneInfo("America/Sao_Paulo")
        assert is_timezone_registered("UTC")

    def test_names_are_case_sensitive(self):
        register_timezones("America/Sao_Paulo")
        with pytest.raises(InvalidValueError) as exc_info:
            Timezone("america/sao_paulo")
        assert exc_info.value.context == {"input_name": "america/sao_paulo"}

    def test_unregistered_and_empty(self):
        with pytest.raises(InvalidValueError):
            Timezone("Europe/Paris")
        with pytest.raises(InvalidValueError):
            Timezone("  ")

    def test_registration_is_all_or_nothing(self):
        with pytest.raises(InvalidValueError) as exc_info:
            register_timezones("UTC", "Not/AZone")
        assert exc_info.value.context == {"name": "Not/AZone"}
        assert not is_timezone_registered("UTC")

    def test_convert(self):
        register_timezones("America/Sao_Paulo")
        tz = Timezone("America/Sao_Paulo")
        local = tz.convert(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))
        assert local.hour == 9
        assert local.utcoffset() == timedelta(hours=-3)
        assert tz.convert(datetime(2024, 1, 1, 12, 0)) == local

    def test_json_and_db(self):
        register_timezones("America/Sao_Paulo")
        tz = Timezone("America/Sao_Paulo")
        assert loads(dumps(tz), Timezone) == tz
        assert Timezone.from_db(b"America/Sao_Paulo") == tz
        assert Timezone.from_db(None) is None
