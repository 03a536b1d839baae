"""
sqltypes.py — SQLAlchemy column types for single-column value objects

Each type binds through the value object's to_db() hook and loads through
its from_db() hook, so rows go through exactly the same validation as
constructor input:

    class Customer(Base):
        __tablename__ = "customers"
        cpf: Mapped[CPF] = mapped_column(CPFType())
        state: Mapped[UF] = mapped_column(UFType())

Multi-column values (Money, Quantity, DateRange) map with
sqlalchemy.orm.composite() through their __composite_values__().

Requires the "sql" extra (SQLAlchemy 2.x).
"""

from __future__ import annotations

from typing import Any, ClassVar

from sqlalchemy import BigInteger, Date as SADate, DateTime, Float, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from .address import CEP, UF
from .audit import AuditUser, CreatedAt, NullableTime, UpdatedAt, Version
from .bounded import BoundedValue, MinValue, RangedValue
from .classifiers import EntityType, Role, Status
from .color import Color
from .contact import Email, Phone
from .currency import Currency
from .documents import CNPJ, CPF
from .geo import Latitude, Longitude
from .identifiers import UUID, NullableUUID, Slug
from .media import FileExtension, MIMEType
from .network import IPAddress, PortNumber
from .percentage import Percentage
from .primitives import NonEmptyString, PositiveInt, Preferences
from .schedule import BusinessHours, DayOfWeek, TimeOfDay, TimeRange, Timezone
from .temporal import BirthDate, Date, Day
from .units import Unit


class ValueObjectType(TypeDecorator):
    """
    Base decorator: bind with to_db(), load with from_db().

    Contract:
        value_class is the value object stored in the column. Raw scalars
        given on bind (e.g. a plain str for a CPF column) are validated by
        constructing the value object first.
    """

    impl = String
    cache_ok = True
    value_class: ClassVar[type]

    def coerce(self, value: Any) -> Any:
        return self.value_class(value)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, self.value_class):
            value = self.coerce(value)
        return value.to_db()

    def process_result_value(self, value, dialect):
        return self.value_class.from_db(value)


class CPFType(ValueObjectType):
    impl = String(11)
    value_class = CPF


class CNPJType(ValueObjectType):
    impl = String(14)
    value_class = CNPJ


class CurrencyType(ValueObjectType):
    impl = String(3)
    value_class = Currency

    def coerce(self, value: Any) -> Any:
        return Currency.parse(value)


class PercentageType(ValueObjectType):
    """Scaled integer (fraction x 10 000); NULL loads as 0%."""
    impl = BigInteger
    value_class = Percentage


class UnitType(ValueObjectType):
    impl = String(32)
    value_class = Unit


class EmailType(ValueObjectType):
    impl = String(254)
    value_class = Email


class PhoneType(ValueObjectType):
    impl = String(13)
    value_class = Phone


class CEPType(ValueObjectType):
    impl = String(8)
    value_class = CEP


class UFType(ValueObjectType):
    impl = String(2)
    value_class = UF

    def coerce(self, value: Any) -> Any:
        return UF.parse(value)


class UUIDType(ValueObjectType):
    impl = String(36)
    value_class = UUID

    def coerce(self, value: Any) -> Any:
        return UUID.parse(str(value))


class SlugType(ValueObjectType):
    impl = String(255)
    value_class = Slug


class IPAddressType(ValueObjectType):
    impl = String(45)
    value_class = IPAddress


class PortNumberType(ValueObjectType):
    impl = Integer
    value_class = PortNumber


class FileExtensionType(ValueObjectType):
    impl = String(16)
    value_class = FileExtension


class MIMETypeType(ValueObjectType):
    impl = String(255)
    value_class = MIMEType


class DateType(ValueObjectType):
    impl = SADate
    value_class = Date


class BirthDateType(ValueObjectType):
    impl = SADate
    value_class = BirthDate


class DayType(ValueObjectType):
    impl = Integer
    value_class = Day


class VersionType(ValueObjectType):
    """NULL loads as version 0."""
    impl = BigInteger
    value_class = Version


class AuditUserType(ValueObjectType):
    impl = String(254)
    value_class = AuditUser


class CreatedAtType(ValueObjectType):
    impl = DateTime(timezone=True)
    value_class = CreatedAt


class UpdatedAtType(ValueObjectType):
    impl = DateTime(timezone=True)
    value_class = UpdatedAt


class NullableTimeType(ValueObjectType):
    """NULL loads as an empty NullableTime."""
    impl = DateTime(timezone=True)
    value_class = NullableTime


class NullableUUIDType(ValueObjectType):
    """NULL loads as an empty NullableUUID."""
    impl = String(36)
    value_class = NullableUUID


class NonEmptyStringType(ValueObjectType):
    impl = String
    value_class = NonEmptyString


class PositiveIntType(ValueObjectType):
    impl = BigInteger
    value_class = PositiveInt


class PreferencesType(ValueObjectType):
    """JSON text; NULL loads as empty preferences."""
    impl = Text
    value_class = Preferences


class BoundedValueType(ValueObjectType):
    impl = Text
    value_class = BoundedValue

    def coerce(self, value: Any) -> Any:
        return BoundedValue.from_json(value)


class MinValueType(ValueObjectType):
    impl = Text
    value_class = MinValue

    def coerce(self, value: Any) -> Any:
        return MinValue.from_json(value)


class RangedValueType(ValueObjectType):
    impl = Text
    value_class = RangedValue

    def coerce(self, value: Any) -> Any:
        return RangedValue.from_json(value)


class LatitudeType(ValueObjectType):
    impl = Float
    value_class = Latitude


class LongitudeType(ValueObjectType):
    impl = Float
    value_class = Longitude


class ColorType(ValueObjectType):
    impl = String(7)
    value_class = Color


class StatusType(ValueObjectType):
    """NULL loads as the empty status."""
    impl = String(64)
    value_class = Status


class RoleType(ValueObjectType):
    impl = String(64)
    value_class = Role


class EntityTypeType(ValueObjectType):
    impl = String(64)
    value_class = EntityType


class DayOfWeekType(ValueObjectType):
    """Stored as 0 (Sunday) .. 6 (Saturday); names bind through parse."""
    impl = Integer
    value_class = DayOfWeek

    def coerce(self, value: Any) -> Any:
        if isinstance(value, str):
            return DayOfWeek.parse(value)
        return DayOfWeek(value)


class TimeOfDayType(ValueObjectType):
    """Minutes since midnight; "HH:MM" strings bind through parse."""
    impl = Integer
    value_class = TimeOfDay

    def coerce(self, value: Any) -> Any:
        return TimeOfDay.parse(value)


class TimeRangeType(ValueObjectType):
    impl = Text
    value_class = TimeRange

    def coerce(self, value: Any) -> Any:
        return TimeRange.parse(value)


class BusinessHoursType(ValueObjectType):
    """JSON text; NULL loads as an empty schedule."""
    impl = Text
    value_class = BusinessHours


class TimezoneType(ValueObjectType):
    impl = String(64)
    value_class = Timezone
