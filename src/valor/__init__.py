"""
valor — Value Objects for Brazilian Business Domains

Immutable, self-validating values that replace bare str/int/float with
domain concepts: money, tax identifiers, quantities, postal codes, dates.
A value that exists is a valid value.

================================================================================
QUICK START
================================================================================

Money (integer minor units, never float):

    from valor import Money, Currency, Percentage

    price = Money(1050, Currency.BRL)          # BRL 10.50
    parts = Money.brl(100).split(3)            # sum(parts) == BRL 100.00
    tax = Percentage.from_float(0.1).apply_to(Money.brl(100))   # BRL 10.00

Brazilian identifiers:

    from valor import CPF, CNPJ

    CPF("529.982.247-25").value                # "52998224725"
    CNPJ("11222333000181").formatted()         # "11.222.333/0001-81"

Quantities of registered units:

    from valor import Quantity, register_units

    register_units("KG")
    Quantity.of(1.57, "kg").multiply_by_money(Money.brl_cents(1031))  # BRL 16.19

Failures are ValueObjectError subclasses; discriminate on .code:

    from valor import ErrorCode, ValueObjectError

    try:
        Money.brl(1) + Money.usd(1)
    except ValueObjectError as e:
        assert e.code is ErrorCode.DOMAIN_VIOLATION

SQLAlchemy column types live in valor.sqltypes (install the "sql" extra).

================================================================================
"""

# Errors, logging, configuration
from .errors import (
    ErrorCode,
    ValueObjectError,
    InvalidValueError,
    DomainViolationError,
    NotFoundError,
    ConflictError,
)
from .logging_config import configure_logging, get_logger
from .config import Settings, configure, current_settings

# Financial core
from .rounding import RoundingMode
from .currency import Currency
from .money import Money
from .percentage import Percentage
from .discount import Discount, DiscountType

# Identifiers
from .documents import CPF, CNPJ
from .checkdigits import validate_cpf, validate_cnpj, generate_cpf, generate_cnpj
from .identifiers import UUID, NullableUUID, Slug
from .primitives import NonEmptyString, PositiveInt, Preferences, Flag
from .bounded import BoundedValue, MinValue, RangedValue

# Units and quantities
from .units import (
    Unit,
    UnitRegistry,
    register_units,
    is_registered,
    registered_units,
    clear_registered_units,
    set_default_precision,
    default_precision,
)
from .quantity import Quantity

# Peripheral value objects
from .contact import Email, Phone
from .address import CEP, UF
from .network import IPAddress, PortNumber
from .media import (
    FileExtension,
    MIMEType,
    register_file_extensions,
    register_mime_types,
    clear_registered_file_extensions,
    clear_registered_mime_types,
)
from .temporal import Date, DateRange, BirthDate, Day, set_legal_age, legal_age
from .audit import Version, AuditUser, CreatedAt, UpdatedAt, NullableTime, Audit
from .geo import Latitude, Longitude
from .color import Color
from .classifiers import (
    Status,
    Role,
    EntityType,
    register_statuses,
    registered_statuses,
    clear_registered_statuses,
    register_roles,
    registered_roles,
    clear_registered_roles,
    register_entity_types,
    registered_entity_types,
    clear_registered_entity_types,
)
from .schedule import (
    DayOfWeek,
    TimeOfDay,
    TimeRange,
    BusinessHours,
    Timezone,
    register_timezones,
    registered_timezones,
    is_timezone_registered,
    clear_registered_timezones,
)

# JSON framing
from .serialization import dumps, loads

__version__ = "1.0.0"

__all__ = [
    # Errors
    "ErrorCode",
    "ValueObjectError",
    "InvalidValueError",
    "DomainViolationError",
    "NotFoundError",
    "ConflictError",
    # Logging / config
    "configure_logging",
    "get_logger",
    "Settings",
    "configure",
    "current_settings",
    # Financial
    "RoundingMode",
    "Currency",
    "Money",
    "Percentage",
    "Discount",
    "DiscountType",
    # Identifiers
    "CPF",
    "CNPJ",
    "validate_cpf",
    "validate_cnpj",
    "generate_cpf",
    "generate_cnpj",
    "UUID",
    "NullableUUID",
    "Slug",
    # General purpose
    "NonEmptyString",
    "PositiveInt",
    "Preferences",
    "Flag",
    "BoundedValue",
    "MinValue",
    "RangedValue",
    # Units
    "Unit",
    "UnitRegistry",
    "register_units",
    "is_registered",
    "registered_units",
    "clear_registered_units",
    "set_default_precision",
    "default_precision",
    "Quantity",
    # Peripheral
    "Email",
    "Phone",
    "CEP",
    "UF",
    "IPAddress",
    "PortNumber",
    "FileExtension",
    "MIMEType",
    "register_file_extensions",
    "register_mime_types",
    "clear_registered_file_extensions",
    "clear_registered_mime_types",
    "Date",
    "DateRange",
    "BirthDate",
    "Day",
    "set_legal_age",
    "legal_age",
    "Version",
    "AuditUser",
    "CreatedAt",
    "UpdatedAt",
    "NullableTime",
    "Audit",
    "Latitude",
    "Longitude",
    "Color",
    # Labels
    "Status",
    "Role",
    "EntityType",
    "register_statuses",
    "registered_statuses",
    "clear_registered_statuses",
    "register_roles",
    "registered_roles",
    "clear_registered_roles",
    "register_entity_types",
    "registered_entity_types",
    "clear_registered_entity_types",
    # Scheduling
    "DayOfWeek",
    "TimeOfDay",
    "TimeRange",
    "BusinessHours",
    "Timezone",
    "register_timezones",
    "registered_timezones",
    "is_timezone_registered",
    "clear_registered_timezones",
    # JSON
    "dumps",
    "loads",
]
