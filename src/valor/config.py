"""
config.py — Process-global settings

Three settings are shared by the whole process:

    default precision   digits used by new Quantity values (0..9, default 3)
    registered units    admissible Quantity units
    legal age           threshold for BirthDate.is_legal_age() (>= 0, default 18)

configure() applies a Settings snapshot in one call, typically at startup:

    configure(Settings.from_env())

Environment variables read by Settings.from_env():

    VALOR_DEFAULT_PRECISION   int
    VALOR_UNITS               comma separated symbols ("KG,L,UN")
    VALOR_LEGAL_AGE           int
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import InvalidValueError
from .logging_config import get_logger
from .temporal import DEFAULT_LEGAL_AGE, legal_age, set_legal_age
from .units import (
    DEFAULT_PRECISION,
    check_precision,
    default_precision,
    register_units,
    registered_units,
    set_default_precision,
)

logger = get_logger("config")

ENV_PRECISION = "VALOR_DEFAULT_PRECISION"
ENV_UNITS = "VALOR_UNITS"
ENV_LEGAL_AGE = "VALOR_LEGAL_AGE"


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise InvalidValueError(
            "configuration value must be an integer",
            context={"variable": name, "input_value": raw},
            cause=exc,
        ) from exc


@dataclass(frozen=True, slots=True)
class Settings:
    default_precision: int = DEFAULT_PRECISION
    units: tuple[str, ...] = ()
    legal_age: int = DEFAULT_LEGAL_AGE

    def __post_init__(self) -> None:
        check_precision(self.default_precision)
        if isinstance(self.legal_age, bool) or not isinstance(self.legal_age, int) or self.legal_age < 0:
            raise InvalidValueError(
                "legal age must be a non-negative integer",
                context={"input_value": self.legal_age},
            )
        object.__setattr__(self, "units", tuple(self.units))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Settings from environment variables; unset variables keep defaults.

        Raises:
            InvalidValueError: malformed value (context["variable"] names it).
        """
        env = os.environ if environ is None else environ
        units = tuple(
            symbol.strip()
            for symbol in env.get(ENV_UNITS, "").split(",")
            if symbol.strip()
        )
        precision = _env_int(env, ENV_PRECISION, DEFAULT_PRECISION)
        age = _env_int(env, ENV_LEGAL_AGE, DEFAULT_LEGAL_AGE)
        try:
            return cls(default_precision=precision, units=units, legal_age=age)
        except InvalidValueError as exc:
            variable = ENV_PRECISION if "precision" in exc.message else ENV_LEGAL_AGE
            raise exc.with_context(variable=variable)


def configure(settings: Settings) -> None:
    """Apply settings to the unit registry and the legal-age threshold."""
    if settings.units:
        register_units(*settings.units)
    set_default_precision(settings.default_precision)
    set_legal_age(settings.legal_age)
    logger.info(
        "VALOR_CONFIG",
        extra={
            "default_precision": settings.default_precision,
            "units": sorted(registered_units()),
            "legal_age": settings.legal_age,
        },
    )


def current_settings() -> Settings:
    return Settings(
        default_precision=default_precision(),
        units=tuple(sorted(registered_units())),
        legal_age=legal_age(),
    )
