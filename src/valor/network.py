"""Network value objects: IPAddress (v4 or v6) and PortNumber."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Any

from .errors import InvalidValueError, ValueObjectError
from .serialization import TextValue, as_invalid, int_from_db, json_int

MIN_PORT = 1
MAX_PORT = 65535


@dataclass(frozen=True, slots=True)
class IPAddress(TextValue):
    """
    Canonical textual IP address.

        IPAddress(" 2001:DB8::1 ").value   # "2001:db8::1"
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError(
                "IP address must be a string",
                context={"received_type": type(self.value).__name__},
            )
        try:
            address = ipaddress.ip_address(self.value.strip())
        except ValueError as exc:
            raise InvalidValueError(
                "invalid IP address format",
                context={"input": self.value},
                cause=exc,
            ) from exc
        object.__setattr__(self, "value", str(address))

    @property
    def address(self) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
        return ipaddress.ip_address(self.value)

    def is_ipv4(self) -> bool:
        return self.address.version == 4

    def is_ipv6(self) -> bool:
        return self.address.version == 6

    def is_loopback(self) -> bool:
        return self.address.is_loopback

    def is_private(self) -> bool:
        return self.address.is_private


@dataclass(frozen=True, slots=True)
class PortNumber:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(
                "port number must be an integer",
                context={"received_type": type(self.value).__name__},
            )
        if not MIN_PORT <= self.value <= MAX_PORT:
            raise InvalidValueError(
                f"port number must be between {MIN_PORT} and {MAX_PORT}",
                context={"input_value": self.value},
            )

    def is_well_known(self) -> bool:
        return self.value < 1024

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> int:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> PortNumber:
        try:
            return cls(json_int(data, "PortNumber"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "PortNumber")

    def to_db(self) -> int:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> PortNumber | None:
        value = int_from_db(src, "PortNumber")
        if value is None:
            return None
        return cls(value)
