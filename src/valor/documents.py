"""Brazilian taxpayer identifiers: CPF (individuals) and CNPJ (legal entities)."""

from __future__ import annotations

from dataclasses import dataclass

from .checkdigits import validate_cnpj, validate_cpf
from .errors import InvalidValueError
from .serialization import TextValue


def _require_text(value: object, type_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(
            f"{type_name} must be a string",
            context={"received_type": type(value).__name__},
        )
    return value


@dataclass(frozen=True, slots=True)
class CPF(TextValue):
    """
    Cadastro de Pessoas Físicas, stored as its 11 canonical digits.

        CPF("529.982.247-25").value        # "52998224725"
        CPF("52998224725").formatted()     # "529.982.247-25"
    """
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", validate_cpf(_require_text(self.value, "CPF")))

    def formatted(self) -> str:
        v = self.value
        return f"{v[0:3]}.{v[3:6]}.{v[6:9]}-{v[9:11]}"


@dataclass(frozen=True, slots=True)
class CNPJ(TextValue):
    """
    Cadastro Nacional da Pessoa Jurídica, stored as its 14 canonical digits.

        CNPJ("11.222.333/0001-81").formatted()   # "11.222.333/0001-81"
    """
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", validate_cnpj(_require_text(self.value, "CNPJ")))

    def formatted(self) -> str:
        v = self.value
        return f"{v[0:2]}.{v[2:5]}.{v[5:8]}/{v[8:12]}-{v[12:14]}"
