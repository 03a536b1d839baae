"""Error model, rounding helpers, JSON framing and structured logging."""

import io
import json
import logging

import pytest

from valor import (
    CPF,
    ConflictError,
    Currency,
    DomainViolationError,
    ErrorCode,
    InvalidValueError,
    Money,
    NotFoundError,
    Percentage,
    ValueObjectError,
    configure_logging,
    dumps,
    get_logger,
)
from valor.rounding import RoundingMode, divide_rounded, scale_float


class TestErrorModel:

    def test_codes(self):
        assert InvalidValueError("x").code is ErrorCode.INVALID
        assert DomainViolationError("x").code is ErrorCode.DOMAIN_VIOLATION
        assert NotFoundError("x").code is ErrorCode.NOT_FOUND
        assert ConflictError("x").code is ErrorCode.CONFLICT
        assert ValueObjectError("x").code is ErrorCode.INTERNAL

    def test_builtin_compatibility(self):
        assert isinstance(InvalidValueError("x"), ValueError)
        assert isinstance(NotFoundError("x"), LookupError)

    def test_context_and_cause(self):
        cause = KeyError("k")
        err = InvalidValueError("bad", context={"input": "a"}, cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause
        assert err.with_context(field="f") is err
        assert err.to_dict() == {
            "code": "invalid",
            "message": "bad",
            "context": {"input": "a", "field": "f"},
        }
        assert str(err) == "bad (input='a', field='f')"

    def test_explicit_code_override(self):
        err = ValueObjectError("x", code=ErrorCode.NOT_FOUND)
        assert err.code is ErrorCode.NOT_FOUND

    def test_discriminate_on_code(self):
        try:
            Money.brl(1) + Money.usd(1)
        except ValueObjectError as e:
            assert e.code is ErrorCode.DOMAIN_VIOLATION
        else:
            pytest.fail("expected a domain violation")


class TestRounding:

    @pytest.mark.parametrize(
        "numerator, expected",
        [(5, 0), (15, 2), (25, 2), (-5, 0), (-15, -2), (14, 1), (16, 2)],
    )
    def test_divide_half_even(self, numerator, expected):
        assert divide_rounded(numerator, 10) == expected

    @pytest.mark.parametrize(
        "mode, expected_pos, expected_neg",
        [
            (RoundingMode.HALF_UP, 2, -2),
            (RoundingMode.HALF_DOWN, 1, -1),
            (RoundingMode.DOWN, 1, -1),
            (RoundingMode.UP, 2, -2),
            (RoundingMode.FLOOR, 1, -2),
            (RoundingMode.CEILING, 2, -1),
        ],
    )
    def test_divide_modes_on_tie(self, mode, expected_pos, expected_neg):
        assert divide_rounded(15, 10, mode) == expected_pos
        assert divide_rounded(-15, 10, mode) == expected_neg

    def test_divide_matches_decimal_rounding(self):
        for numerator in range(-200, 201):
            for mode in RoundingMode:
                assert divide_rounded(numerator, 8, mode) == scale_float(numerator / 8, 1, mode)

    def test_scale_float_uses_shortest_repr(self):
        assert scale_float(0.00005, 10_000) == 0
        assert scale_float(1.005, 100, RoundingMode.HALF_UP) == 101

    def test_scale_float_rejects_infinity(self):
        with pytest.raises(InvalidValueError) as exc_info:
            scale_float(float("inf"), 100)
        assert exc_info.value.context["input_value"] == "inf"


class TestJSONFraming:

    def test_nested_value_objects(self):
        payload = {
            "price": Money(1050, Currency.BRL),
            "tax": Percentage(1000),
            "owner": CPF("52998224725"),
            "items": [Money.usd(1)],
        }
        assert json.loads(dumps(payload)) == {
            "price": {"amount": 1050, "currency": "BRL"},
            "tax": 0.1,
            "owner": "52998224725",
            "items": [{"amount": 100, "currency": "USD"}],
        }


class TestStructuredLogging:

    def test_json_lines(self):
        stream = io.StringIO()
        configure_logging(level=logging.DEBUG, stream=stream)
        log = get_logger("test")
        log.info("hello", extra={"unit": "KG"})
        try:
            raise InvalidValueError("bad", context={"input": "x"})
        except InvalidValueError:
            log.exception("failed")

        first, second = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert first["logger"] == "valor.test"
        assert first["message"] == "hello"
        assert first["unit"] == "KG"
        assert second["level"] == "ERROR"
        assert second["exc_code"] == "invalid"
        assert second["exc_context"] == {"input": "x"}

    def test_configure_is_idempotent(self):
        configure_logging(stream=io.StringIO())
        configure_logging(stream=io.StringIO())
        assert len(logging.getLogger("valor").handlers) == 1
