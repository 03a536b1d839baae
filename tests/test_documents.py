"""CPF / CNPJ check digits and the document value objects."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from valor import CNPJ, CPF, ErrorCode, InvalidValueError
from valor.checkdigits import (
    cnpj_check_digits,
    cpf_check_digits,
    generate_cnpj,
    generate_cpf,
    mod11_digit,
    only_digits,
    validate_cnpj,
    validate_cpf,
)

VALID_CPF = "52998224725"
VALID_CNPJ = "11222333000181"

cpf_bases = st.text(alphabet="0123456789", min_size=9, max_size=9)
cnpj_bases = st.text(alphabet="0123456789", min_size=12, max_size=12)


def _is_repeated(digits):
    return digits == digits[0] * len(digits)


def _flip(digits, position, delta):
    flipped = (int(digits[position]) + delta) % 10
    return digits[:position] + str(flipped) + digits[position + 1:]


class TestMod11:

    def test_remainder_below_two_gives_zero(self):
        # 1*10 + 2*9 + ... + 9*2 = 210, 210 % 11 == 1
        assert mod11_digit("123456789", (10, 9, 8, 7, 6, 5, 4, 3, 2)) == 0

    def test_known_check_digits(self):
        assert cpf_check_digits("529982247") == "25"
        assert cnpj_check_digits("112223330001") == "81"

    def test_only_digits(self):
        assert only_digits("529.982.247-25") == VALID_CPF

    def test_generator_rejects_bad_base(self):
        with pytest.raises(InvalidValueError):
            generate_cpf("1234")


class TestCPF:

    def test_formatted_input(self):
        cpf = CPF("529.982.247-25")
        assert cpf.value == VALID_CPF
        assert cpf.formatted() == "529.982.247-25"
        assert str(cpf) == VALID_CPF

    def test_first_check_digit_failure(self):
        with pytest.raises(InvalidValueError) as exc_info:
            CPF("123.456.789-19")
        err = exc_info.value
        assert err.code is ErrorCode.INVALID
        assert err.context == {"check_digit": 1, "input": "123.456.789-19"}

    def test_second_check_digit_failure(self):
        # first check digit of 123456789 is 0, so "-00" fails on the second
        with pytest.raises(InvalidValueError) as exc_info:
            CPF("123.456.789-00")
        assert exc_info.value.context["check_digit"] == 2

    def test_wrong_length(self):
        with pytest.raises(InvalidValueError) as exc_info:
            CPF("1234567890")
        assert "check_digit" not in exc_info.value.context

    def test_empty_is_invalid(self):
        with pytest.raises(InvalidValueError):
            CPF("")

    @pytest.mark.parametrize("digit", "0123456789")
    def test_repeated_digits(self, digit):
        with pytest.raises(InvalidValueError):
            validate_cpf(digit * 11)

    def test_json_and_db(self):
        cpf = CPF(VALID_CPF)
        assert CPF.from_json(cpf.to_json()) == cpf
        assert CPF.from_db(cpf.to_db()) == cpf
        assert CPF.from_db(VALID_CPF.encode()) == cpf
        assert CPF.from_db(None) is None

    def test_json_number_is_invalid(self):
        with pytest.raises(InvalidValueError) as exc_info:
            CPF.from_json(52998224725)
        assert exc_info.value.context["received_type"] == "number"

    def test_db_int_is_invalid(self):
        with pytest.raises(InvalidValueError) as exc_info:
            CPF.from_db(52998224725)
        assert exc_info.value.context["received_type"] == "int"

    @given(cpf_bases)
    def test_generated_cpfs_validate(self, base):
        cpf = generate_cpf(base)
        if _is_repeated(cpf):
            return
        assert validate_cpf(cpf) == cpf

    @given(cpf_bases, st.integers(min_value=0, max_value=10), st.integers(min_value=1, max_value=9))
    def test_single_digit_flip_agrees_with_generator(self, base, position, delta):
        cpf = generate_cpf(base)
        if _is_repeated(cpf):
            return
        flipped = _flip(cpf, position, delta)
        # remainders 0 and 1 both give check digit 0, so a flip in the base
        # can land on another valid number; a flip never escapes detection otherwise
        if generate_cpf(flipped[:9]) == flipped and not _is_repeated(flipped):
            assert validate_cpf(flipped) == flipped
        else:
            with pytest.raises(InvalidValueError):
                validate_cpf(flipped)

    @given(cpf_bases, st.integers(min_value=9, max_value=10), st.integers(min_value=1, max_value=9))
    def test_check_digit_flip_is_rejected(self, base, position, delta):
        cpf = generate_cpf(base)
        if _is_repeated(cpf):
            return
        with pytest.raises(InvalidValueError):
            validate_cpf(_flip(cpf, position, delta))


class TestCNPJ:

    def test_formatted(self):
        cnpj = CNPJ("11.222.333/0001-81")
        assert cnpj.value == VALID_CNPJ
        assert cnpj.formatted() == "11.222.333/0001-81"

    def test_bad_check_digit(self):
        with pytest.raises(InvalidValueError) as exc_info:
            CNPJ("11.222.333/0001-91")
        assert exc_info.value.context["check_digit"] == 1

    def test_repeated_digits(self):
        with pytest.raises(InvalidValueError):
            CNPJ("00000000000000")

    def test_wrong_length(self):
        with pytest.raises(InvalidValueError):
            validate_cnpj("1122233300018")

    def test_json_and_db(self):
        cnpj = CNPJ(VALID_CNPJ)
        assert CNPJ.from_json(cnpj.to_json()) == cnpj
        assert CNPJ.from_db(cnpj.to_db()) == cnpj

    @given(cnpj_bases)
    def test_generated_cnpjs_validate(self, base):
        cnpj = generate_cnpj(base)
        if _is_repeated(cnpj):
            return
        assert validate_cnpj(cnpj) == cnpj

    @given(cnpj_bases, st.integers(min_value=0, max_value=13), st.integers(min_value=1, max_value=9))
    def test_single_digit_flip_agrees_with_generator(self, base, position, delta):
        cnpj = generate_cnpj(base)
        if _is_repeated(cnpj):
            return
        flipped = _flip(cnpj, position, delta)
        if generate_cnpj(flipped[:12]) == flipped and not _is_repeated(flipped):
            assert validate_cnpj(flipped) == flipped
        else:
            with pytest.raises(InvalidValueError):
                validate_cnpj(flipped)

    @given(cnpj_bases, st.integers(min_value=12, max_value=13), st.integers(min_value=1, max_value=9))
    def test_check_digit_flip_is_rejected(self, base, position, delta):
        cnpj = generate_cnpj(base)
        if _is_repeated(cnpj):
            return
        with pytest.raises(InvalidValueError):
            validate_cnpj(_flip(cnpj, position, delta))
