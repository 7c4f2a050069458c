"""
Тесты для защитного слоя над decimal128

Проверяет:
1. Классификацию конечности
2. Разбор текста и разделение причин ошибок
3. Точную конверсию целых
4. Вычисление операций в изолированном контексте
5. Текстовую форму, не зависящую от контекста потока
"""

import doctest
from decimal import Context
from decimal import Decimal as RawDecimal
from decimal import localcontext

import pytest

from pure_decimal import INT_MAX, INT_MIN, DecimalError, DecimalParseError, NonFiniteError
from pure_decimal.errors import NonFiniteResultError
from pure_decimal import safeguards
from pure_decimal.safeguards import (
    ensure_finite,
    evaluate,
    format_payload,
    int_payload,
    is_finite_payload,
    parse_payload,
    rounded_int_payload,
)


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


class TestFiniteness:
    """Тесты is_finite_payload / ensure_finite"""

    def test_finite_values(self) -> None:
        assert is_finite_payload(RawDecimal("1.5"))
        assert is_finite_payload(RawDecimal("-0"))

    def test_non_finite_values(self) -> None:
        assert not is_finite_payload(RawDecimal("NaN"))
        assert not is_finite_payload(RawDecimal("sNaN"))
        assert not is_finite_payload(RawDecimal("-Infinity"))

    def test_ensure_finite_passes_through(self) -> None:
        raw = RawDecimal("2.5")
        assert ensure_finite(raw, "test") is raw

    def test_ensure_finite_names_operation(self) -> None:
        with pytest.raises(NonFiniteResultError, match="div produced Infinity"):
            ensure_finite(RawDecimal("Infinity"), "div")


# =============================================================================
# РАЗБОР
# =============================================================================


class TestParsePayload:
    """Тесты parse_payload"""

    def test_preserves_exponent(self) -> None:
        """Написание литерала сохраняется"""
        assert str(parse_payload("1.00")) == "1.00"

    def test_preserves_negative_zero(self) -> None:
        assert str(parse_payload("-0")) == "-0"

    def test_syntax_error(self) -> None:
        with pytest.raises(DecimalParseError) as exc_info:
            parse_payload("12abc")
        assert exc_info.value.__cause__ is not None

    def test_nan_and_infinity(self) -> None:
        with pytest.raises(NonFiniteError, match="NaN"):
            parse_payload("NaN")
        with pytest.raises(NonFiniteError, match="Infinity"):
            parse_payload("-inf")

    def test_subnormal_underflow_is_finite(self) -> None:
        """Слишком малые литералы округляются к конечному значению"""
        assert parse_payload("1E-99999").is_zero()

    def test_exponent_beyond_primitive(self) -> None:
        """Порядок, не помещающийся в примитив, не является синтаксической ошибкой"""
        with pytest.raises(NonFiniteError, match="Infinity"):
            parse_payload(" 1_0.5E+99999999999999999999999 ")
        assert parse_payload("-2E-99999999999999999999999").is_zero()


# =============================================================================
# ЦЕЛЫЕ
# =============================================================================


class TestIntPayload:
    """Тесты int_payload"""

    def test_bounds(self) -> None:
        assert int_payload(INT_MAX) == RawDecimal(2**64 - 1)
        assert int_payload(INT_MIN) == RawDecimal(-(2**63))
        assert int_payload(0) == RawDecimal(0)

    def test_out_of_range(self) -> None:
        with pytest.raises(DecimalError):
            int_payload(2**64)
        with pytest.raises(DecimalError):
            int_payload(-(2**63) - 1)

    def test_rounded_beyond_64_bits(self) -> None:
        assert rounded_int_payload(2**64) == RawDecimal("18446744073709551616")
        assert rounded_int_payload(10**40 + 1) == RawDecimal("1E+40")
        assert len(rounded_int_payload(10**40 + 1).as_tuple().digits) == 34

    def test_rounded_overflow(self) -> None:
        with pytest.raises(NonFiniteError, match="Infinity"):
            rounded_int_payload(-(10**7000))


# =============================================================================
# ВЫЧИСЛЕНИЯ
# =============================================================================


class TestEvaluate:
    """Тесты evaluate"""

    def test_add(self) -> None:
        assert evaluate(Context.add, RawDecimal("1.11"), RawDecimal("2.22")) == RawDecimal("3.33")

    def test_default_name(self) -> None:
        """Имя операции берётся из метода Context"""
        with pytest.raises(NonFiniteResultError, match="divide"):
            evaluate(Context.divide, RawDecimal(1), RawDecimal(0))

    def test_explicit_name(self) -> None:
        with pytest.raises(NonFiniteResultError, match="rem produced NaN"):
            evaluate(Context.remainder, RawDecimal(1), RawDecimal(0), name="rem")

    def test_precision_is_decimal128(self) -> None:
        result = evaluate(Context.divide, RawDecimal(2), RawDecimal(3))
        assert len(result.as_tuple().digits) == 34


# =============================================================================
# ТЕКСТ
# =============================================================================


class TestFormatPayload:
    """Тесты format_payload"""

    def test_canonical_form(self) -> None:
        assert format_payload(RawDecimal("1E+3")) == "1E+3"
        assert format_payload(RawDecimal("-0.00")) == "-0.00"

    def test_ignores_thread_capitals(self) -> None:
        with localcontext() as ctx:
            ctx.capitals = 0
            assert str(RawDecimal("1E+3")) == "1e+3"
            assert format_payload(RawDecimal("1E+3")) == "1E+3"

    def test_format_spec(self) -> None:
        assert format_payload(RawDecimal("1234.5"), ".2f") == "1234.50"


def test_module_examples() -> None:
    """Примеры в docstring модуля выполняются"""
    results = doctest.testmod(safeguards)
    assert results.failed == 0
    assert results.attempted > 0
