"""
Safeguards: защитный слой над примитивом decimal128

Все обращения к стандартному модулю decimal проходят через этот модуль:
- Разбор текста с разделением ошибок грамматики и не-конечных значений
- Вычисление операций в изолированной копии DECIMAL_CTX
- Проверка конечности результата до создания Decimal

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Infinity никогда не выходят из этого модуля
2. Флаги контекста никогда не разделяются между потоками
"""

import re
from decimal import Context, InvalidOperation, localcontext
from decimal import Decimal as RawDecimal
from typing import Callable, Final, Optional

from pure_decimal.context import DECIMAL_CTX, INT_MAX, INT_MIN
from pure_decimal.errors import (
    DecimalError,
    DecimalParseError,
    NonFiniteError,
    NonFiniteResultError,
)


# =============================================================================
# ГРАММАТИКА ПОРЯДКА
# =============================================================================

_DIGITS: Final[str] = r"\d(?:_?\d)*"

# Конечный литерал с порядком; группы захватывают всё, кроме цифр порядка
_EXPONENT_LITERAL: Final = re.compile(
    rf"(\s*[+-]?(?:{_DIGITS}(?:\.(?:{_DIGITS})?)?|\.{_DIGITS})[eE])([+-]?){_DIGITS}(\s*)"
)

# Порядок далеко за пределами decimal128, но в пределах примитива
EXPONENT_SATURATION: Final[int] = 10**8


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def is_finite_payload(raw: RawDecimal) -> bool:
    """
    Проверка, что значение примитива конечно (не NaN, не Infinity).

    Args:
        raw: Значение decimal.Decimal

    Returns:
        True если значение конечное
    """
    return raw.is_finite()


def ensure_finite(raw: RawDecimal, operation: str) -> RawDecimal:
    """
    Допуск результата операции только если он конечен.

    Args:
        raw: Сырой результат примитива
        operation: Имя операции (для сообщения об ошибке)

    Returns:
        raw без изменений

    Raises:
        NonFiniteResultError: если raw является NaN или Infinity
    """
    if not is_finite_payload(raw):
        raise NonFiniteResultError(
            f"Only finite values are supported: {operation} produced {raw}"
        )
    return raw


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================


def parse_payload(text: str) -> RawDecimal:
    """
    Разбор текстового литерала в конечное значение decimal128.

    Грамматика полностью делегирована конструктору decimal.Decimal.
    Затем значение приводится к decimal128: литералы длиннее 34 значащих
    цифр округляются half-even, литералы за пределами диапазона порядка
    превращаются в Infinity и отклоняются, а слишком малые округляются к нулю.

    Порядок, который не помещается даже в примитив (например,
    "1E+99999999999999999999999"), насыщается до EXPONENT_SATURATION с тем же
    знаком: такой литерал грамматически корректен и классифицируется по
    величине, а не как синтаксическая ошибка.

    Args:
        text: Текстовый литерал (например, "1.25", "-3E+2")

    Returns:
        Конечное значение decimal.Decimal

    Raises:
        DecimalParseError: если грамматика отвергла текст
        NonFiniteError: если текст обозначает NaN или Infinity

    Examples:
        >>> parse_payload("1.00")
        Decimal('1.00')
        >>> parse_payload("nan")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        NonFiniteError: NaN is not supported
    """
    try:
        exact = _parse_exact(text)
    except InvalidOperation as exc:
        saturated = _saturate_exponent(text)
        if saturated is None:
            raise DecimalParseError(f"Failed to parse {text!r}") from exc
        try:
            exact = _parse_exact(saturated)
        except InvalidOperation:
            raise DecimalParseError(f"Failed to parse {text!r}") from exc

    if exact.is_nan():
        raise NonFiniteError(f"NaN is not supported: {text!r}")

    with localcontext(DECIMAL_CTX) as ctx:
        raw = ctx.create_decimal(exact)

    if raw.is_infinite():
        raise NonFiniteError(f"Infinity is not supported: {text!r}")
    return raw


def _parse_exact(text: str) -> RawDecimal:
    with localcontext(DECIMAL_CTX) as ctx:
        # Только синтаксическая ошибка должна бросать исключение
        ctx.traps[InvalidOperation] = True
        return RawDecimal(text)


def _saturate_exponent(text: str) -> Optional[str]:
    match = _EXPONENT_LITERAL.fullmatch(text)
    if match is None:
        return None
    sign = "-" if match.group(2) == "-" else "+"
    return f"{match.group(1)}{sign}{EXPONENT_SATURATION}{match.group(3)}"


def int_payload(value: int) -> RawDecimal:
    """
    Точная конверсия целого из диапазона i32/u32/i64/u64.

    Args:
        value: Целое в диапазоне [INT_MIN, INT_MAX]

    Returns:
        Точное значение decimal.Decimal

    Raises:
        DecimalError: если value вне диапазона 64-битных целых
    """
    if value < INT_MIN or value > INT_MAX:
        raise DecimalError(
            f"integer {value} is outside the 64-bit range [{INT_MIN}, {INT_MAX}]"
        )
    # Не больше 20 цифр: конверсия точна при точности 34
    return RawDecimal(value)


def rounded_int_payload(value: int) -> RawDecimal:
    """
    Конверсия целого произвольной величины с округлением до decimal128.

    Используется для внешних целых вне 64-битного диапазона: значение
    округляется half-even до 34 значащих цифр.

    Raises:
        NonFiniteError: если целое переполняет диапазон порядка decimal128
    """
    with localcontext(DECIMAL_CTX) as ctx:
        raw = ctx.create_decimal(value)
    if raw.is_infinite():
        raise NonFiniteError(
            f"Infinity is not supported: integer of {value.bit_length()} bits"
        )
    return raw


# =============================================================================
# ТЕКСТ
# =============================================================================


def format_payload(raw: RawDecimal, format_spec: Optional[str] = None) -> str:
    """
    Текстовая форма примитива под параметрами DECIMAL_CTX.

    str() и format() примитива читают контекст текущего потока
    (capitals, rounding), поэтому форма фиксируется здесь.

    Examples:
        >>> format_payload(RawDecimal("1E+3"))
        '1E+3'
    """
    with localcontext(DECIMAL_CTX):
        if format_spec is None:
            return str(raw)
        return format(raw, format_spec)


# =============================================================================
# ВЫЧИСЛЕНИЯ
# =============================================================================


def evaluate(
    operation: Callable[..., RawDecimal],
    *operands: RawDecimal,
    name: str = "",
) -> RawDecimal:
    """
    Вычисление операции примитива в изолированном контексте decimal128.

    operation: несвязанный метод Context (например, Context.divide).
    localcontext() создаёт копию DECIMAL_CTX, поэтому флаги одного вызова
    не видны другим потокам.

    Args:
        operation: Метод decimal.Context
        *operands: Конечные операнды
        name: Имя операции для сообщения об ошибке

    Returns:
        Конечный результат

    Raises:
        NonFiniteResultError: если результат NaN или Infinity

    Examples:
        >>> evaluate(Context.add, RawDecimal("1.11"), RawDecimal("2.22"))
        Decimal('3.33')
    """
    with localcontext(DECIMAL_CTX) as ctx:
        raw = operation(ctx, *operands)
    return ensure_finite(raw, name or operation.__name__)
