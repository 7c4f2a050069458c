"""
Serde: внешняя сериализация Decimal

Исходящее представление: всегда строка в канонической форме примитива
(str(Decimal)), никогда не число JSON. Потребитель не должен разбирать
значение через float.

Входящие формы:
- str: разбирается через Decimal.from_str
- float: repr(float) разбирается как строка (теряет двоичную точность,
  но сохраняет ожидаемые десятичные цифры)
- int: точная конверсия Decimal.from_int в 64-битном диапазоне, вне его
  округление до 34 значащих цифр (как у числа JSON, не помещающегося в i64/u64)
- Decimal: возвращается без изменений
- Любая другая форма: InvalidValueError "invalid type"

Интеграция с pydantic v2: Decimal можно использовать как тип поля
BaseModel, model_dump() и model_dump_json() выдают строку.
"""

import logging
from functools import lru_cache
from typing import Any, Dict

from pydantic import TypeAdapter
from pydantic_core import CoreSchema, core_schema

from pure_decimal.contracts import wire_json_schema
from pure_decimal.context import INT_MAX, INT_MIN
from pure_decimal.errors import DecimalError, InvalidValueError
from pure_decimal.safeguards import rounded_int_payload
from pure_decimal.value import Decimal

logger = logging.getLogger(__name__)

EXPECTING = "a Decimal value"

# Длинные целые описываются разрядностью, а не цифрами
_SHAPE_INT_BITS = 4096


# =============================================================================
# ОПИСАНИЕ ФОРМ
# =============================================================================


def describe_shape(value: Any) -> str:
    """
    Человекочитаемое описание формы внешнего значения.

    Examples:
        >>> describe_shape(True)
        'boolean `true`'
        >>> describe_shape(None)
        'null'
    """
    if isinstance(value, bool):
        return f"boolean `{str(value).lower()}`"
    if value is None:
        return "null"
    if isinstance(value, str):
        return f'string "{value}"'
    if isinstance(value, float):
        return f"floating point `{value!r}`"
    if isinstance(value, int):
        if value.bit_length() > _SHAPE_INT_BITS:
            return f"integer of {value.bit_length()} bits"
        return f"integer `{value}`"
    if isinstance(value, (bytes, bytearray)):
        return "byte array"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, (list, tuple, set, frozenset)):
        return "sequence"
    cls = type(value)
    return f"type `{cls.__module__}.{cls.__qualname__}`"


def _invalid_value(value: Any, exc: DecimalError) -> InvalidValueError:
    logger.debug("Rejected %s: %s", describe_shape(value), exc)
    return InvalidValueError(f"invalid value: {describe_shape(value)}, expected {EXPECTING}")


# =============================================================================
# SERIALIZE / DESERIALIZE
# =============================================================================


def serialize(value: Decimal) -> str:
    """
    Каноническая строковая форма Decimal.

    Args:
        value: Decimal

    Returns:
        str(value), например "1.234" или "1E+3"

    Raises:
        TypeError: если value не Decimal
    """
    if not isinstance(value, Decimal):
        raise TypeError(f"serialize() expects Decimal, not {type(value).__name__}")
    return str(value)


def deserialize(value: Any) -> Decimal:
    """
    Построение Decimal из внешнего структурированного значения.

    Args:
        value: str, int, float или Decimal

    Returns:
        Эквивалентный Decimal

    Raises:
        InvalidValueError: если форма не поддерживается или значение невалидно

    Examples:
        >>> deserialize(1234) == deserialize(1234.0) == deserialize("1234")
        True
    """
    if isinstance(value, Decimal):
        return value

    # bool является подклассом int: проверяется до int
    if isinstance(value, bool):
        logger.debug("Rejected %s: unsupported shape", describe_shape(value))
        raise InvalidValueError(f"invalid type: {describe_shape(value)}, expected {EXPECTING}")

    if isinstance(value, str):
        try:
            return Decimal.from_str(value)
        except DecimalError as exc:
            raise _invalid_value(value, exc) from exc

    if isinstance(value, float):
        try:
            return Decimal.from_str(repr(value))
        except DecimalError as exc:
            raise _invalid_value(value, exc) from exc

    if isinstance(value, int):
        try:
            if INT_MIN <= value <= INT_MAX:
                return Decimal.from_int(value)
            return Decimal._from_raw(rounded_int_payload(value))
        except DecimalError as exc:
            raise _invalid_value(value, exc) from exc

    logger.debug("Rejected %s: unsupported shape", describe_shape(value))
    raise InvalidValueError(f"invalid type: {describe_shape(value)}, expected {EXPECTING}")


# =============================================================================
# PYDANTIC
# =============================================================================


def decimal_core_schema() -> CoreSchema:
    """
    pydantic-core схема для Decimal.

    Валидация через deserialize, сериализация всегда через serialize
    (включая python-режим model_dump()).
    """
    return core_schema.no_info_plain_validator_function(
        deserialize,
        serialization=core_schema.plain_serializer_function_ser_schema(
            serialize,
            when_used="always",
        ),
    )


def decimal_json_schema(mode: str) -> Dict[str, Any]:
    """
    JSON Schema для Decimal.

    Args:
        mode: "serialization" (только строка) или "validation"
            (строка, число или целое)
    """
    if mode == "serialization":
        return wire_json_schema()
    # Входящая строка разбирается шире канонической формы: без pattern
    return {"anyOf": [{"type": "string"}, {"type": "number"}, {"type": "integer"}]}


@lru_cache(maxsize=None)
def _adapter() -> TypeAdapter:
    return TypeAdapter(Decimal)


def to_json(value: Decimal) -> str:
    """
    Сериализация Decimal в JSON-текст.

    Examples:
        >>> to_json(Decimal("1.234"))
        '"1.234"'
    """
    return _adapter().dump_json(value).decode("utf-8")


def from_json(text: str) -> Decimal:
    """
    Разбор JSON-текста (строка, целое или число) в Decimal.

    Raises:
        pydantic.ValidationError: если значение невалидно
    """
    return _adapter().validate_json(text)
