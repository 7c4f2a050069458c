"""
Decimal: неизменяемое точное десятичное число

Обёртка над decimal128 (стандартный модуль decimal с DECIMAL_CTX):
- Только конечные значения (NaN/Infinity отклоняются при любом создании)
- Равенство и порядок по значению: Decimal("1.0") == Decimal("1.00")
- hash согласован с равенством, поэтому значения годятся как ключи dict
- Деление и остаток бросают NonFiniteResultError вместо NaN/Infinity

Пример использования в качестве ключей:

    >>> prices = {Decimal("1.0"): "a"}
    >>> prices[Decimal("1.00")]
    'a'
"""

from decimal import Context
from decimal import Decimal as RawDecimal
from typing import Any, Iterable, Optional, Union

from pure_decimal.errors import InvariantViolation
from pure_decimal.safeguards import evaluate, format_payload, int_payload, parse_payload


class Decimal:
    """
    Конечное десятичное число фиксированной точности (decimal128).

    Immutable: атрибуты нельзя изменить, а составные операторы
    (+=, -=, *=) связывают имя с новым экземпляром.

    Создание:
        Decimal("1.25"), Decimal(42), Decimal()
        Decimal.from_str("1.25"), Decimal.from_int(42), Decimal.zero()
    """

    __slots__ = ("_value",)

    _value: RawDecimal

    def __init__(self, value: Union["Decimal", str, int] = 0) -> None:
        if isinstance(value, Decimal):
            raw = value._value
        elif isinstance(value, str):
            raw = parse_payload(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            raw = int_payload(value)
        else:
            raise TypeError(
                f"Decimal() argument must be str, int or Decimal, not {type(value).__name__}"
            )
        object.__setattr__(self, "_value", raw)

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def _from_raw(cls, raw: RawDecimal) -> "Decimal":
        # raw уже прошёл ensure_finite/parse_payload
        obj = object.__new__(cls)
        object.__setattr__(obj, "_value", raw)
        return obj

    @classmethod
    def zero(cls) -> "Decimal":
        """Аддитивная единица (0)"""
        return cls._from_raw(RawDecimal(0))

    @classmethod
    def default(cls) -> "Decimal":
        """Значение по умолчанию: ноль"""
        return cls.zero()

    @classmethod
    def from_str(cls, text: str) -> "Decimal":
        """
        Разбор текстового литерала.

        Args:
            text: Литерал, например "1.25", "-0.1", "3E+2"

        Returns:
            Конечный Decimal

        Raises:
            DecimalParseError: если текст не является числовым литералом
            NonFiniteError: если текст обозначает NaN или Infinity
            TypeError: если text не str
        """
        if not isinstance(text, str):
            raise TypeError(f"from_str() expects str, not {type(text).__name__}")
        return cls._from_raw(parse_payload(text))

    @classmethod
    def from_int(cls, value: int) -> "Decimal":
        """
        Точная конверсия целого i32/u32/i64/u64.

        Raises:
            DecimalError: если value вне 64-битного диапазона
            TypeError: если value не int (bool не считается целым)
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"from_int() expects int, not {type(value).__name__}")
        return cls._from_raw(int_payload(value))

    @staticmethod
    def sum(values: Iterable["Decimal"]) -> "Decimal":
        """Сумма последовательности слева направо, начиная с нуля"""
        return sum_decimals(values)

    # =========================================================================
    # IMMUTABILITY
    # =========================================================================

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Decimal is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Decimal is immutable")

    def __reduce__(self):
        return (Decimal, (str(self),))

    def __copy__(self) -> "Decimal":
        return self

    def __deepcopy__(self, memo: dict) -> "Decimal":
        return self

    # =========================================================================
    # ПРЕДИКАТЫ И КОНВЕРСИИ
    # =========================================================================

    def is_zero(self) -> bool:
        """True если значение равно нулю (включая -0)"""
        return self._value.is_zero()

    def is_negative(self) -> bool:
        """True если значение меньше нуля (-0 не отрицателен)"""
        return self._value.is_signed() and not self._value.is_zero()

    def to_std_decimal(self) -> RawDecimal:
        """Значение как decimal.Decimal (всегда конечное)"""
        return self._value

    def __bool__(self) -> bool:
        return not self._value.is_zero()

    def __str__(self) -> str:
        # Каноническая форма не зависит от контекста вызывающего потока
        return format_payload(self._value)

    def __repr__(self) -> str:
        return f"Decimal('{self}')"

    def __format__(self, format_spec: str) -> str:
        return format_payload(self._value, format_spec)

    # =========================================================================
    # СРАВНЕНИЕ И HASH
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        # hash примитива совпадает для 1.0 и 1.00
        return hash(self._value)

    def partial_compare(self, other: "Decimal") -> Optional[int]:
        """
        Частичное сравнение через примитив.

        Returns:
            -1, 0, 1 или None если значения несравнимы
        """
        result = self._value.compare(_raw(other, "partial_compare"))
        if result.is_nan():
            return None
        return int(result)

    def compare(self, other: "Decimal") -> int:
        """
        Полное сравнение.

        Returns:
            -1 если self < other, 0 если равны, 1 если self > other

        Raises:
            InvariantViolation: если конечные значения оказались несравнимы
        """
        result = self.partial_compare(other)
        if result is None:
            raise InvariantViolation(
                f"Ordering not possible for {self!r} and {other!r}. Possible bug"
            )
        return result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.compare(other) >= 0

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "Decimal") -> "Decimal":
        return _apply(Context.add, "add", self, other)

    def sub(self, other: "Decimal") -> "Decimal":
        return _apply(Context.subtract, "sub", self, other)

    def mul(self, other: "Decimal") -> "Decimal":
        return _apply(Context.multiply, "mul", self, other)

    def div(self, other: "Decimal") -> "Decimal":
        """
        Деление.

        Raises:
            NonFiniteResultError: при делении на ноль (x / 0, 0 / 0)
        """
        return _apply(Context.divide, "div", self, other)

    def rem(self, other: "Decimal") -> "Decimal":
        """
        Остаток от деления с усечением (знак делимого).

        Raises:
            NonFiniteResultError: если делитель равен нулю или частное
                не помещается в 34 цифры
        """
        return _apply(Context.remainder, "rem", self, other)

    def neg(self) -> "Decimal":
        return _apply(Context.minus, "neg", self)

    def abs(self) -> "Decimal":
        return _apply(Context.abs, "abs", self)

    def max(self, other: "Decimal") -> "Decimal":
        """Большее из self и other"""
        return _apply(Context.max, "max", self, other)

    def min(self, other: "Decimal") -> "Decimal":
        """Меньшее из self и other"""
        return _apply(Context.min, "min", self, other)

    def mul_add(self, a: "Decimal", b: "Decimal") -> "Decimal":
        """
        Fused multiply-add: self * a + b.

        Умножение выполняется точно, округление одно, финальное.
        """
        return _apply(Context.fma, "mul_add", self, a, b)

    def pow(self, exponent: "Decimal") -> "Decimal":
        """
        Возведение в степень (Context.power).

        Raises:
            NonFiniteResultError: для 0 ** 0, 0 ** -n, отрицательного
                основания с дробной степенью и при переполнении
        """
        return _apply(Context.power, "pow", self, exponent)

    def __add__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.div(other)

    def __mod__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.rem(other)

    def __pow__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.pow(other)

    def __neg__(self) -> "Decimal":
        return self.neg()

    def __pos__(self) -> "Decimal":
        return self

    def __abs__(self) -> "Decimal":
        return self.abs()

    # =========================================================================
    # PYDANTIC
    # =========================================================================

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        from pure_decimal.serde import decimal_core_schema

        return decimal_core_schema()

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema: Any, handler: Any):
        from pure_decimal.serde import decimal_json_schema

        return decimal_json_schema(handler.mode)


# =============================================================================
# HELPERS
# =============================================================================


def _raw(operand: Any, operation: str) -> RawDecimal:
    if not isinstance(operand, Decimal):
        raise TypeError(
            f"{operation}() operand must be Decimal, not {type(operand).__name__}"
        )
    return operand._value


def _apply(operation, name: str, *operands: Decimal) -> Decimal:
    raws = [_raw(operand, name) for operand in operands]
    return Decimal._from_raw(evaluate(operation, *raws, name=name))


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """
    Сумма последовательности Decimal слева направо, начиная с нуля.

    Examples:
        >>> sum_decimals([Decimal(1), Decimal(2), Decimal(3), Decimal(4)])
        Decimal('10')
    """
    total = Decimal.zero()
    for value in values:
        total = total.add(value)
    return total
