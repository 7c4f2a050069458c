"""
Errors: иерархия исключений pure_decimal

Единый тип ошибки для всех восстанавливаемых сбоев: DecimalError.
Подклассы позволяют различить причину без разбора текста сообщения:

- DecimalParseError: текст не соответствует грамматике числового литерала
- NonFiniteError: текст разобран, но обозначает NaN или Infinity
- NonFiniteResultError: результат арифметики не является конечным
- InvalidValueError: внешнее значение неожиданного типа или невалидно

InvariantViolation НЕ является DecimalError: это сигнал дефекта в коде,
а не ошибки входных данных.
"""


class DecimalError(ValueError):
    """Базовая ошибка для всех восстанавливаемых сбоев Decimal"""


class DecimalParseError(DecimalError):
    """Текст не соответствует грамматике десятичного литерала"""


class NonFiniteError(DecimalError):
    """Значение разобрано, но является NaN или Infinity"""


class NonFiniteResultError(DecimalError):
    """Арифметическая операция дала NaN или Infinity"""


class InvalidValueError(DecimalError):
    """Внешнее структурированное значение нельзя преобразовать в Decimal"""


class InvariantViolation(RuntimeError):
    """
    Нарушение внутреннего инварианта.

    Возникает только если конечные значения оказались несравнимы,
    т.е. проверка конечности была обойдена где-то выше по стеку.
    Не перехватывается вместе с DecimalError.
    """
