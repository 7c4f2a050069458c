"""
Decimal Context: параметры базового примитива decimal128

Точность не выбирается независимо: она наследуется от формата
IEEE 754 decimal128 (34 значащие цифры, Emax = 6144, Emin = -6143).

Все trap'ы отключены: переполнение, деление на ноль и недопустимые
операции возвращают NaN/Infinity как значения, а конечность результата
проверяется явно в safeguards.
"""

from decimal import ROUND_HALF_EVEN, Context
from typing import Final


# =============================================================================
# ПАРАМЕТРЫ DECIMAL128
# =============================================================================

# Количество значащих десятичных цифр
DECIMAL128_PRECISION: Final[int] = 34

# Максимальный и минимальный скорректированный порядок
DECIMAL128_EMAX: Final[int] = 6144
DECIMAL128_EMIN: Final[int] = -6143


# =============================================================================
# ДИАПАЗОН ТОЧНОЙ ЦЕЛОЧИСЛЕННОЙ КОНВЕРСИИ
# =============================================================================

# Покрывает i32, u32, i64 и u64; 2**64 - 1 занимает 20 цифр < 34
INT_MIN: Final[int] = -(2**63)
INT_MAX: Final[int] = 2**64 - 1


# =============================================================================
# КОНТЕКСТ
# =============================================================================

DECIMAL_CTX: Final[Context] = Context(
    prec=DECIMAL128_PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emax=DECIMAL128_EMAX,
    Emin=DECIMAL128_EMIN,
    capitals=1,
    clamp=1,
    flags=[],
    traps=[],
)
