"""
pure_decimal: неизменяемый точный десятичный тип для финансовой арифметики.

Decimal оборачивает decimal128 и гарантирует конечность значения,
согласованные порядок и hash, а также каноническую строковую сериализацию.
"""

from pure_decimal.context import (
    DECIMAL128_EMAX,
    DECIMAL128_EMIN,
    DECIMAL128_PRECISION,
    DECIMAL_CTX,
    INT_MAX,
    INT_MIN,
)
from pure_decimal.contracts import (
    DECIMAL_WIRE_SCHEMA,
    WireContractValidator,
    validate_wire,
)
from pure_decimal.errors import (
    DecimalError,
    DecimalParseError,
    InvalidValueError,
    InvariantViolation,
    NonFiniteError,
    NonFiniteResultError,
)
from pure_decimal.serde import deserialize, from_json, serialize, to_json
from pure_decimal.value import Decimal, sum_decimals

__all__ = [
    # Value type
    "Decimal",
    "sum_decimals",
    # Errors
    "DecimalError",
    "DecimalParseError",
    "NonFiniteError",
    "NonFiniteResultError",
    "InvalidValueError",
    "InvariantViolation",
    # Serialization
    "serialize",
    "deserialize",
    "to_json",
    "from_json",
    # Wire contract
    "DECIMAL_WIRE_SCHEMA",
    "WireContractValidator",
    "validate_wire",
    # Context
    "DECIMAL_CTX",
    "DECIMAL128_PRECISION",
    "DECIMAL128_EMAX",
    "DECIMAL128_EMIN",
    "INT_MIN",
    "INT_MAX",
]
