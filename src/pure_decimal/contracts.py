"""
Wire Contract: JSON Schema канонического представления Decimal

Исходящая форма Decimal описана формальным контрактом (Draft 2020-12):
строка в научной нотации примитива, например "1.234", "-0", "1E+3",
"0E-7". Контракт проверяется библиотекой jsonschema.
"""

import copy
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# СХЕМА
# =============================================================================

WIRE_PATTERN: Final[str] = r"^-?[0-9]+(\.[0-9]+)?(E[+-][0-9]+)?$"

DECIMAL_WIRE_SCHEMA: Final[Dict[str, Any]] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Decimal",
    "description": "Finite decimal number in canonical scientific string form",
    "type": "string",
    "pattern": WIRE_PATTERN,
}


def wire_json_schema() -> Dict[str, Any]:
    """
    Копия контракта без "$schema" для встраивания в другие схемы
    (например, в JSON Schema моделей pydantic).
    """
    schema = copy.deepcopy(DECIMAL_WIRE_SCHEMA)
    schema.pop("$schema")
    return schema


# =============================================================================
# ВАЛИДАТОР
# =============================================================================


class WireContractValidator:
    """
    Валидатор канонической строковой формы Decimal.

    Инкапсулирует Draft202012Validator; сама схема проверяется
    против метасхемы при создании.
    """

    def __init__(self, schema: Dict[str, Any] = DECIMAL_WIRE_SCHEMA):
        """
        Args:
            schema: JSON Schema контракта (default: DECIMAL_WIRE_SCHEMA)

        Raises:
            ValueError: если схема невалидна
        """
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid wire contract schema: {e.message}") from e

        self.schema = schema
        self.validator = Draft202012Validator(schema)

    def validate(self, data: Any) -> None:
        """
        Валидация значения против контракта.

        Raises:
            jsonschema.ValidationError: если значение не соответствует контракту
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности без исключения"""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации"""
        return self.validator.iter_errors(data)


# Глобальный экземпляр валидатора
_WIRE_VALIDATOR = WireContractValidator()


def validate_wire(data: Any) -> None:
    """
    Валидация сериализованного Decimal.

    Raises:
        jsonschema.ValidationError: если data не каноническая строка Decimal
    """
    _WIRE_VALIDATOR.validate(data)
