"""Attribute value coercion."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal

from schema_typegraph.class_model.class_descriptors import FieldError
from schema_typegraph.class_model.field_descriptors import AttributeField, AttributeType

_INTEGER_TEXT = re.compile(r"^[+-]?\d+$")
_DATE_TEXT = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_TEXT = re.compile(
    r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:?\d{2})?$"
)
_BOOLEAN_TEXT = {"true": True, "false": False, "1": True, "0": False}

_INTEGER_BOUNDS = {
    AttributeType.SHORT: (-(2**15), 2**15 - 1),
    AttributeType.INTEGER: (-(2**31), 2**31 - 1),
    AttributeType.LONG: (-(2**63), 2**63 - 1),
}

_EXPECTED_LABELS = {
    AttributeType.STRING: "a string",
    AttributeType.SHORT: "a 16-bit integer",
    AttributeType.INTEGER: "a 32-bit integer",
    AttributeType.LONG: "a 64-bit integer",
    AttributeType.DOUBLE: "a number",
    AttributeType.FLOAT: "a number",
    AttributeType.BOOLEAN: "a boolean",
    AttributeType.DATE: "an ISO-8601 date (YYYY-MM-DD)",
    AttributeType.ANY: "a scalar value",
}


class TypeMismatchError(FieldError):
    """Raised when a value cannot be coerced to the type its field declares."""

    def __init__(
        self, *, class_name: str, field_name: str | None, expected: str, value: object
    ) -> None:
        location = f"{class_name}.{field_name}" if field_name else class_name
        super().__init__(
            f"'{location}' expects {expected}, got {value!r}.",
            class_name=class_name,
            field_name=field_name,
        )
        self.expected = expected
        self.value = value


def coerce_attribute_value(field: AttributeField, value: object, *, class_name: str) -> object:
    """Coerce ``value`` to the value type of ``field``."""
    value_type = field.value_type
    coerced = _coerce_scalar(value_type, value) if _is_scalar(value) else None
    if coerced is None:
        raise TypeMismatchError(
            class_name=class_name,
            field_name=field.name,
            expected=_EXPECTED_LABELS[value_type],
            value=value,
        )
    return coerced


def _coerce_scalar(value_type: AttributeType, value: object) -> object | None:
    return _COERCERS[value_type](value_type, value)


def _is_scalar(value: object) -> bool:
    return isinstance(value, str | bytes | int | float | Decimal | date)


def _coerce_string(_: AttributeType, value: object) -> object | None:
    return value if isinstance(value, str) else None


def _coerce_integer(value_type: AttributeType, value: object) -> object | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _INTEGER_TEXT.fullmatch(value.strip()):
        number = int(value.strip())
    else:
        return None
    low, high = _INTEGER_BOUNDS[value_type]
    return number if low <= number <= high else None


def _coerce_floating(_: AttributeType, value: object) -> object | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float | Decimal):
        try:
            return float(value)
        except (OverflowError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _coerce_boolean(_: AttributeType, value: object) -> object | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        return _BOOLEAN_TEXT.get(value.strip().lower())
    return None


def _coerce_date(_: AttributeType, value: object) -> object | None:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        if _DATE_TEXT.fullmatch(text):
            return date.fromisoformat(text)
        if _DATETIME_TEXT.fullmatch(text):
            return datetime.fromisoformat(text)
    except ValueError:
        return None
    return None


def _coerce_any(_: AttributeType, value: object) -> object | None:
    return value


_COERCERS: Mapping[AttributeType, Callable[[AttributeType, object], object | None]] = {
    AttributeType.STRING: _coerce_string,
    AttributeType.SHORT: _coerce_integer,
    AttributeType.INTEGER: _coerce_integer,
    AttributeType.LONG: _coerce_integer,
    AttributeType.DOUBLE: _coerce_floating,
    AttributeType.FLOAT: _coerce_floating,
    AttributeType.BOOLEAN: _coerce_boolean,
    AttributeType.DATE: _coerce_date,
    AttributeType.ANY: _coerce_any,
}
