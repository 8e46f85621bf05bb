"""
Setting values

Settings are persisted as text. A value is either structured data stored as
its compact JSON encoding or a plain string stored verbatim; on read, text
that parses as JSON becomes a ``JsonValue`` and anything else a ``StringValue``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel

from gateway_config.core.error_codes import ValidationErrorCode
from gateway_config.core.exceptions import ValidationException


@dataclass(frozen=True)
class StringValue:
    """A setting whose stored text is not JSON."""

    text: str

    def unwrap(self) -> str:
        return self.text


@dataclass(frozen=True)
class JsonValue:
    """A setting whose stored text decodes as JSON."""

    data: Any

    def unwrap(self) -> Any:
        return self.data


SettingValue = Union[StringValue, JsonValue]


def _dumps(data: Any) -> str:
    try:
        # Compact separators match the text written by earlier service versions.
        return json.dumps(data, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ValidationException(
            f"Setting value is not JSON serializable: {exc}",
            ValidationErrorCode.INVALID_FORMAT,
            details={"value_type": type(data).__name__},
            cause=exc,
        ) from exc


def encode_setting_value(value: Any) -> str:
    """
    Encode a Python value into the text stored in the settings table.

    Structured values (dicts, lists, pydantic models, ``JsonValue``) become JSON.
    Strings and ``StringValue`` are stored verbatim. ``None``, booleans and
    numbers use their JSON spelling so they decode back to the same value.

    Raises:
        ValidationException: If the value cannot be represented
    """
    if isinstance(value, StringValue):
        return value.text
    if isinstance(value, JsonValue):
        return _dumps(value.data)
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return _dumps(value.model_dump(mode="json", by_alias=True))
    if value is None or isinstance(value, (bool, int, float, dict, list, tuple)):
        return _dumps(value)
    raise ValidationException(
        f"Unsupported setting value type: {type(value).__name__}",
        ValidationErrorCode.INVALID_FORMAT,
        details={"value_type": type(value).__name__},
    )


def decode_setting_value(raw: str) -> SettingValue:
    """Decode stored setting text, falling back to the raw string."""
    try:
        return JsonValue(json.loads(raw))
    except (TypeError, ValueError):
        return StringValue(raw)


__all__ = [
    "JsonValue",
    "SettingValue",
    "StringValue",
    "decode_setting_value",
    "encode_setting_value",
]
