import pytest

from gateway_config.core.exceptions import ValidationException
from gateway_config.models import (
    CategoryQuotas,
    JsonValue,
    StringValue,
    decode_setting_value,
    encode_setting_value,
)


def test_structured_values_are_stored_as_compact_json() -> None:
    assert encode_setting_value({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'
    assert encode_setting_value([1, "x"]) == '[1,"x"]'
    assert encode_setting_value(JsonValue({"k": None})) == '{"k":null}'


def test_pydantic_records_are_stored_by_alias() -> None:
    quotas = CategoryQuotas(pro_quota=5, flash_quota=10)
    assert encode_setting_value(quotas) == '{"proQuota":5,"flashQuota":10}'


def test_scalars_use_json_spelling() -> None:
    assert encode_setting_value(True) == "true"
    assert encode_setting_value(None) == "null"
    assert encode_setting_value(42) == "42"
    assert encode_setting_value(2.5) == "2.5"


def test_strings_are_stored_verbatim() -> None:
    assert encode_setting_value("plain text") == "plain text"
    assert encode_setting_value(StringValue('{"not":"parsed"}')) == '{"not":"parsed"}'


@pytest.mark.parametrize("value", [object(), float("nan"), {"when": {1, 2}}])
def test_unrepresentable_values_are_rejected(value) -> None:
    with pytest.raises(ValidationException):
        encode_setting_value(value)


def test_decode_prefers_json_and_falls_back_to_text() -> None:
    assert decode_setting_value('{"a":1}') == JsonValue({"a": 1})
    assert decode_setting_value("17") == JsonValue(17)
    assert decode_setting_value("hello world") == StringValue("hello world")
    assert decode_setting_value("hello world").unwrap() == "hello world"
