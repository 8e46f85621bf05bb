import pytest

from gateway_config.core.error_codes import ResourceErrorCode, ValidationErrorCode
from gateway_config.core.exceptions import NotFoundException, ValidationException
from gateway_config.models import ModelQuotaConfig
from gateway_config.stores import ModelConfigStore


@pytest.fixture
def store(rows, sync_trigger):
    return ModelConfigStore(rows, sync_trigger)


async def test_set_then_get_contains_single_normalized_entry(store, sync) -> None:
    await store.set_model_config("gemini-1.5-pro", "Pro", None, "5")

    configs = await store.get_models_config()

    assert list(configs) == ["gemini-1.5-pro"]
    assert configs["gemini-1.5-pro"] == ModelQuotaConfig(
        category="Pro", daily_quota=None, individual_quota=5
    )
    assert sync.calls == 1


async def test_unset_quotas_are_absent_not_zero(store) -> None:
    await store.set_model_config("gemini-flash", "Flash")

    payload = (await store.get_models_config())["gemini-flash"].to_payload()

    assert payload == {"category": "Flash"}


async def test_set_is_a_full_replacement(store) -> None:
    await store.set_model_config("m", "Custom", 100, 3)
    await store.set_model_config("m", "Pro", None, None)

    configs = await store.get_models_config()

    assert configs["m"] == ModelQuotaConfig(category="Pro")


async def test_non_governing_quota_is_truncated(store) -> None:
    stored = await store.set_model_config("m", "Pro", 10.7, 2)

    assert stored.daily_quota == 10
    assert (await store.get_models_config())["m"].daily_quota == 10


@pytest.mark.parametrize(
    "category, daily, individual",
    [
        ("Custom", 1.5, None),
        ("Custom", -1, None),
        ("Pro", None, 2.5),
        ("Flash", None, -3),
        # negative quotas are rejected whatever the category governs
        ("Pro", -1, None),
        ("Custom", None, -1),
        ("Custom", "many", None),
        ("Pro", True, None),
        ("Flash", float("inf"), None),
        ("Enterprise", None, None),
    ],
)
async def test_invalid_input_is_rejected_before_storage(
    store, sync, category, daily, individual
) -> None:
    with pytest.raises(ValidationException):
        await store.set_model_config("m", category, daily, individual)

    assert await store.get_models_config() == {}
    assert sync.calls == 0


async def test_empty_model_id_is_rejected(store) -> None:
    with pytest.raises(ValidationException):
        await store.set_model_config("  ", "Pro")


async def test_delete_removes_entry_and_syncs(store, sync) -> None:
    await store.set_model_config("m", "Custom", 10, None, skip_sync=True)

    await store.delete_model_config("m")

    assert await store.get_models_config() == {}
    assert sync.calls == 1


async def test_delete_unknown_model_raises_not_found(store, sync) -> None:
    with pytest.raises(NotFoundException) as exc_info:
        await store.delete_model_config("nonexistent")

    assert exc_info.value.error_code == ResourceErrorCode.NOT_FOUND
    assert exc_info.value.details["model_id"] == "nonexistent"
    assert exc_info.value.http_status == 404
    assert sync.calls == 0


@pytest.mark.parametrize("quota", [2**53 + 1, str(2**53 + 1), 2**63 - 1])
async def test_large_integer_quotas_are_stored_exactly(store, quota) -> None:
    returned = await store.set_model_config("m", "Custom", quota, quota)

    expected = ModelQuotaConfig(
        category="Custom", daily_quota=int(quota), individual_quota=int(quota)
    )
    assert returned == expected
    assert (await store.get_models_config())["m"] == expected


@pytest.mark.parametrize(
    "category,daily,individual",
    [
        ("Custom", 2**63, None),
        ("Pro", None, 2**63),
        ("Flash", 10**30, None),
        ("Pro", 1e30, None),
    ],
)
async def test_quota_beyond_integer_column_is_out_of_range(
    store, sync, category, daily, individual
) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await store.set_model_config("m", category, daily, individual)

    assert exc_info.value.error_code == ValidationErrorCode.VALUE_OUT_OF_RANGE
    assert await store.get_models_config() == {}
    assert sync.calls == 0
