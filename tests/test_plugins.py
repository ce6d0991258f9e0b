import pytest

from latapp.plugins import (
    PRC20_APPROVE_SELECTOR,
    PRC20_TRANSFER_SELECTOR,
    PRC721_TRANSFERFROM_SELECTOR,
    REWARD_CONTRACT_ADDRESS,
    STAKING_CONTRACT_ADDRESS,
    ExternalPlugin,
    PluginMessage,
    PluginMismatchError,
    PluginResult,
    check_call_result,
    select_plugin,
)

OTHER_ADDRESS = bytes(range(1, 21))
UNKNOWN_SELECTOR = bytes(4)


def test_staking_contract_selects_staking():
    assert select_plugin(STAKING_CONTRACT_ADDRESS, UNKNOWN_SELECTOR) == "staking"


def test_staking_contract_wins_over_selector():
    assert select_plugin(STAKING_CONTRACT_ADDRESS, PRC20_TRANSFER_SELECTOR) == "staking"


def test_reward_contract_selects_reward():
    assert select_plugin(REWARD_CONTRACT_ADDRESS, UNKNOWN_SELECTOR) == "reward"


@pytest.mark.parametrize(
    "selector, alias",
    [
        (PRC20_TRANSFER_SELECTOR, "prc20"),
        (PRC20_APPROVE_SELECTOR, "prc20"),
        (PRC721_TRANSFERFROM_SELECTOR, "prc721"),
    ],
)
def test_internal_plugin_by_selector(selector, alias):
    assert select_plugin(OTHER_ADDRESS, selector) == alias


def test_unknown_selector_has_no_plugin():
    assert select_plugin(OTHER_ADDRESS, UNKNOWN_SELECTOR) is None


def test_unavailable_plugin_is_skipped():
    assert select_plugin(OTHER_ADDRESS, PRC20_TRANSFER_SELECTOR, None, {"prc20": False}) is None
    assert (
        select_plugin(OTHER_ADDRESS, PRC721_TRANSFERFROM_SELECTOR, None, {"prc20": False})
        == "prc721"
    )


def test_external_plugin_matching():
    plugin = ExternalPlugin("custom", OTHER_ADDRESS, PRC20_TRANSFER_SELECTOR)
    assert select_plugin(OTHER_ADDRESS, PRC20_TRANSFER_SELECTOR, plugin) == "custom"


def test_external_plugin_takes_precedence_over_staking():
    plugin = ExternalPlugin("custom", STAKING_CONTRACT_ADDRESS, UNKNOWN_SELECTOR)
    assert select_plugin(STAKING_CONTRACT_ADDRESS, UNKNOWN_SELECTOR, plugin) == "custom"


def test_external_plugin_address_mismatch():
    plugin = ExternalPlugin("custom", OTHER_ADDRESS, PRC20_TRANSFER_SELECTOR)
    with pytest.raises(PluginMismatchError):
        select_plugin(REWARD_CONTRACT_ADDRESS, PRC20_TRANSFER_SELECTOR, plugin)


def test_external_plugin_selector_mismatch():
    plugin = ExternalPlugin("custom", OTHER_ADDRESS, PRC20_TRANSFER_SELECTOR)
    with pytest.raises(PluginMismatchError):
        select_plugin(OTHER_ADDRESS, PRC20_APPROVE_SELECTOR, plugin)


def test_bad_lengths_rejected():
    with pytest.raises(ValueError):
        select_plugin(OTHER_ADDRESS[:19], PRC20_TRANSFER_SELECTOR)
    with pytest.raises(ValueError):
        select_plugin(OTHER_ADDRESS, b"\x01\x02")
    with pytest.raises(ValueError):
        ExternalPlugin("custom", b"\x00", PRC20_TRANSFER_SELECTOR)


@pytest.mark.parametrize(
    "message, result, expected",
    [
        (PluginMessage.INIT_CONTRACT, PluginResult.OK, PluginResult.OK),
        (PluginMessage.INIT_CONTRACT, PluginResult.ERROR, PluginResult.ERROR),
        (PluginMessage.INIT_CONTRACT, PluginResult.FALLBACK, PluginResult.UNAVAILABLE),
        (PluginMessage.PROVIDE_PARAMETER, PluginResult.FALLBACK, PluginResult.OK),
        (PluginMessage.PROVIDE_PARAMETER, PluginResult.OK_ALIAS, PluginResult.UNAVAILABLE),
        (PluginMessage.FINALIZE, PluginResult.ERROR, PluginResult.ERROR),
        (PluginMessage.FINALIZE, PluginResult.OK, PluginResult.OK),
        (PluginMessage.PROVIDE_TOKEN, PluginResult.FALLBACK, PluginResult.OK),
        (PluginMessage.PROVIDE_TOKEN, PluginResult.SUCCESSFUL, PluginResult.UNAVAILABLE),
        (PluginMessage.QUERY_CONTRACT_ID, PluginResult.SUCCESSFUL, PluginResult.OK),
        (PluginMessage.QUERY_CONTRACT_ID, PluginResult.UNSUCCESSFUL, PluginResult.UNAVAILABLE),
        (PluginMessage.QUERY_CONTRACT_UI, PluginResult.OK, PluginResult.UNAVAILABLE),
        (PluginMessage.QUERY_CONTRACT_UI, PluginResult.OK_ALIAS, PluginResult.OK),
        (PluginMessage.CHECK_PRESENCE, PluginResult.OK, PluginResult.UNAVAILABLE),
    ],
)
def test_check_call_result(message, result, expected):
    assert check_call_result(message, result) is expected


def test_check_call_result_unknown_message():
    assert check_call_result(0x0999, PluginResult.OK) is PluginResult.UNAVAILABLE


def test_check_call_result_accepts_plain_ints():
    assert check_call_result(0x0103, 6) is PluginResult.OK