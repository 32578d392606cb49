from __future__ import annotations

import pytest

from gridnode.core.errors import MalformedConfigError
from gridnode.model.capability import ChromeCapability, FirefoxCapability
from gridnode.model.node_config import (
    SETUP_TEARDOWN_PROXY,
    LegacyNodeConfig,
    ModernNodeConfig,
    NodeConfig,
    NodeConfiguration,
    SchemaVariant,
    coerce_int,
)


def test_configuration_defaults():
    c = NodeConfiguration()
    assert c.proxy == SETUP_TEARDOWN_PROXY
    assert c.proxy.endswith("SetupTeardownProxy")
    assert c.max_session == 3
    assert c.register is True
    assert c.unregister_if_still_down_after == 10000
    assert c.register_cycle == 5000
    assert c.node_status_check_timeout == 10000
    assert c.down_polling_limit == 0
    assert c.hub_host is None
    assert c.appium_start_command is None


def test_from_json_missing_keys_fall_back_to_defaults():
    c = NodeConfiguration.from_json({"port": 5555, "hubHost": "10.0.0.1"})
    assert c.port == 5555
    assert c.hub_host == "10.0.0.1"
    assert c.max_session == 3
    assert c.register is True


def test_from_json_ignores_down_polling_limit_and_unknown_keys():
    c = NodeConfiguration.from_json({"downPollingLimit": 7, "browserTimeout": 120})
    assert c.down_polling_limit == 0
    assert c == NodeConfiguration()


def test_from_json_coerces_numeric_strings_and_bool_strings():
    c = NodeConfiguration.from_json({"hubPort": "4444", "port": " 5555 ", "register": "false"})
    assert c.hub_port == 4444
    assert c.port == 5555
    assert c.register is False


def test_from_json_register_cycle_may_be_null():
    c = NodeConfiguration.from_json({"registerCycle": None})
    assert c.register_cycle is None


def test_from_json_non_nullable_null_raises():
    with pytest.raises(MalformedConfigError):
        NodeConfiguration.from_json({"maxSession": None})


@pytest.mark.parametrize("bad", [True, "abc", 1.5, [1], {"a": 1}])
def test_coerce_int_rejects_non_integers(bad):
    with pytest.raises(MalformedConfigError):
        coerce_int(bad, "port")


def test_coerce_int_accepts_integral_float():
    assert coerce_int(4444.0, "hubPort") == 4444


def test_to_json_skips_none_and_emits_down_polling_limit():
    out = NodeConfiguration(port=5555).to_json()
    assert out["port"] == 5555
    assert out["downPollingLimit"] == 0
    assert "hubHost" not in out
    assert "appiumStartCommand" not in out


def test_create_picks_variant_from_flag():
    assert isinstance(NodeConfig.create(True), ModernNodeConfig)
    assert isinstance(NodeConfig.create(False), LegacyNodeConfig)
    assert SchemaVariant.from_flag(True) is SchemaVariant.MODERN


def test_legacy_accessors_read_and_write_nested_configuration():
    node = LegacyNodeConfig()
    node.port = "5556"
    node.hub_host = "hub.local"
    node.max_session = 5

    assert node.configuration.port == 5556
    assert node.configuration.hub_host == "hub.local"
    assert node.max_session == 5

    doc = node.as_dict()
    assert doc["configuration"]["port"] == 5556
    assert "port" not in doc
    assert "loadedFromFile" not in doc


def test_modern_as_dict_is_flat():
    node = ModernNodeConfig(NodeConfiguration(hub_port=4444, hub_host="hub", port=5555))
    doc = node.as_dict()
    assert "configuration" not in doc
    assert doc["hubPort"] == 4444
    assert doc["hubHost"] == "hub"
    assert doc["port"] == 5555
    assert doc["capabilities"] == []


def test_modern_as_dict_always_carries_hub_host():
    doc = ModernNodeConfig().as_dict()
    assert doc["hubHost"] is None
    assert doc["hubPort"] == 0
    assert doc["port"] == 0

    # legacy layout leaves an unset hubHost out
    assert "hubHost" not in LegacyNodeConfig().as_dict()["configuration"]


def test_setter_rejects_bad_type():
    node = ModernNodeConfig()
    with pytest.raises(MalformedConfigError):
        node.hub_port = "not-a-port"


def test_down_polling_limit_is_read_only():
    node = ModernNodeConfig()
    assert node.down_polling_limit == 0
    with pytest.raises(AttributeError):
        node.down_polling_limit = 3  # type: ignore[misc]


def test_source_file_empty_until_set_and_read_only():
    node = LegacyNodeConfig()
    assert node.source_file == ""
    with pytest.raises(AttributeError):
        node.source_file = "x.json"  # type: ignore[misc]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("appium_node_1.json", True),
        ("configs/appium-node.json", True),
        ("node_appium.json", False),
        ("Appium_node.json", False),
        ("appium/node_5555.json", False),
    ],
)
def test_is_appium_node_checks_file_name_only(path, expected):
    node = ModernNodeConfig()
    node._set_source_file(path)
    assert node.is_appium_node() is expected


def test_equality_ignores_source_file_but_not_variant():
    a = ModernNodeConfig(NodeConfiguration(port=1), [FirefoxCapability({"browserName": "firefox"})])
    b = ModernNodeConfig(NodeConfiguration(port=1), [FirefoxCapability({"browserName": "firefox"})])
    b._set_source_file("other.json")
    assert a == b

    c = LegacyNodeConfig(NodeConfiguration(port=1), [FirefoxCapability({"browserName": "firefox"})])
    assert a != c


def test_convert_to_copies_fields_and_capabilities():
    legacy = LegacyNodeConfig(
        NodeConfiguration(hub_port=4444, hub_host="hub", port=5555, max_session=7),
        [ChromeCapability({"browserName": "chrome", "maxInstances": 2})],
    )
    legacy._set_source_file("node.json")

    modern = legacy.convert_to(SchemaVariant.MODERN)
    assert isinstance(modern, ModernNodeConfig)
    assert modern.max_session == 7
    assert modern.hub_host == "hub"
    assert modern.source_file == ""
    assert isinstance(modern.capabilities[0], ChromeCapability)
    assert modern.capabilities[0] == {"browserName": "chrome", "maxInstances": 2}

    # independent copies
    modern.port = 6000
    modern.capabilities[0]["maxInstances"] = 9
    assert legacy.port == 5555
    assert legacy.capabilities[0]["maxInstances"] == 2

    assert modern.convert_to(SchemaVariant.LEGACY).hub_port == 4444
