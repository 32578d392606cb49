from __future__ import annotations

import pytest

from gridnode.core.errors import MalformedConfigError
from gridnode.model.capability import Capability, GenericCapability, InternetExplorerCapability


def test_fields_override_defaults():
    cap = Capability(
        {"browserName": "firefox", "maxInstances": 5},
        defaults={"maxInstances": 1, "seleniumProtocol": "WebDriver"},
    )
    assert cap == {"browserName": "firefox", "maxInstances": 5, "seleniumProtocol": "WebDriver"}
    assert cap.max_instances == 5


def test_browser_name_falls_back_to_wd_style_name():
    assert InternetExplorerCapability({}).browser_name == "internet explorer"
    assert InternetExplorerCapability({"browserName": "IE"}).browser_name == "IE"


def test_nested_json_values_are_accepted():
    cap = GenericCapability(
        {
            "browserName": "custom",
            "platform": None,
            "version": 11.0,
            "args": ["--headless", "--no-sandbox"],
            "options": {"prefs": {"download.dir": "/tmp"}, "debug": True},
        }
    )
    assert cap["options"]["prefs"]["download.dir"] == "/tmp"
    assert cap.max_instances is None


@pytest.mark.parametrize("bad", [object(), {1, 2}, b"bytes", ("tuple",)])
def test_non_json_values_are_rejected(bad):
    with pytest.raises(MalformedConfigError):
        Capability({"browserName": "firefox", "x": bad})


def test_non_string_keys_are_rejected():
    with pytest.raises(MalformedConfigError):
        Capability({1: "x"})  # type: ignore[dict-item]

    with pytest.raises(MalformedConfigError):
        Capability({"opts": {2: "x"}})


def test_as_dict_is_plain_dict_copy():
    cap = Capability({"browserName": "chrome"})
    d = cap.as_dict()
    assert type(d) is dict
    d["browserName"] = "x"
    assert cap["browserName"] == "chrome"
