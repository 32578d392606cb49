from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from gridnode.core.errors import MalformedConfigError


# JSON value space of a capability field. Anything else is rejected at construction.
CapabilityValue = Union[
    None,
    bool,
    int,
    float,
    str,
    List["CapabilityValue"],
    Dict[str, "CapabilityValue"],
]

BROWSER_NAME_KEY = "browserName"


def _check_value(key: str, value: Any) -> None:
    if value is None or isinstance(value, (bool, int, float, str)):
        return
    if isinstance(value, list):
        for item in value:
            _check_value(key, item)
        return
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise MalformedConfigError(
                    f"Capability field '{key}' has a non-string nested key {k!r}.",
                    details={"field": key},
                )
            _check_value(f"{key}.{k}", v)
        return
    raise MalformedConfigError(
        f"Capability field '{key}' has unsupported value type {type(value).__name__}.",
        hint="Capability values must be JSON scalars, arrays or objects.",
        details={"field": key},
    )


class Capability(dict):
    """
    One declared browser a node can serve.

    A plain str -> CapabilityValue mapping (it is forwarded to the hub as-is).
    Subclasses only add naming; the fields always come from the node config.
    """

    #: WebDriver-style browser name used when the mapping carries none
    wd_style_name: str = ""
    #: short lower-case name for logs and CLI output
    lower_case_name: str = ""

    def __init__(
        self,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__()
        for source in (defaults or {}, fields or {}):
            for key, value in source.items():
                if not isinstance(key, str):
                    raise MalformedConfigError(
                        f"Capability key {key!r} is not a string.",
                    )
                _check_value(key, value)
                self[key] = value

    @property
    def browser_name(self) -> str:
        return str(self.get(BROWSER_NAME_KEY) or self.wd_style_name)

    @property
    def max_instances(self) -> Optional[int]:
        value = self.get("maxInstances")
        return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else None

    def as_dict(self) -> Dict[str, CapabilityValue]:
        return dict(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


class GenericCapability(Capability):
    """Browser not in the catalog; fields are kept verbatim."""

    lower_case_name = "generic"


class FirefoxCapability(Capability):
    wd_style_name = "firefox"
    lower_case_name = "firefox"


class ChromeCapability(Capability):
    wd_style_name = "chrome"
    lower_case_name = "chrome"


class InternetExplorerCapability(Capability):
    wd_style_name = "internet explorer"
    lower_case_name = "internetexplorer"


class MicrosoftEdgeCapability(Capability):
    wd_style_name = "MicrosoftEdge"
    lower_case_name = "microsoftedge"


class SafariCapability(Capability):
    wd_style_name = "safari"
    lower_case_name = "safari"


class OperaCapability(Capability):
    wd_style_name = "opera"
    lower_case_name = "opera"


class PhantomJsCapability(Capability):
    wd_style_name = "phantomjs"
    lower_case_name = "phantomjs"


class HtmlUnitCapability(Capability):
    wd_style_name = "htmlunit"
    lower_case_name = "htmlunit"


class AndroidCapability(Capability):
    wd_style_name = "android"
    lower_case_name = "android"


class IPhoneCapability(Capability):
    wd_style_name = "iPhone"
    lower_case_name = "iphone"


class IPadCapability(Capability):
    wd_style_name = "iPad"
    lower_case_name = "ipad"
