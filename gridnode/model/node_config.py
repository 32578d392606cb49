from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from gridnode.core.errors import MalformedConfigError
from .capability import Capability


SETUP_TEARDOWN_PROXY = "com.groupon.seleniumgridextras.grid.proxies.SetupTeardownProxy"
APPIUM_FILE_PREFIX = "appium"


class SchemaVariant(str, Enum):
    """Node config layout. Chosen by the caller; documents do not self-describe."""
    LEGACY = "legacy"   # fields nested under "configuration"
    MODERN = "modern"   # fields at the top level

    @classmethod
    def from_flag(cls, modern: bool) -> "SchemaVariant":
        return cls.MODERN if modern else cls.LEGACY


# ---------------------------------------------------------------------------
# Field coercion (JSON value -> python type)
# ---------------------------------------------------------------------------

def coerce_int(value: Any, key: str) -> int:
    """
    Accept JSON numbers and numeric strings ("5555").

    Some JSON writers emit ports as strings, so both forms must load the same.
    """
    if isinstance(value, bool):
        raise MalformedConfigError(
            f"Field '{key}' must be an integer, got a boolean.",
            details={"field": key, "value": value},
        )
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise MalformedConfigError(
        f"Field '{key}' must be an integer or a numeric string, got {value!r}.",
        details={"field": key, "value": value},
    )


def coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise MalformedConfigError(
        f"Field '{key}' must be a boolean, got {value!r}.",
        details={"field": key, "value": value},
    )


def coerce_str(value: Any, key: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise MalformedConfigError(
        f"Field '{key}' must be a string, got {value!r}.",
        details={"field": key, "value": value},
    )


_COERCERS = {"int": coerce_int, "bool": coerce_bool, "str": coerce_str}

# (attribute, JSON key, type, nullable)
FIELD_TABLE: Tuple[Tuple[str, str, str, bool], ...] = (
    ("proxy", "proxy", "str", False),
    ("max_session", "maxSession", "int", False),
    ("port", "port", "int", False),
    ("register", "register", "bool", False),
    ("unregister_if_still_down_after", "unregisterIfStillDownAfter", "int", False),
    ("hub_port", "hubPort", "int", False),
    ("hub_host", "hubHost", "str", True),
    ("host", "host", "str", True),
    ("url", "url", "str", True),
    ("register_cycle", "registerCycle", "int", True),
    ("node_status_check_timeout", "nodeStatusCheckTimeout", "int", False),
    ("appium_start_command", "appiumStartCommand", "str", True),
)

_FIELD_BY_ATTR = {attr: (key, kind, nullable) for attr, key, kind, nullable in FIELD_TABLE}


def coerce_field(attr: str, value: Any) -> Any:
    key, kind, nullable = _FIELD_BY_ATTR[attr]
    if value is None:
        if nullable:
            return None
        raise MalformedConfigError(
            f"Field '{key}' must not be null.",
            details={"field": key},
        )
    return _COERCERS[kind](value, key)


# ---------------------------------------------------------------------------
# Shared field set
# ---------------------------------------------------------------------------

@dataclass
class NodeConfiguration:
    """
    Registration + health-check settings of one grid node.

    Used as the nested "configuration" object by the legacy layout and as the
    flat top-level field set by the modern layout.
    """
    proxy: str = SETUP_TEARDOWN_PROXY
    max_session: int = 3
    port: int = 0
    register: bool = True
    unregister_if_still_down_after: int = 10000   # ms
    hub_port: int = 0
    hub_host: Optional[str] = None
    host: Optional[str] = None
    url: Optional[str] = None
    register_cycle: Optional[int] = 5000          # ms
    node_status_check_timeout: int = 10000        # ms
    appium_start_command: Optional[str] = None

    # Only test the node status once: the hub proxy gives up when
    # failed polling tries >= downPollingLimit.
    @property
    def down_polling_limit(self) -> int:
        return 0

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "NodeConfiguration":
        """
        Build from a JSON object; absent keys keep their defaults.

        downPollingLimit and unknown keys are ignored.
        """
        kwargs: Dict[str, Any] = {}
        for attr, key, _kind, _nullable in FIELD_TABLE:
            if key in data:
                kwargs[attr] = coerce_field(attr, data[key])
        return cls(**kwargs)

    def to_json(self) -> Dict[str, Any]:
        """
        JSON object with the document's camelCase keys.

        Unset optional fields are left out; a cleared field with a non-null
        default (registerCycle) is written as null so it reloads as null.
        """
        out: Dict[str, Any] = {}
        for attr, key, _kind, _nullable in FIELD_TABLE:
            value = getattr(self, attr)
            if value is None and _DEFAULTS[attr] is None:
                continue
            out[key] = value
        out["downPollingLimit"] = self.down_polling_limit
        return out


_DEFAULTS: Dict[str, Any] = {attr: getattr(NodeConfiguration, attr) for attr, *_ in FIELD_TABLE}


def _field(attr: str) -> property:
    def fget(self: "NodeConfig") -> Any:
        return getattr(self._fields, attr)

    def fset(self: "NodeConfig", value: Any) -> None:
        setattr(self._fields, attr, coerce_field(attr, value))

    return property(fget, fset)


# ---------------------------------------------------------------------------
# Node config (legacy | modern)
# ---------------------------------------------------------------------------

class NodeConfig(ABC):
    """
    A grid node config: capabilities + provenance + one of two field layouts.

    Concrete types:
      - LegacyNodeConfig: fields in a nested NodeConfiguration ("configuration")
      - ModernNodeConfig: fields held flat on the record

    Typed accessors below read/write whichever layout the instance has.
    """

    variant: SchemaVariant

    def __init__(self, capabilities: Optional[List[Capability]] = None):
        self.capabilities: List[Capability] = list(capabilities or [])
        self._source_file: str = ""

    @staticmethod
    def create(modern: bool) -> "NodeConfig":
        """Empty config with defaults for the given layout."""
        return ModernNodeConfig() if modern else LegacyNodeConfig()

    @property
    @abstractmethod
    def _fields(self) -> NodeConfiguration: ...

    @abstractmethod
    def as_dict(self) -> Dict[str, Any]:
        """JSON document shape for this layout."""

    # --- provenance ---
    @property
    def source_file(self) -> str:
        return self._source_file

    def _set_source_file(self, path: str | Path) -> None:
        # loader-only hook
        self._source_file = str(path)

    def is_appium_node(self) -> bool:
        """Naming convention: node configs loaded from 'appium*' files run Appium."""
        return Path(self._source_file).name.startswith(APPIUM_FILE_PREFIX)

    # --- typed accessors ---
    proxy = _field("proxy")
    max_session = _field("max_session")
    port = _field("port")
    register = _field("register")
    unregister_if_still_down_after = _field("unregister_if_still_down_after")
    hub_port = _field("hub_port")
    hub_host = _field("hub_host")
    host = _field("host")
    url = _field("url")
    register_cycle = _field("register_cycle")
    node_status_check_timeout = _field("node_status_check_timeout")
    appium_start_command = _field("appium_start_command")

    @property
    def down_polling_limit(self) -> int:
        return self._fields.down_polling_limit

    def settings(self) -> NodeConfiguration:
        """Copy of the field values, independent of layout."""
        return replace(self._fields)

    def convert_to(self, variant: SchemaVariant) -> "NodeConfig":
        """
        Same field values + capabilities in the given layout (always a new object).

        source_file is not carried over; the copy has not been loaded from anywhere.
        """
        cls = ModernNodeConfig if variant is SchemaVariant.MODERN else LegacyNodeConfig
        return cls(self.settings(), self._copy_capabilities())

    # --- helpers ---
    def _capabilities_json(self) -> List[Dict[str, Any]]:
        return [c.as_dict() for c in self.capabilities]

    def _copy_capabilities(self) -> List[Capability]:
        return [copy.deepcopy(c) for c in self.capabilities]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeConfig):
            return NotImplemented
        return (
            self.variant is other.variant
            and self._fields == other._fields
            and [dict(c) for c in self.capabilities] == [dict(c) for c in other.capabilities]
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(hub={self.hub_host}:{self.hub_port}, port={self.port}, "
            f"capabilities={len(self.capabilities)}, source_file='{self._source_file}')"
        )


class LegacyNodeConfig(NodeConfig):
    """Fields nested under "configuration"."""

    variant = SchemaVariant.LEGACY

    def __init__(
        self,
        configuration: Optional[NodeConfiguration] = None,
        capabilities: Optional[List[Capability]] = None,
    ):
        super().__init__(capabilities)
        self.configuration: NodeConfiguration = configuration or NodeConfiguration()

    @property
    def _fields(self) -> NodeConfiguration:
        return self.configuration

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "capabilities": self._capabilities_json(),
            "configuration": self.configuration.to_json(),
        }
        if self._source_file:
            out["loadedFromFile"] = self._source_file
        return out


class ModernNodeConfig(NodeConfig):
    """Fields at the top level of the document."""

    variant = SchemaVariant.MODERN

    def __init__(
        self,
        settings: Optional[NodeConfiguration] = None,
        capabilities: Optional[List[Capability]] = None,
    ):
        super().__init__(capabilities)
        self._flat: NodeConfiguration = settings or NodeConfiguration()

    @property
    def _fields(self) -> NodeConfiguration:
        return self._flat

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = self._flat.to_json()
        # hubHost/hubPort/port are required top-level keys; an unset hubHost is written as null
        out.setdefault("hubHost", None)
        out["capabilities"] = self._capabilities_json()
        if self._source_file:
            out["loadedFromFile"] = self._source_file
        return out
