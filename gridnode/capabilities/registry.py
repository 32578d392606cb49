from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Type

from gridnode.core.errors import CapabilityConfigError
from gridnode.model.capability import (
    AndroidCapability,
    Capability,
    ChromeCapability,
    FirefoxCapability,
    HtmlUnitCapability,
    InternetExplorerCapability,
    IPadCapability,
    IPhoneCapability,
    MicrosoftEdgeCapability,
    OperaCapability,
    PhantomJsCapability,
    SafariCapability,
)


BUILTIN_CAPABILITIES = (
    FirefoxCapability,
    ChromeCapability,
    InternetExplorerCapability,
    MicrosoftEdgeCapability,
    SafariCapability,
    OperaCapability,
    PhantomJsCapability,
    HtmlUnitCapability,
    AndroidCapability,
    IPhoneCapability,
    IPadCapability,
)


class CapabilityRegistry:
    """
    Lookup from a browser catalog's ``driver`` value to the Capability
    subclass that represents it.

    Knows nothing about browser names; the catalog maps names to drivers.
    Driver lookups ignore case.
    """

    def __init__(self, classes: Dict[str, Type[Capability]]):
        self._classes: Dict[str, Type[Capability]] = {}
        for driver, capability_cls in classes.items():
            self._classes[driver.lower()] = capability_cls

    @classmethod
    def from_classes(cls, classes: Iterable[Type[Capability]]) -> "CapabilityRegistry":
        """Register each class under its own lower_case_name."""
        return cls({c.lower_case_name: c for c in classes})

    @classmethod
    def default(cls) -> "CapabilityRegistry":
        return cls.from_classes(BUILTIN_CAPABILITIES)

    def has(self, driver: str) -> bool:
        return driver.lower() in self._classes

    def get_class(self, driver: str) -> Type[Capability]:
        try:
            return self._classes[driver.lower()]
        except KeyError:
            raise CapabilityConfigError(
                f"No capability type for driver '{driver}'.",
                details={"driver": driver, "known": sorted(self._classes)},
            ) from None

    def create(
        self,
        driver: str,
        fields: Mapping[str, Any],
        *,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> Capability:
        # defaults fill keys the node document leaves out
        return self.get_class(driver)(fields, defaults=defaults)
