from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from gridnode.core.errors import CapabilityConfigError, MalformedConfigError
from gridnode.model.browser import BrowserType
from gridnode.model.capability import Capability, GenericCapability
from gridnode.model.catalog import BrowserCatalogLoader
from .registry import CapabilityRegistry


class CapabilityFactory:
    """
    Builds a Capability from a browser name + the raw capability fields.

    Known browsers (catalog) get their registered class and catalog defaults;
    anything else becomes a GenericCapability carrying the fields verbatim.
    """

    def __init__(
        self,
        browsers: Mapping[str, BrowserType],
        registry: CapabilityRegistry,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._browsers = {str(k).lower(): v for k, v in browsers.items()}
        self._registry = registry
        self._log = logger or logging.getLogger(__name__)

    @classmethod
    def default(
        cls,
        metadata_dir: str | Path | None = None,
        *,
        registry: Optional[CapabilityRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "CapabilityFactory":
        """
        Load the browser catalog and pair it with a registry.

        `registry` is injectable to support testing and custom capability classes.
        """
        loader = BrowserCatalogLoader(metadata_dir)
        try:
            loader.load_all()
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            raise CapabilityConfigError(
                "Failed to load browser catalog.",
                hint=str(e),
                details={"metadata_dir": str(loader.metadata_dir)},
            ) from None

        return cls(loader.browsers, registry or CapabilityRegistry.default(), logger=logger)

    def supported_browsers(self) -> List[BrowserType]:
        return list(self._browsers.values())

    def browser_for(self, browser_name: str) -> Optional[BrowserType]:
        return self._browsers.get(browser_name.lower())

    def create(self, browser_name: Any, fields: Mapping[str, Any]) -> Capability:
        if not isinstance(browser_name, str):
            raise MalformedConfigError(
                f"Capability 'browserName' must be a string, got {browser_name!r}.",
                details={"browserName": browser_name},
            )

        meta = self.browser_for(browser_name)
        if meta is None:
            self._log.debug("CAPABILITY_UNKNOWN_BROWSER name=%s", browser_name)
            return GenericCapability(fields)

        try:
            return self._registry.create(meta.driver, fields, defaults=meta.defaults)
        except CapabilityConfigError as e:
            # catalog names a driver the registry does not know
            raise CapabilityConfigError(
                f"Failed to construct capability '{meta.label}' (driver='{meta.driver}').",
                hint=e.message,
                details={"browserName": browser_name, "driver": meta.driver},
            ) from None
