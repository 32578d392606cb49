from __future__ import annotations

from typing import Any, Dict, Optional


class BrowserType:
    """
    Static model of a browser type (catalog entry).

    Contains only metadata, no runtime state.

    Attributes:
        name: WebDriver browser name as it appears in 'browserName' (e.g. "internet explorer").
        label: Human-readable label for display/logging.
        driver: Stable key used by the capability registry (e.g. "firefox", "internetexplorer").
        defaults: Capability fields applied before the node config's own fields.
    """

    def __init__(
        self,
        name: str,
        label: str,
        driver: str,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        self.name: str = str(name)
        self.label: str = str(label)
        self.driver: str = str(driver)
        self.defaults: Dict[str, Any] = dict(defaults or {})

    @property
    def key(self) -> str:
        """Lookup key: browser names are matched case-insensitively."""
        return self.name.lower()

    def __repr__(self) -> str:
        return f"BrowserType(name='{self.name}', label='{self.label}', driver='{self.driver}')"
