# gridnode/model/catalog.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import yaml

from .browser import BrowserType


CATALOG_FILENAME = "browsers.yml"


def default_metadata_dir() -> Path:
    # <repo>/gridnode/metadata, based on this file's location
    return Path(__file__).resolve().parents[1] / "metadata"


class BrowserCatalogLoader:
    """
    Loads the browser catalog from YAML into BrowserType models.

    After calling load_all(), exposes:
        self.browsers : dict[str, BrowserType]  (lower-cased browser name -> entry)
    """

    def __init__(self, metadata_dir: str | Path | None = None):
        self.metadata_dir = Path(metadata_dir) if metadata_dir else default_metadata_dir()
        self.browsers: Dict[str, BrowserType] = {}

    def _load_yaml(self, filename: str) -> dict:
        full_path = self.metadata_dir / filename
        if not full_path.exists():
            raise FileNotFoundError(f"Missing metadata file: {full_path}")

        with open(full_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def load_all(self) -> None:
        self.browsers.clear()

        data = self._load_yaml(CATALOG_FILENAME)

        browsers = data.get("browsers")
        if not isinstance(browsers, dict):
            raise ValueError(f"{CATALOG_FILENAME} is missing 'browsers' root node")

        for name, binfo in browsers.items():
            if not isinstance(binfo, dict):
                raise ValueError(f"Browser '{name}' entry must be a mapping")

            label = binfo.get("label")
            if not label:
                raise ValueError(f"Browser '{name}' is missing 'label'")

            driver = binfo.get("driver")
            if not driver:
                raise ValueError(f"Browser '{name}' is missing 'driver'")

            defaults = binfo.get("defaults") or {}
            if not isinstance(defaults, dict):
                raise ValueError(f"Browser '{name}' 'defaults' must be a mapping")

            browser = BrowserType(
                name=str(name),
                label=str(label),
                driver=str(driver),
                defaults=defaults,
            )
            if browser.key in self.browsers:
                raise ValueError(f"Browser '{name}' is listed twice (names are case-insensitive)")
            self.browsers[browser.key] = browser

    def get_browser(self, name: str) -> Optional[BrowserType]:
        return self.browsers.get(str(name).lower())
