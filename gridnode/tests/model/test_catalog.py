from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from gridnode.model.catalog import BrowserCatalogLoader


def _write(p: Path, name: str, text: str) -> None:
    (p / name).write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")


def test_builtin_catalog_loads():
    loader = BrowserCatalogLoader()
    loader.load_all()

    ie = loader.get_browser("Internet Explorer")
    assert ie is not None
    assert ie.driver == "internetexplorer"
    assert ie.defaults["maxInstances"] == 1

    assert loader.get_browser("firefox") is not None
    assert loader.get_browser("MICROSOFTEDGE") is not None
    assert loader.get_browser("netscape") is None


def test_load_all_happy_path(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "browsers.yml",
        """
        browsers:
          firefox:
            label: Firefox
            driver: firefox
            defaults: {maxInstances: 2}
          chrome:
            label: Chrome
            driver: chrome
        """,
    )

    loader = BrowserCatalogLoader(tmp_path)
    loader.load_all()

    assert set(loader.browsers) == {"firefox", "chrome"}
    assert loader.get_browser("firefox").defaults == {"maxInstances": 2}
    assert loader.get_browser("chrome").defaults == {}


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        BrowserCatalogLoader(tmp_path).load_all()


def test_requires_browsers_root(tmp_path: Path) -> None:
    _write(tmp_path, "browsers.yml", "nope: 1\n")
    with pytest.raises(ValueError):
        BrowserCatalogLoader(tmp_path).load_all()


def test_requires_driver(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "browsers.yml",
        """
        browsers:
          firefox:
            label: Firefox
        """,
    )
    with pytest.raises(ValueError):
        BrowserCatalogLoader(tmp_path).load_all()


def test_duplicate_names_differing_in_case_raise(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "browsers.yml",
        """
        browsers:
          Firefox: {label: Firefox, driver: firefox}
          firefox: {label: Firefox, driver: firefox}
        """,
    )
    with pytest.raises(ValueError):
        BrowserCatalogLoader(tmp_path).load_all()
