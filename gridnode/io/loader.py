# gridnode/io/loader.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from gridnode.capabilities.factory import CapabilityFactory
from gridnode.core.errors import (
    ConfigNotFoundError,
    ConfigReadError,
    ConfigWriteError,
    GridNodeError,
    MalformedConfigError,
)
from gridnode.model.capability import BROWSER_NAME_KEY, Capability
from gridnode.model.node_config import (
    LegacyNodeConfig,
    ModernNodeConfig,
    NodeConfig,
    NodeConfiguration,
    SchemaVariant,
)


MODERN_REQUIRED_KEYS = ("hubPort", "hubHost", "port")


class NodeConfigLoader:
    """
    Reads/writes grid node config JSON files.

    Layout is picked by the caller (`modern` flag):
      - legacy: {"configuration": {...}, "capabilities": [...]}
      - modern: {"hubPort": ..., "hubHost": ..., "port": ..., "capabilities": [...]}

    Failures raise GridNodeError subclasses; exiting the process is up to the
    caller (see gridnode.app.startup).
    """

    def __init__(
        self,
        factory: Optional[CapabilityFactory] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._log = logger or logging.getLogger(__name__)
        self._factory = factory or CapabilityFactory.default(logger=self._log)

    # ---------------------------------------------------------------------
    # Load
    # ---------------------------------------------------------------------
    def load(self, file_path: str | Path, modern: bool) -> NodeConfig:
        variant = SchemaVariant.from_flag(modern)
        try:
            doc = self._read_document(Path(file_path))
            capabilities = self._parse_capabilities(doc)
            if variant is SchemaVariant.MODERN:
                node: NodeConfig = ModernNodeConfig(self._parse_modern(doc), capabilities)
            else:
                node = LegacyNodeConfig(self._parse_legacy(doc), capabilities)
        except GridNodeError as e:
            self._log.error(
                "NODE_CONFIG_LOAD_FAILED path=%s variant=%s code=%s msg=%s",
                file_path, variant.value, e.code, e.message,
            )
            raise

        node._set_source_file(file_path)
        self._log.info(
            "NODE_CONFIG_LOADED path=%s variant=%s capabilities=%d",
            file_path, variant.value, len(node.capabilities),
        )
        return node

    def _read_document(self, path: Path) -> Dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ConfigNotFoundError(
                f"Node config file not found: {path}",
                hint=e.strerror,
                details={"path": str(path)},
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigReadError(
                f"Could not read node config {path}: {e}",
                details={"path": str(path)},
            ) from e

        try:
            doc = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedConfigError(
                f"Node config {path} is not valid JSON: {e}",
                hint=f"line {e.lineno}, column {e.colno}",
                details={"path": str(path)},
            ) from e

        if not isinstance(doc, dict):
            raise MalformedConfigError(
                f"Node config {path} must be a JSON object, got {type(doc).__name__}.",
                details={"path": str(path)},
            )
        return doc

    def _parse_modern(self, doc: Dict[str, Any]) -> NodeConfiguration:
        missing = [k for k in MODERN_REQUIRED_KEYS if k not in doc]
        if missing:
            raise MalformedConfigError(
                f"Modern node config is missing top-level keys: {', '.join(missing)}",
                hint="Legacy configs keep these under 'configuration'; load with modern=False.",
                details={"missing": missing},
            )
        # other flat keys override the defaults when present
        return NodeConfiguration.from_json(doc)

    def _parse_legacy(self, doc: Dict[str, Any]) -> NodeConfiguration:
        configuration = doc.get("configuration")
        if not isinstance(configuration, dict):
            raise MalformedConfigError(
                "Legacy node config requires a 'configuration' object.",
                hint="Modern configs keep fields at the top level; load with modern=True.",
            )
        return NodeConfiguration.from_json(configuration)

    def _parse_capabilities(self, doc: Dict[str, Any]) -> List[Capability]:
        entries = doc.get("capabilities")
        if not isinstance(entries, list):
            raise MalformedConfigError("Node config requires a 'capabilities' array.")

        capabilities: List[Capability] = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise MalformedConfigError(
                    f"Capability #{idx} must be a JSON object, got {type(entry).__name__}.",
                    details={"index": idx},
                )
            if BROWSER_NAME_KEY not in entry:
                self._log.debug("CAPABILITY_SKIPPED index=%d reason=no_browser_name", idx)
                continue
            capabilities.append(self._factory.create(entry[BROWSER_NAME_KEY], entry))
        return capabilities

    # ---------------------------------------------------------------------
    # Write
    # ---------------------------------------------------------------------
    def write(self, config: NodeConfig, file_path: str | Path) -> None:
        path = Path(file_path)
        try:
            text = json.dumps(config.as_dict(), indent=2)
            path.write_text(text + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            self._log.error("NODE_CONFIG_WRITE_FAILED path=%s err=%s", path, e)
            raise ConfigWriteError(
                f"Could not write node config for '{path}': {e}",
                details={"path": str(path)},
            ) from e

        self._log.info("NODE_CONFIG_WRITTEN path=%s variant=%s", path, config.variant.value)


def is_appium_node(config: NodeConfig) -> bool:
    """True when the config was loaded from a file whose name starts with 'appium'."""
    return config.is_appium_node()
