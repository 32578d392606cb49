"""Grid node configuration: load, inspect and write node config JSON files."""

from gridnode.io.loader import NodeConfigLoader, is_appium_node
from gridnode.model.node_config import (
    LegacyNodeConfig,
    ModernNodeConfig,
    NodeConfig,
    NodeConfiguration,
    SchemaVariant,
)

__all__ = [
    "NodeConfigLoader",
    "is_appium_node",
    "NodeConfig",
    "LegacyNodeConfig",
    "ModernNodeConfig",
    "NodeConfiguration",
    "SchemaVariant",
]
