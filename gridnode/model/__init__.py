from .node_config import NodeConfig, LegacyNodeConfig, ModernNodeConfig, NodeConfiguration, SchemaVariant
from .capability import Capability, GenericCapability
from .browser import BrowserType
from .catalog import BrowserCatalogLoader

__all__ = ["NodeConfig",
           "LegacyNodeConfig",
           "ModernNodeConfig",
           "NodeConfiguration",
           "SchemaVariant",
           "Capability",
           "GenericCapability",
           "BrowserType",
           "BrowserCatalogLoader"]
