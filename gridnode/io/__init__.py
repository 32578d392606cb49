from .loader import NodeConfigLoader, is_appium_node

__all__ = ["NodeConfigLoader", "is_appium_node"]
