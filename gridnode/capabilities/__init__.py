from .registry import CapabilityRegistry
from .factory import CapabilityFactory

__all__ = ["CapabilityRegistry", "CapabilityFactory"]
