from .contracts import NodeCategory, NodeTypeContract
from .registry import NodeTypeRegistry, RegistryLoadError

__all__ = [
    "NodeCategory",
    "NodeTypeContract",
    "NodeTypeRegistry",
    "RegistryLoadError",
]
