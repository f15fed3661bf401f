from . import core_blocks as _core_blocks  # noqa: F401 - ensure core block types are registered
from .base import BlockType, BlockTypeRegistry, allowed_types, registry, text_blocks

__all__ = ["BlockType", "BlockTypeRegistry", "allowed_types", "registry", "text_blocks"]
