"""iconsprite: serve every icon of a bundle from one SVG sprite.

Public API:
    transform_module(code, module_id, register, sources) → TransformResult
    build_sprite(icons, renderer, max_concurrent) → str
    compute_icon_id(library_id, export_name) → str
    IconCollector, SpriteBuild, SpriteSettings, load_settings
"""

from .core.build import SpriteBuild
from .core.collector import IconCollector, IconPair
from .core.config import SpriteSettings, load_settings
from .core.constants import (
    DEFAULT_ICON_SOURCES,
    ICON_COMPONENT_NAME,
    ICON_ID_ATTRIBUTE,
    ICON_SOURCE,
)
from .core.errors import (
    IconExportNotFoundError,
    IconModuleNotFoundError,
    IconRenderError,
    IconSpriteError,
)
from .core.ids import compute_icon_id, normalize_library_id
from .core.sprite import (
    ChainedModuleLoader,
    IconRenderer,
    IconResolver,
    ImportlibModuleLoader,
    StaticModuleLoader,
    SymbolDefinition,
    build_sprite,
    build_sprite_async,
)
from .core.transform import TransformResult, transform_module

__all__ = [
    "transform_module",
    "build_sprite",
    "build_sprite_async",
    "compute_icon_id",
    "normalize_library_id",
    "IconCollector",
    "IconPair",
    "SpriteBuild",
    "SpriteSettings",
    "load_settings",
    "IconRenderer",
    "IconResolver",
    "ImportlibModuleLoader",
    "StaticModuleLoader",
    "ChainedModuleLoader",
    "SymbolDefinition",
    "TransformResult",
    "IconSpriteError",
    "IconModuleNotFoundError",
    "IconExportNotFoundError",
    "IconRenderError",
    "DEFAULT_ICON_SOURCES",
    "ICON_SOURCE",
    "ICON_COMPONENT_NAME",
    "ICON_ID_ATTRIBUTE",
]
