"""iconsprite sprite assembly: renders registered icons into one SVG sprite.

Public API:
    build_sprite(icons, renderer, max_concurrent) → str
    IconRenderer(resolver, strict).render(library_id, export_name) → SymbolDefinition
"""

from .assembler import assemble_document, build_sprite, build_sprite_async
from .renderer import IconRenderer, SymbolDefinition, symbol_from_markup
from .resolver import (
    BaseModuleLoader,
    ChainedModuleLoader,
    IconResolver,
    ImportlibModuleLoader,
    StaticModuleLoader,
    narrow_path,
)

__all__ = [
    "build_sprite",
    "build_sprite_async",
    "assemble_document",
    "IconRenderer",
    "SymbolDefinition",
    "symbol_from_markup",
    "IconResolver",
    "BaseModuleLoader",
    "ImportlibModuleLoader",
    "StaticModuleLoader",
    "ChainedModuleLoader",
    "narrow_path",
]
