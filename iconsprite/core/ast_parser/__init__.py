"""iconsprite AST parser: tree-sitter based module parsing.

Public API:
    parse_module(source, module_id, language) → ParsedModule
    detect_language(module_id) → str | None
"""

from typing import Optional

from .models import ParsedModule, ParseError
from .utils import DEFAULT_LANGUAGE, detect_language, get_parser, is_transformable

__all__ = [
    "parse_module",
    "detect_language",
    "is_transformable",
    "get_parser",
    "ParsedModule",
    "ParseError",
]


def parse_module(source_text: str, module_id: str, language: Optional[str] = None) -> ParsedModule:
    """Parse module source into a tree.

    Args:
        source_text: Module source as string
        module_id: Module path (used for grammar detection and metadata)
        language: Language identifier. If None, detected from module_id,
            falling back to TSX.

    Returns:
        ParsedModule with the tree and any parse errors
    """
    if language is None:
        language = detect_language(module_id) or DEFAULT_LANGUAGE
    return get_parser(language).parse_source(source_text, module_id)
