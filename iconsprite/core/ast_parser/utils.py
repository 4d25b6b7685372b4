"""AST Parser utilities.

Language detection and the lazily populated parser registry.
"""

import os
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseModuleParser

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Used when a module id carries no recognizable extension
DEFAULT_LANGUAGE = "tsx"

# Parser registry, lazy-loaded
_parser_registry: Dict[str, "BaseModuleParser"] = {}


def _strip_query(module_id: str) -> str:
    """Drop bundler query suffixes such as ``?v=123``."""
    return module_id.split("?", 1)[0]


def detect_language(module_id: str) -> Optional[str]:
    """Detect the grammar for a module from its extension.

    Args:
        module_id: Module path, possibly with a query suffix

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(_strip_query(module_id))
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def is_transformable(module_id: str) -> bool:
    """Check if a module has an extension the transform understands."""
    return detect_language(module_id) is not None


def get_parser(language: str) -> "BaseModuleParser":
    """Get a parser instance for the given language.

    Raises:
        ValueError: If language is not supported
    """
    if language not in _parser_registry:
        if language == "javascript":
            from .javascript_parser import JavaScriptParser
            _parser_registry["javascript"] = JavaScriptParser()
        elif language == "typescript":
            from .typescript_parser import TypeScriptParser
            _parser_registry["typescript"] = TypeScriptParser()
        elif language == "tsx":
            from .typescript_parser import TsxParser
            _parser_registry["tsx"] = TsxParser()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _parser_registry[language]
