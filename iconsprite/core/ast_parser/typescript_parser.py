"""TypeScript and TSX module parsers using tree-sitter.

``.ts`` modules use the plain TypeScript grammar so that angle-bracket
type assertions parse; ``.tsx`` modules use the TSX grammar.
"""

import tree_sitter
import tree_sitter_typescript

from .base import BaseModuleParser

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())


class TypeScriptParser(BaseModuleParser):
    """tree-sitter based TypeScript parser (no JSX)."""

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE


class TsxParser(BaseModuleParser):
    """tree-sitter based TSX parser (TypeScript with JSX)."""

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE
