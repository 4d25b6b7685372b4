"""JavaScript module parser using tree-sitter.

The JavaScript grammar accepts JSX, so ``.js``/``.jsx``/``.mjs``/``.cjs``
modules share one parser.
"""

import tree_sitter
import tree_sitter_javascript

from .base import BaseModuleParser

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


class JavaScriptParser(BaseModuleParser):
    """tree-sitter based JavaScript (+JSX) parser."""

    def get_language(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE
