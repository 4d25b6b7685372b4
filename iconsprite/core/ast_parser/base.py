"""Base interface for language-specific module parsers.

Defines the Strategy pattern base class that all grammar-backed parsers
implement. Shared parsing logic lives here.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

import tree_sitter

from .models import ParsedModule, ParseError

logger = logging.getLogger(__name__)


class BaseModuleParser(ABC):
    """Abstract base for tree-sitter module parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'tsx', 'javascript')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    def parse_source(self, source_text: str, module_id: str) -> ParsedModule:
        """Parse module source into a ParsedModule.

        Args:
            source_text: Module source as string
            module_id: Module identifier (for metadata and error reports)

        Returns:
            ParsedModule; ``errors`` is non-empty when the grammar
            reported syntax errors.
        """
        errors: List[ParseError] = []
        source_bytes = source_text.encode("utf-8")

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        if tree.root_node.has_error:
            line = self._first_error_line(tree.root_node)
            logger.debug(f"{self.get_language()} grammar rejected {module_id} near line {line}")
            errors.append(
                ParseError(
                    file_path=module_id,
                    line=line,
                    message="Tree-sitter reported parse errors in module",
                    severity="error",
                )
            )

        return ParsedModule(
            module_id=module_id,
            language=self.get_language(),
            source=source_bytes,
            tree=tree,
            errors=errors,
        )

    @staticmethod
    def _first_error_line(root: tree_sitter.Node) -> int:
        """1-based line of the first ERROR or MISSING node, 0 if unknown."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point.row + 1
            if node.has_error:
                stack.extend(reversed(node.children))
        return 0
