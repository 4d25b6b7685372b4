"""AST Parser data models.

Pure data containers wrapping a tree-sitter tree and its source bytes.
"""

from dataclasses import dataclass, field
from typing import Iterator, List

import tree_sitter


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class ParsedModule:
    """A parsed source module.

    Keeps the tree together with the exact bytes it was parsed from so
    that byte offsets reported by nodes can be sliced back into text.
    """

    module_id: str
    language: str
    source: bytes
    tree: tree_sitter.Tree
    errors: List[ParseError] = field(default_factory=list)

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    @property
    def has_error(self) -> bool:
        return self.tree.root_node.has_error

    @property
    def source_text(self) -> str:
        return self.source.decode("utf-8", errors="replace")

    def text(self, node: tree_sitter.Node) -> str:
        """Return the source text covered by a node."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def walk(self, *types: str) -> Iterator[tree_sitter.Node]:
        """Yield nodes in document order, optionally filtered by type."""
        stack = [self.tree.root_node]
        while stack:
            node = stack.pop()
            if not types or node.type in types:
                yield node
            stack.extend(reversed(node.children))
