"""Transform data models.

Pure data containers shared by the scanner, rewriter, pruner and emitter.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Set, Tuple

import tree_sitter

from ..ast_parser.models import ParseError

if TYPE_CHECKING:
    from .emitter import SourceMap

# register(library_id, export_name)
RegisterCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class IconReference:
    """A local binding to an icon export inside one module."""

    library_id: str
    export_name: str
    local_name: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.library_id, self.export_name)


@dataclass
class ClausePart:
    """One binding introduced by an import clause."""

    kind: str  # "default" | "namespace" | "named" | "type"
    local_name: str
    text: str  # original source text of the binding
    imported_name: Optional[str] = None  # exported name for named specifiers
    node: Optional[tree_sitter.Node] = None  # binding node inside the clause


@dataclass
class ImportStatement:
    """A tracked import statement and the bindings of its clause."""

    node: tree_sitter.Node
    library_id: str
    clause: Optional[tree_sitter.Node]
    parts: List[ClausePart] = field(default_factory=list)
    named_imports: Optional[tree_sitter.Node] = None


@dataclass
class ImportScan:
    """Icon imports found in one module."""

    references: Dict[str, IconReference] = field(default_factory=dict)
    statements: List[ImportStatement] = field(default_factory=list)


@dataclass
class RewriteOutcome:
    """What the element rewriter changed in one module."""

    consumed: Set[str] = field(default_factory=set)
    rewritten_ranges: List[Tuple[int, int]] = field(default_factory=list)
    registrations: List[Tuple[str, str]] = field(default_factory=list)
    rewritten_count: int = 0

    @property
    def any_rewrite(self) -> bool:
        return self.rewritten_count > 0


@dataclass
class TransformResult:
    """Output of the module transform operation."""

    code: str
    map: Optional["SourceMap"] = None
    any_rewrite: bool = False
    errors: List[ParseError] = field(default_factory=list)
