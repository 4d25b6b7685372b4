"""Import pruner.

Drops specifiers whose elements were rewritten, removes import
statements left without bindings and makes sure the shared icon
component is imported exactly once.
"""

import logging
from typing import Optional, Set

import tree_sitter

from ..ast_parser.models import ParsedModule
from ..constants import ICON_COMPONENT_NAME, ICON_SOURCE
from .emitter import EditBuffer
from .models import ClausePart, ImportScan, ImportStatement, RewriteOutcome
from .rewriter import rewritten_range_contains
from .scanner import import_statements

logger = logging.getLogger(__name__)

# Identifier node types that read a binding
_REFERENCE_TYPES = ("identifier", "shorthand_property_identifier")

# Clause children that introduce bindings
_BINDING_TYPES = ("identifier", "namespace_import", "named_imports")


def prune_imports(
    parsed: ParsedModule,
    scan: ImportScan,
    outcome: RewriteOutcome,
    edits: EditBuffer,
    icon_local_name: Optional[str] = None,
) -> Set[str]:
    """Remove consumed specifiers and insert the shared component import.

    A consumed binding that is still read somewhere else in the module
    (outside rewritten tags, dropped props and import statements) keeps
    its specifier.

    Args:
        parsed: Parsed module
        scan: Scanner output for the module
        outcome: Rewriter output for the module
        edits: Edit buffer receiving the import edits
        icon_local_name: Name to import the shared component as, or None
            when the module already imports it

    Returns:
        Set of local names whose specifiers were removed
    """
    still_used = _residual_references(parsed, outcome)
    removable = outcome.consumed - still_used
    if still_used & outcome.consumed:
        logger.debug(
            f"Keeping imports still referenced in {parsed.module_id}: "
            f"{sorted(still_used & outcome.consumed)}"
        )

    first_import = next(import_statements(parsed), None)
    import_text = _icon_import_text(icon_local_name) if icon_local_name else None
    removed: Set[str] = set()

    for statement in scan.statements:
        kept = [p for p in statement.parts if not _is_removed(p, removable)]
        if len(kept) == len(statement.parts):
            continue
        removed.update(p.local_name for p in statement.parts if _is_removed(p, removable))

        if kept:
            _rewrite_clause(statement, removable, edits)
        elif import_text is not None and first_import is not None and _same_node(statement.node, first_import):
            # The anchor for the new import disappears; take its place.
            edits.replace(statement.node.start_byte, statement.node.end_byte, import_text)
            import_text = None
        else:
            _delete_statement(parsed, statement.node, edits)

    if import_text is not None:
        insert_icon_import(parsed, import_text, first_import, edits)

    return removed


def insert_icon_import(
    parsed: ParsedModule,
    import_text: str,
    first_import: Optional[tree_sitter.Node],
    edits: EditBuffer,
) -> None:
    """Insert the shared component import after the first import, or at the top.

    When only whitespace or a comment follows the first import on its
    line, the new import goes on the next line so the comment stays put.
    """
    source = parsed.source
    if first_import is not None:
        line_start = source.rfind(b"\n", 0, first_import.start_byte) + 1
        indent = source[line_start:first_import.start_byte].decode("utf-8", errors="replace")
        if indent.strip():
            indent = ""
        newline = source.find(b"\n", first_import.end_byte)
        line_end = len(source) if newline == -1 else newline
        at = line_end if _is_line_tail(source[first_import.end_byte:line_end]) else first_import.end_byte
        edits.insert(at, f"\n{indent}{import_text}")
        return

    edits.insert(0, f"{import_text}\n")


# =========================================================================
# Helpers
# =========================================================================


def _icon_import_text(local_name: str) -> str:
    spec = ICON_COMPONENT_NAME if local_name == ICON_COMPONENT_NAME else f"{ICON_COMPONENT_NAME} as {local_name}"
    return f'import {{ {spec} }} from "{ICON_SOURCE}";'


def _is_removed(part: ClausePart, removable: Set[str]) -> bool:
    return part.kind in ("default", "named") and part.local_name in removable


def _is_line_tail(rest: bytes) -> bool:
    """True for nothing but whitespace or a comment after a statement."""
    rest = rest.strip()
    if not rest or rest.startswith(b"//"):
        return True
    return rest.startswith(b"/*") and rest.find(b"*/") == len(rest) - 2


def _same_node(a: tree_sitter.Node, b: tree_sitter.Node) -> bool:
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte


def _residual_references(parsed: ParsedModule, outcome: RewriteOutcome) -> Set[str]:
    """Consumed names still read outside imports and rewritten ranges."""
    if not outcome.consumed:
        return set()

    import_ranges = [(n.start_byte, n.end_byte) for n in import_statements(parsed)]
    skipped = outcome.rewritten_ranges + import_ranges
    used: Set[str] = set()
    for node in parsed.walk(*_REFERENCE_TYPES):
        name = parsed.text(node)
        if name in outcome.consumed and name not in used and not rewritten_range_contains(skipped, node):
            used.add(name)
    return used


def _rewrite_clause(statement: ImportStatement, removable: Set[str], edits: EditBuffer) -> None:
    """Delete removed bindings from an import clause.

    Each removed binding goes together with its separating comma, so the
    surviving bindings keep their layout and comments.
    """
    bindings = [c for c in statement.clause.named_children if c.type in _BINDING_TYPES]
    specs = [p for p in statement.parts if p.kind in ("named", "type")]
    removed = [_is_removed(p, removable) for p in specs]

    default = next((p for p in statement.parts if p.kind == "default"), None)
    if default is not None and _is_removed(default, removable):
        following = next(b for b in bindings if b.start_byte >= default.node.end_byte)
        edits.delete(default.node.start_byte, following.start_byte)

    if specs and all(removed):
        # "Icons, { A }" keeps only "Icons"
        named = statement.named_imports
        previous = [b for b in bindings if b.end_byte <= named.start_byte][-1]
        edits.delete(previous.end_byte, named.end_byte)
        return

    i = 0
    while i < len(specs):
        if not removed[i]:
            i += 1
            continue
        j = i
        while j + 1 < len(specs) and removed[j + 1]:
            j += 1
        first, last = specs[i].node, specs[j].node
        if j + 1 < len(specs):
            # Up to the next surviving specifier
            edits.delete(first.start_byte, specs[j + 1].node.start_byte)
        elif last.next_sibling is not None and last.next_sibling.type == ",":
            # Trailing comma stays with the survivors: "A, // c\n  B,\n}"
            edits.delete(first.prev_sibling.end_byte, last.next_sibling.end_byte)
        else:
            edits.delete(specs[i - 1].node.end_byte, last.end_byte)
        i = j + 1


def _delete_statement(parsed: ParsedModule, node: tree_sitter.Node, edits: EditBuffer) -> None:
    """Delete an import statement, and its line when it stands alone."""
    source = parsed.source
    start, end = node.start_byte, node.end_byte

    line_start = source.rfind(b"\n", 0, start) + 1
    newline = source.find(b"\n", end)
    line_end = len(source) if newline == -1 else newline + 1
    rest = source[end:line_end]

    if not source[line_start:start].strip() and not rest.strip():
        edits.delete(line_start, line_end)
    else:
        edits.delete(start, end)
