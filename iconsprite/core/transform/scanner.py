"""Import scanner.

Maps locally bound identifiers to the icon exports they import,
restricted to import statements whose source matches a recognized
icon library pattern.
"""

import logging
from typing import Iterable, Iterator, Optional, Pattern, Tuple

import tree_sitter

from ..ast_parser.models import ParsedModule
from ..constants import DEFAULT_ICON_SOURCES, ICON_COMPONENT_NAME, ICON_SOURCE
from .models import ClausePart, IconReference, ImportScan, ImportStatement

logger = logging.getLogger(__name__)


def source_matches(source: str, sources: Iterable[Pattern] = DEFAULT_ICON_SOURCES) -> bool:
    """Check an import source against the recognized library patterns."""
    return any(pattern.search(source) for pattern in sources)


def collect_icon_imports(
    parsed: ParsedModule,
    sources: Iterable[Pattern] = DEFAULT_ICON_SOURCES,
) -> ImportScan:
    """Collect icon bindings from the module's top-level imports.

    Named specifiers register ``(library, imported_name)`` and default
    specifiers register ``(library, "default")``. Type-only statements
    and type-only specifiers are skipped; namespace imports are never
    tracked.

    Args:
        parsed: Parsed module
        sources: Recognized library-source patterns

    Returns:
        ImportScan with the identifier map and tracked statements
    """
    sources = tuple(sources)
    scan = ImportScan()

    for node in import_statements(parsed):
        library_id = import_source(parsed, node)
        if library_id is None or not source_matches(library_id, sources):
            continue
        if _is_type_only(node):
            continue

        statement = read_import_statement(parsed, node, library_id)
        for part in statement.parts:
            if part.kind == "default":
                export_name = "default"
            elif part.kind == "named" and part.imported_name:
                export_name = part.imported_name
            else:
                continue
            scan.references[part.local_name] = IconReference(
                library_id=library_id,
                export_name=export_name,
                local_name=part.local_name,
            )
        scan.statements.append(statement)

    if scan.references:
        logger.debug(f"Found {len(scan.references)} icon bindings in {parsed.module_id}")
    return scan


def find_existing_icon_import(parsed: ParsedModule) -> Tuple[bool, str]:
    """Find the local name already bound to the shared icon component.

    Returns:
        ``(has_import, local_name)``; local_name defaults to the
        component's exported name.
    """
    for node in import_statements(parsed):
        if _is_type_only(node) or import_source(parsed, node) != ICON_SOURCE:
            continue
        statement = read_import_statement(parsed, node, ICON_SOURCE)
        for part in statement.parts:
            if part.kind == "named" and part.imported_name == ICON_COMPONENT_NAME:
                return True, part.local_name
    return False, ICON_COMPONENT_NAME


def import_statements(parsed: ParsedModule) -> Iterator[tree_sitter.Node]:
    """Yield the module's top-level import statements in order."""
    for child in parsed.root.children:
        if child.type == "import_statement":
            yield child


def import_source(parsed: ParsedModule, node: tree_sitter.Node) -> Optional[str]:
    """Return the unquoted source of an import statement."""
    source_node = node.child_by_field_name("source")
    if source_node is None:
        return None
    for child in source_node.named_children:
        if child.type == "string_fragment":
            return parsed.text(child)
    return parsed.text(source_node)[1:-1]


def read_import_statement(
    parsed: ParsedModule, node: tree_sitter.Node, library_id: str
) -> ImportStatement:
    """Split an import statement's clause into its bindings."""
    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    statement = ImportStatement(node=node, library_id=library_id, clause=clause)
    if clause is None:
        return statement

    for child in clause.named_children:
        if child.type == "identifier":
            text = parsed.text(child)
            statement.parts.append(ClausePart(kind="default", local_name=text, text=text, node=child))

        elif child.type == "namespace_import":
            local = next((c for c in child.named_children if c.type == "identifier"), None)
            statement.parts.append(
                ClausePart(
                    kind="namespace",
                    local_name=parsed.text(local) if local is not None else "",
                    text=parsed.text(child),
                    node=child,
                )
            )

        elif child.type == "named_imports":
            statement.named_imports = child
            for spec in child.named_children:
                if spec.type != "import_specifier":
                    continue
                part = _read_specifier(parsed, spec)
                if part is not None:
                    statement.parts.append(part)

    return statement


# =========================================================================
# Helpers
# =========================================================================


def _read_specifier(parsed: ParsedModule, spec: tree_sitter.Node) -> Optional[ClausePart]:
    name_node = spec.child_by_field_name("name")
    alias_node = spec.child_by_field_name("alias")
    local_node = alias_node if alias_node is not None else name_node
    if local_node is None:
        return None

    # String export names ('import { "a-b" as ab }') cannot be rendered
    # by name, so they are kept but never tracked.
    imported = None
    if name_node is not None and name_node.type == "identifier":
        imported = parsed.text(name_node)

    return ClausePart(
        kind="type" if _is_type_only(spec) else "named",
        local_name=parsed.text(local_node),
        text=parsed.text(spec),
        imported_name=imported,
        node=spec,
    )


def _is_type_only(node: tree_sitter.Node) -> bool:
    """True for ``import type ...`` statements and ``type X`` specifiers."""
    return any(child.type in ("type", "typeof") for child in node.children)
