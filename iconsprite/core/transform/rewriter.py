"""Element rewriter.

Swaps JSX elements that render a tracked icon for the shared icon
component and tags each with the symbol id of the icon it draws.
"""

import logging
from typing import Dict, List, Optional, Tuple

import tree_sitter

from ..ast_parser.models import ParsedModule
from ..constants import ICON_ID_ATTRIBUTE, PROXY_ICON_COMPONENTS
from ..ids import compute_icon_id
from .emitter import EditBuffer
from .models import IconReference, RewriteOutcome

logger = logging.getLogger(__name__)

_OPENING_TYPES = ("jsx_opening_element", "jsx_self_closing_element")
_CLOSING_TYPE = "jsx_closing_element"


def rewrite_elements(
    parsed: ParsedModule,
    references: Dict[str, IconReference],
    icon_local_name: str,
    edits: EditBuffer,
) -> RewriteOutcome:
    """Rewrite every element whose tag is a tracked icon binding.

    Opening and self-closing tags are renamed to ``icon_local_name`` and
    receive an ``iconId`` attribute unless one is already declared.
    Closing tags are renamed to stay paired. Proxy components (which take
    the icon as a prop) resolve to the icon passed in that prop when it
    is a plain reference to another tracked binding.

    Args:
        parsed: Parsed module
        references: Local name → icon reference map from the scanner
        icon_local_name: Name bound to the shared component in this module
        edits: Edit buffer receiving the rewrites

    Returns:
        RewriteOutcome with consumed names, edited ranges and the icon
        pairs to register
    """
    outcome = RewriteOutcome()

    for node in parsed.walk(*_OPENING_TYPES, _CLOSING_TYPE):
        name = node.child_by_field_name("name")
        if name is None or name.type != "identifier":
            continue
        local = parsed.text(name)
        ref = references.get(local)
        if ref is None or local == icon_local_name:
            continue

        if node.type == _CLOSING_TYPE:
            edits.replace(name.start_byte, name.end_byte, icon_local_name)
            outcome.rewritten_ranges.append((name.start_byte, name.end_byte))
            continue

        effective = _rewrite_opening(parsed, node, name, ref, references, icon_local_name, edits, outcome)
        outcome.consumed.add(local)
        outcome.registrations.append(effective.key)
        outcome.rewritten_count += 1

    if outcome.any_rewrite:
        logger.debug(f"Rewrote {outcome.rewritten_count} icon elements in {parsed.module_id}")
    return outcome


def _rewrite_opening(
    parsed: ParsedModule,
    node: tree_sitter.Node,
    name: tree_sitter.Node,
    ref: IconReference,
    references: Dict[str, IconReference],
    icon_local_name: str,
    edits: EditBuffer,
    outcome: RewriteOutcome,
) -> IconReference:
    """Rename one opening tag and return the icon it resolves to."""
    attributes = _attributes(parsed, node)
    effective = ref

    prop = PROXY_ICON_COMPONENTS.get(ref.key)
    if prop is not None:
        target = _proxied_icon(parsed, attributes.get(prop), references)
        if target is not None:
            attr = attributes.pop(prop)
            effective = references[target]
            outcome.consumed.add(target)
            _drop_attribute(attr, edits, outcome)
        else:
            logger.debug(
                f"{ref.local_name} in {parsed.module_id} has no plain '{prop}' reference, "
                f"keeping the component identity"
            )

    replacement = icon_local_name
    if ICON_ID_ATTRIBUTE not in attributes:
        icon_id = compute_icon_id(effective.library_id, effective.export_name)
        replacement = f'{icon_local_name} {ICON_ID_ATTRIBUTE}="{icon_id}"'

    edits.replace(name.start_byte, name.end_byte, replacement)
    outcome.rewritten_ranges.append((name.start_byte, name.end_byte))
    return effective


def _attributes(parsed: ParsedModule, node: tree_sitter.Node) -> Dict[str, tree_sitter.Node]:
    """Map attribute names to their jsx_attribute nodes (first wins)."""
    attributes: Dict[str, tree_sitter.Node] = {}
    for child in node.named_children:
        if child.type != "jsx_attribute" or not child.named_children:
            continue
        attr_name = parsed.text(child.named_children[0])
        attributes.setdefault(attr_name, child)
    return attributes


def _proxied_icon(
    parsed: ParsedModule,
    attr: Optional[tree_sitter.Node],
    references: Dict[str, IconReference],
) -> Optional[str]:
    """Return the tracked binding passed as ``prop={Binding}``, if any.

    Literals, arrays, member expressions and untracked identifiers all
    return None.
    """
    if attr is None or len(attr.named_children) < 2:
        return None
    value = attr.named_children[1]
    if value.type != "jsx_expression":
        return None
    inner = value.named_children
    if len(inner) != 1 or inner[0].type != "identifier":
        return None
    target = parsed.text(inner[0])
    return target if target in references else None


def _drop_attribute(attr: tree_sitter.Node, edits: EditBuffer, outcome: RewriteOutcome) -> None:
    """Delete an attribute together with the whitespace before it."""
    prev = attr.prev_sibling
    start = prev.end_byte if prev is not None else attr.start_byte
    edits.delete(start, attr.end_byte)
    outcome.rewritten_ranges.append((start, attr.end_byte))


def rewritten_range_contains(ranges: List[Tuple[int, int]], node: tree_sitter.Node) -> bool:
    """True if a node lies entirely inside one of the rewritten ranges."""
    return any(start <= node.start_byte and node.end_byte <= end for start, end in ranges)
