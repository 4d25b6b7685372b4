"""Module transform operation.

Pipeline per module:
1. Parse (tree-sitter grammar chosen from the module extension)
2. Scan icon imports
3. Rewrite icon elements to the shared component
4. Prune consumed imports / insert the shared component import
5. Emit code and source map, then register the referenced icons
"""

import logging
from typing import Iterable, Pattern

from ..ast_parser import parse_module
from ..constants import DEFAULT_ICON_SOURCES
from .emitter import EditBuffer, emit
from .models import RegisterCallback, TransformResult
from .pruner import prune_imports
from .rewriter import rewrite_elements
from .scanner import collect_icon_imports, find_existing_icon_import

logger = logging.getLogger(__name__)


def transform_module(
    code: str,
    module_id: str,
    register: RegisterCallback,
    sources: Iterable[Pattern] = DEFAULT_ICON_SOURCES,
) -> TransformResult:
    """Rewrite a module's icon elements to the shared sprite component.

    Args:
        code: Module source text
        module_id: Module identifier; names the source in the source map
        register: Called with ``(library_id, export_name)`` for every
            rewritten element, possibly more than once per pair
        sources: Recognized library-source patterns

    Returns:
        TransformResult. ``any_rewrite`` is False (and ``code`` is the
        original text, ``map`` None) when nothing was rewritten or the
        module could not be parsed.
    """
    parsed = parse_module(code, module_id)
    if parsed.has_error:
        for error in parsed.errors:
            logger.warning(f"Skipping {module_id}: {error.message} (line {error.line})")
        return TransformResult(code=code, map=None, any_rewrite=False, errors=list(parsed.errors))

    scan = collect_icon_imports(parsed, sources)
    if not scan.references:
        return TransformResult(code=code)

    has_icon_import, icon_local_name = find_existing_icon_import(parsed)
    edits = EditBuffer(parsed.source)

    outcome = rewrite_elements(parsed, scan.references, icon_local_name, edits)
    if not outcome.any_rewrite:
        return TransformResult(code=code)

    prune_imports(
        parsed,
        scan,
        outcome,
        edits,
        icon_local_name=None if has_icon_import else icon_local_name,
    )
    new_code, source_map = emit(parsed, edits)

    for library_id, export_name in outcome.registrations:
        register(library_id, export_name)

    logger.debug(
        f"Transformed {module_id}: {outcome.rewritten_count} elements, "
        f"{len(set(outcome.registrations))} distinct icons"
    )
    return TransformResult(code=new_code, map=source_map, any_rewrite=True)
