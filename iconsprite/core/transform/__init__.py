"""iconsprite module transform: rewrites icon elements to the sprite component.

Public API:
    transform_module(code, module_id, register, sources) → TransformResult
"""

from .emitter import EditBuffer, SourceMap, emit
from .engine import transform_module
from .models import IconReference, ImportScan, RewriteOutcome, TransformResult
from .scanner import collect_icon_imports, find_existing_icon_import, source_matches

__all__ = [
    "transform_module",
    "collect_icon_imports",
    "find_existing_icon_import",
    "source_matches",
    "emit",
    "EditBuffer",
    "SourceMap",
    "IconReference",
    "ImportScan",
    "RewriteOutcome",
    "TransformResult",
]
