"""Icon renderer: one icon value to one ``<symbol>`` definition.

Two shapes of icon value are understood:

- Glyph data: an object carrying its own width, height and path data
  (FontAwesome's ``icon: [width, height, ligatures, unicode, pathData]``
  or a ``width``/``height``/``paths`` mapping). Markup is synthesized
  directly, one ``<path>`` per path entry.
- Renderable: a callable returning static ``<svg>`` markup. A plain
  holder of a ``default`` export is unwrapped once first.
"""

import html
import logging
import re
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, List, Optional, Sequence, Tuple

from ..constants import DEFAULT_VIEW_BOX, PRESENTATION_ATTRIBUTES
from ..errors import IconExportNotFoundError, IconRenderError
from ..ids import compute_icon_id
from .resolver import IconResolver, read_export

logger = logging.getLogger(__name__)

_ROOT_OPEN_RE = re.compile(
    r"^\s*(?:<\?xml[^>]*\?>\s*)?(?:<!--.*?-->\s*)*<svg\b([^>]*)>",
    re.IGNORECASE | re.DOTALL,
)
_ROOT_CLOSE_RE = re.compile(r"</svg>\s*$", re.IGNORECASE)
_NESTED_WRAPPER_RE = re.compile(r"</?svg\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""([a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


@dataclass
class SymbolDefinition:
    """A reusable ``<symbol>`` for one registered icon."""

    id: str
    view_box: str
    presentation_attributes: List[Tuple[str, str]] = field(default_factory=list)
    inner_markup: str = ""

    def to_markup(self) -> str:
        attrs = "".join(f' {name}="{value}"' for name, value in self.presentation_attributes)
        return f'<symbol id="{self.id}" viewBox="{self.view_box}"{attrs}>{self.inner_markup}</symbol>'


class IconRenderer:
    """Renders ``(library_id, export_name)`` pairs into symbol definitions.

    In strict mode an icon that cannot be resolved or rendered raises.
    Otherwise a warning is logged and an empty symbol is returned so the
    rest of the sprite can still be built.
    """

    def __init__(self, resolver: Optional[IconResolver] = None, strict: bool = False):
        self.resolver = resolver or IconResolver()
        self.strict = strict

    def render(self, library_id: str, export_name: str) -> SymbolDefinition:
        icon_id = compute_icon_id(library_id, export_name)
        try:
            return self._resolve_and_render(icon_id, library_id, export_name)
        except (IconExportNotFoundError, IconRenderError) as e:
            if self.strict:
                logger.error(f"Aborting sprite assembly: {e}")
                raise
            logger.warning(f"{e}; emitting empty symbol {icon_id}")
            return SymbolDefinition(id=icon_id, view_box=DEFAULT_VIEW_BOX)

    def _resolve_and_render(self, icon_id: str, library_id: str, export_name: str) -> SymbolDefinition:
        """Resolve and render one icon; any unexpected failure becomes IconRenderError."""
        try:
            value = self.resolver.resolve(library_id, export_name)
            return self._to_symbol(icon_id, library_id, export_name, value)
        except (IconExportNotFoundError, IconRenderError):
            raise
        except Exception as e:
            raise IconRenderError(library_id, export_name, f"{type(e).__name__}: {e}") from e

    def _to_symbol(self, icon_id: str, library_id: str, export_name: str, value: Any) -> SymbolDefinition:
        glyph = glyph_data(value)
        if glyph is None:
            value = unwrap_default(value)
            glyph = glyph_data(value)

        if glyph is not None:
            width, height, paths = glyph
            inner = "".join(f'<path d="{html.escape(d)}"></path>' for d in paths)
            return SymbolDefinition(
                id=icon_id,
                view_box=f"0 0 {_number(width)} {_number(height)}",
                presentation_attributes=[("fill", "currentColor")],
                inner_markup=inner,
            )

        if not callable(value):
            raise IconRenderError(library_id, export_name, f"unsupported icon value of type {type(value).__name__}")

        try:
            markup = _as_text(value())
        except Exception as e:
            raise IconRenderError(library_id, export_name, str(e)) from e

        return symbol_from_markup(icon_id, markup, library_id, export_name)


def symbol_from_markup(
    icon_id: str, markup: str, library_id: str = "", export_name: str = ""
) -> SymbolDefinition:
    """Turn rendered ``<svg>`` markup into a symbol definition.

    The root element's ``viewBox`` and allow-listed presentation
    attributes move onto the symbol; the root wrapper and any nested
    ``<svg>`` wrappers are stripped from the content.
    """
    match = _ROOT_OPEN_RE.match(markup)
    if match is None:
        raise IconRenderError(library_id, export_name, "markup has no root <svg> element")

    root_attrs = match.group(1)
    view_box = DEFAULT_VIEW_BOX
    presentation: List[Tuple[str, str]] = []
    for name, double_quoted, single_quoted in _ATTR_RE.findall(root_attrs):
        value = double_quoted or single_quoted
        lowered = name.lower()
        if lowered == "viewbox":
            view_box = value or DEFAULT_VIEW_BOX
        elif lowered in PRESENTATION_ATTRIBUTES:
            presentation.append((lowered, value))

    if root_attrs.rstrip().endswith("/"):
        inner = ""
    else:
        inner = _ROOT_CLOSE_RE.sub("", markup[match.end():])
        inner = _NESTED_WRAPPER_RE.sub("", inner)

    return SymbolDefinition(
        id=icon_id,
        view_box=view_box,
        presentation_attributes=presentation,
        inner_markup=inner.strip(),
    )


def glyph_data(value: Any) -> Optional[Tuple[Number, Number, List[str]]]:
    """Return ``(width, height, paths)`` if the value is glyph data."""
    if value is None or callable(value):
        return None

    icon = read_export(value, "icon")
    if isinstance(icon, Sequence) and not isinstance(icon, str) and len(icon) >= 5:
        width, height, path_data = icon[0], icon[1], icon[4]
        if _is_number(width) and _is_number(height):
            return width, height, _path_list(path_data)

    width, height = read_export(value, "width"), read_export(value, "height")
    if _is_number(width) and _is_number(height):
        for key in ("paths", "path", "d"):
            path_data = read_export(value, key)
            if path_data is not None:
                return width, height, _path_list(path_data)
    return None


def unwrap_default(value: Any) -> Any:
    """Unwrap one level of ``{"default": Icon}`` indirection."""
    if callable(value):
        return value
    inner = read_export(value, "default")
    return inner if inner is not None else value


# =========================================================================
# Helpers
# =========================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _number(value: Number) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _path_list(path_data: Any) -> List[str]:
    if isinstance(path_data, str):
        return [path_data] if path_data else []
    return [str(d) for d in path_data if d]


def _as_text(markup: Any) -> str:
    if isinstance(markup, str):
        return markup
    if isinstance(markup, bytes):
        return markup.decode("utf-8")
    if hasattr(markup, "__html__"):
        return markup.__html__()
    return str(markup)
