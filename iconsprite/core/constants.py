"""Shared constants for iconsprite.

Source patterns, the shared icon component identity and the
presentation attribute allow-list live here so that the transform
and sprite halves agree on one contract.
"""

import re

# =============================================================================
# Shared icon component
# =============================================================================

# Module the shared component is imported from
ICON_SOURCE = "react-icons-sprite"

# Exported name of the shared component
ICON_COMPONENT_NAME = "ReactIconsSpriteIcon"

# Attribute carrying the symbol id on rewritten elements
ICON_ID_ATTRIBUTE = "iconId"

# Prefix of every symbol id
ICON_ID_PREFIX = "ri"

# =============================================================================
# Recognized icon library sources
# =============================================================================

# Matched against the raw import source of every import statement.
# Only packages exporting individual components (or glyph data) are listed.
DEFAULT_ICON_SOURCES = (
    re.compile(r"^react-icons/[\w-]+$"),  # react-icons packs
    re.compile(r"^lucide-react$"),  # Lucide
    re.compile(r"^@radix-ui/react-icons$"),  # Radix Icons
    re.compile(r"^@heroicons/react(?:/.*)?$"),  # Heroicons v1/v2 subpaths
    re.compile(r"^@tabler/icons-react$"),  # Tabler
    re.compile(r"^phosphor-react$"),  # Phosphor (legacy)
    re.compile(r"^@phosphor-icons/react$"),  # Phosphor
    re.compile(r"^react-feather$"),  # Feather
    re.compile(r"^react-bootstrap-icons$"),  # Bootstrap Icons
    re.compile(r"^grommet-icons$"),  # Grommet
    re.compile(r"^remixicon-react$"),  # Remix Icons (legacy)
    re.compile(r"^@remixicon/react$"),  # Remix Icons
    re.compile(r"^devicons-react$"),  # Devicons
    re.compile(r"^typicons-react$"),  # Typicons
    re.compile(r"^boxicons-react$"),  # Boxicons
    re.compile(r"^@fortawesome/(?:free|pro)-[\w-]+-svg-icons$"),  # FontAwesome glyph data
    re.compile(r"^@fortawesome/react-fontawesome$"),  # FontAwesomeIcon proxy
    re.compile(r"^@mui/icons-material(?:/[\w-]+)?$"),  # MUI (+ per-icon default exports)
    re.compile(r"^@iconscout/react-unicons$"),  # Unicons
)

# =============================================================================
# Proxy icon components
# =============================================================================

# (library, export) -> prop carrying the actual icon
PROXY_ICON_COMPONENTS = {
    ("@fortawesome/react-fontawesome", "FontAwesomeIcon"): "icon",
}

# =============================================================================
# Sprite rendering
# =============================================================================

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

DEFAULT_VIEW_BOX = "0 0 24 24"

# Root <svg> attributes copied onto each <symbol>
PRESENTATION_ATTRIBUTES = frozenset({
    "fill",
    "stroke",
    "stroke-width",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
    "stroke-dasharray",
    "stroke-dashoffset",
    "stroke-opacity",
    "fill-rule",
    "fill-opacity",
    "color",
    "opacity",
    "shape-rendering",
    "vector-effect",
})

# Default bound on concurrent icon renders
DEFAULT_MAX_CONCURRENT = 4
