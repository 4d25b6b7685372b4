"""Deterministic symbol ids shared by rewritten modules and the sprite."""

import re

from .constants import ICON_ID_PREFIX

_SCOPE_RE = re.compile(r"^@")
_SEPARATOR_RUN_RE = re.compile(r"[^a-zA-Z0-9]+")


def normalize_library_id(library_id: str) -> str:
    """Turn an import source into a dashed alias.

    ``@heroicons/react/24/outline`` becomes ``heroicons-react-24-outline``.
    """
    without_scope = _SCOPE_RE.sub("", library_id)
    return _SEPARATOR_RUN_RE.sub("-", without_scope).strip("-")


def compute_icon_id(library_id: str, export_name: str) -> str:
    """Build the symbol id for one ``(library_id, export_name)`` pair."""
    return f"{ICON_ID_PREFIX}-{normalize_library_id(library_id)}-{export_name}"
