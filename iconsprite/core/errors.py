"""Exceptions raised while resolving and rendering icons.

Parse failures are not exceptions: they are reported as
``ParseError`` records on the transform result.
"""


class IconSpriteError(Exception):
    """Base class for iconsprite failures."""


class IconModuleNotFoundError(IconSpriteError, ImportError):
    """A library (or narrow per-icon) module could not be loaded."""

    def __init__(self, specifier: str, reason: str = ""):
        self.specifier = specifier
        message = f"Icon module not found: {specifier}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IconExportNotFoundError(IconSpriteError, LookupError):
    """An export was missing from the narrow path, the library and its default."""

    def __init__(self, library_id: str, export_name: str):
        self.library_id = library_id
        self.export_name = export_name
        super().__init__(f"Icon export not found: {library_id} -> {export_name}")


class IconRenderError(IconSpriteError):
    """A resolved icon value could not be turned into markup."""

    def __init__(self, library_id: str, export_name: str, reason: str):
        self.library_id = library_id
        self.export_name = export_name
        super().__init__(f"Failed to render icon {library_id} -> {export_name}: {reason}")
