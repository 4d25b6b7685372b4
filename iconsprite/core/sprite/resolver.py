"""Icon module resolution.

A loader turns an import specifier (``react-icons/bi``,
``@mui/icons-material/Alarm``) into a module-like object whose exports
are the icons. The resolver tries the narrow per-icon module of a
library first and falls back to the whole library.

Loaders:
    ImportlibModuleLoader: Python's own dynamic import machinery
    StaticModuleLoader: fixed table, for offline and test use
    ChainedModuleLoader: first loader that succeeds wins
"""

import importlib
import keyword
import logging
import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

from ..errors import IconExportNotFoundError, IconModuleNotFoundError

logger = logging.getLogger(__name__)

_JS_SUFFIX_RE = re.compile(r"\.(?:js|mjs|cjs|jsx)$")
_NON_IDENTIFIER_RE = re.compile(r"\W")


def to_dashed(export_name: str) -> str:
    """``AlarmClock`` → ``alarm-clock``; ``XCircle`` → ``x-circle``."""
    dashed = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", export_name)
    dashed = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1-\2", dashed)
    return dashed.lower()


def _lucide_file(export_name: str) -> str:
    name = export_name
    if name.startswith("Lucide") and len(name) > len("Lucide"):
        name = name[len("Lucide"):]
    if name.endswith("Icon") and len(name) > len("Icon"):
        name = name[: -len("Icon")]
    return to_dashed(name)


# Library-id pattern → narrow module path builder
NARROW_PATH_CONVENTIONS: Tuple[Tuple[Pattern, Callable[[str, str], str]], ...] = (
    (re.compile(r"^@mui/icons-material$"), lambda lib, name: f"{lib}/{name}"),
    (re.compile(r"^@fortawesome/(?:free|pro)-[\w-]+-svg-icons$"), lambda lib, name: f"{lib}/{name}"),
    (re.compile(r"^@heroicons/react/.+$"), lambda lib, name: f"{lib}/{name}"),
    (re.compile(r"^lucide-react$"), lambda lib, name: f"{lib}/dist/esm/icons/{_lucide_file(name)}"),
    (re.compile(r"^@tabler/icons-react$"), lambda lib, name: f"{lib}/dist/esm/icons/{name}.mjs"),
    (re.compile(r"^react-bootstrap-icons$"), lambda lib, name: f"{lib}/dist/icons/{to_dashed(name)}"),
)


def narrow_path(library_id: str, export_name: str) -> Optional[str]:
    """Module path that loads only one icon, if the library has one."""
    if export_name == "default":
        return None
    for pattern, build in NARROW_PATH_CONVENTIONS:
        if pattern.search(library_id):
            return build(library_id, export_name)
    return None


def read_export(module: Any, name: str) -> Any:
    """Read an export from a mapping or an attribute-style module."""
    if isinstance(module, Mapping):
        return module.get(name)
    return getattr(module, name, None)


class BaseModuleLoader(ABC):
    """Loads the module behind an import specifier."""

    @abstractmethod
    def load(self, specifier: str) -> Any:
        """Return a module-like object.

        Raises:
            IconModuleNotFoundError: If the specifier cannot be loaded
        """
        ...


class ImportlibModuleLoader(BaseModuleLoader):
    """Loads icon packs published as Python modules.

    Specifiers are translated into dotted module names: the scope
    marker is dropped, path separators become dots, JS file suffixes are
    stripped and every other non-identifier character becomes ``_``.
    ``@mui/icons-material/Alarm`` under package ``icon_packs`` loads
    ``icon_packs.mui.icons_material.Alarm``.
    """

    def __init__(self, package: Optional[str] = None):
        self.package = package

    def module_name(self, specifier: str) -> str:
        path = _JS_SUFFIX_RE.sub("", specifier).lstrip("@")
        segments = []
        for segment in path.split("/"):
            if not segment:
                continue
            name = _NON_IDENTIFIER_RE.sub("_", segment)
            if name[0].isdigit():
                name = f"_{name}"
            if keyword.iskeyword(name):
                name = f"{name}_"
            segments.append(name)
        if self.package:
            segments.insert(0, self.package)
        return ".".join(segments)

    def load(self, specifier: str) -> Any:
        name = self.module_name(specifier)
        try:
            return importlib.import_module(name)
        except ImportError as e:
            raise IconModuleNotFoundError(specifier, f"import of {name} failed: {e}") from e
        except Exception as e:
            # Module code that blows up at import time
            raise IconModuleNotFoundError(specifier, f"import of {name} raised {type(e).__name__}: {e}") from e


class StaticModuleLoader(BaseModuleLoader):
    """Serves modules from a fixed ``{specifier: exports}`` table."""

    def __init__(self, table: Optional[Mapping] = None):
        self._table = dict(table or {})

    def register(self, specifier: str, exports: Any) -> None:
        self._table[specifier] = exports

    def load(self, specifier: str) -> Any:
        try:
            return self._table[specifier]
        except KeyError:
            raise IconModuleNotFoundError(specifier, "not in static table") from None


class ChainedModuleLoader(BaseModuleLoader):
    """Tries each loader in turn."""

    def __init__(self, *loaders: BaseModuleLoader):
        if not loaders:
            raise ValueError("ChainedModuleLoader needs at least one loader")
        self._loaders = loaders

    def load(self, specifier: str) -> Any:
        reasons: List[str] = []
        for loader in self._loaders:
            try:
                return loader.load(specifier)
            except IconModuleNotFoundError as e:
                reasons.append(str(e))
        raise IconModuleNotFoundError(specifier, "; ".join(reasons))


class IconResolver:
    """Resolves ``(library_id, export_name)`` to the exported icon value.

    Loaded modules and load failures are memoized, so concurrent renders
    from the same library load it once and a missing module is tried
    only once per resolver.
    """

    def __init__(self, loader: Optional[BaseModuleLoader] = None):
        self._loader = loader or ImportlibModuleLoader()
        self._modules: Dict[str, Any] = {}
        self._failures: Dict[str, IconModuleNotFoundError] = {}
        self._lock = threading.Lock()

    def load(self, specifier: str) -> Any:
        """Load a module through the loader, memoizing the outcome."""
        with self._lock:
            if specifier in self._modules:
                return self._modules[specifier]
            if specifier in self._failures:
                raise self._failures[specifier]
            try:
                module = self._loader.load(specifier)
            except IconModuleNotFoundError as e:
                self._failures[specifier] = e
                logger.debug(f"Module miss: {e}")
                raise
            self._modules[specifier] = module
            logger.debug(f"Module loaded: {specifier}")
            return module

    def resolve(self, library_id: str, export_name: str) -> Any:
        """Return the icon value, trying narrow path, library, then default.

        Raises:
            IconExportNotFoundError: If no source yields a value
        """
        narrow = narrow_path(library_id, export_name)
        if narrow is not None:
            try:
                value = self._extract(self.load(narrow), export_name)
            except IconModuleNotFoundError:
                value = None
            if value is not None:
                return value
            logger.debug(f"Narrow path {narrow} failed, loading {library_id}")

        try:
            module = self.load(library_id)
        except IconModuleNotFoundError as e:
            raise IconExportNotFoundError(library_id, export_name) from e

        value = self._extract(module, export_name)
        if value is None:
            raise IconExportNotFoundError(library_id, export_name)
        return value

    def clear(self) -> None:
        """Forget memoized modules and failures."""
        with self._lock:
            self._modules.clear()
            self._failures.clear()

    @staticmethod
    def _extract(module: Any, export_name: str) -> Any:
        value = read_export(module, export_name)
        if value is None and export_name != "default":
            value = read_export(module, "default")
        return value
