"""Thread-safe, insertion-ordered registry of icons referenced in one build.

Usage:
    collector = IconCollector()
    collector.clear()                      # at the start of every build
    collector.add("react-icons/bi", "BiAlarm")
    icons = collector.to_list()            # first-seen order, deduplicated
"""

import logging
import threading
from typing import Dict, Iterator, List, NamedTuple

logger = logging.getLogger(__name__)


class IconPair(NamedTuple):
    """A registered icon: the import source and the export name."""

    library_id: str
    export_name: str


class IconCollector:
    """Deduplicating set of ``(library_id, export_name)`` pairs.

    Entries are keyed by ``library_id:export_name`` and kept in the order
    they were first added. Safe to mutate from several module transforms
    running on different threads.
    """

    def __init__(self):
        self._icons: Dict[str, IconPair] = {}
        self._lock = threading.Lock()

    def add(self, library_id: str, export_name: str) -> None:
        """Register an icon; repeated registrations are ignored."""
        key = f"{library_id}:{export_name}"
        with self._lock:
            if key not in self._icons:
                self._icons[key] = IconPair(library_id, export_name)
                logger.debug(f"Registered icon {key}")

    def to_list(self) -> List[IconPair]:
        """Return the unique pairs in first-seen order."""
        with self._lock:
            return list(self._icons.values())

    def clear(self) -> None:
        """Drop every registration. Call once at the start of each build."""
        with self._lock:
            self._icons.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._icons)

    def __contains__(self, pair) -> bool:
        library_id, export_name = pair
        with self._lock:
            return f"{library_id}:{export_name}" in self._icons

    def __iter__(self) -> Iterator[IconPair]:
        return iter(self.to_list())
