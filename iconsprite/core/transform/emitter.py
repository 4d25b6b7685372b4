"""Code emitter.

Rewrites are recorded as byte-range replacements against the original
source and printed in one forward pass, which also yields a revision 3
source map pointing back at the original module.
"""

import bisect
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Tuple

from ..ast_parser.models import ParsedModule

logger = logging.getLogger(__name__)

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


class TextEdit(NamedTuple):
    """Replace ``source[start:end]`` (bytes) with ``text``."""

    start: int
    end: int
    text: str
    seq: int


class EditBuffer:
    """Ordered collection of non-overlapping edits for one module."""

    def __init__(self, source: bytes):
        self._source = source
        self._edits: List[TextEdit] = []

    def replace(self, start: int, end: int, text: str) -> None:
        if not 0 <= start <= end <= len(self._source):
            raise ValueError(f"Edit range {start}:{end} outside source of length {len(self._source)}")
        self._edits.append(TextEdit(start, end, text, len(self._edits)))

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    def delete(self, start: int, end: int) -> None:
        self.replace(start, end, "")

    def sorted_edits(self) -> List[TextEdit]:
        """Return edits in application order, rejecting overlaps."""
        edits = sorted(self._edits, key=lambda e: (e.start, e.end, e.seq))
        for prev, cur in zip(edits, edits[1:]):
            if cur.start < prev.end:
                raise ValueError(
                    f"Overlapping edits at bytes {prev.start}:{prev.end} and {cur.start}:{cur.end}"
                )
        return edits

    def __len__(self) -> int:
        return len(self._edits)


@dataclass
class SourceMap:
    """Source Map revision 3 for one transformed module."""

    file: str
    sources: List[str]
    sources_content: List[str]
    mappings: str
    names: List[str] = field(default_factory=list)
    version: int = 3

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "file": self.file,
            "sources": list(self.sources),
            "sourcesContent": list(self.sources_content),
            "names": list(self.names),
            "mappings": self.mappings,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def emit(parsed: ParsedModule, edits: EditBuffer) -> Tuple[str, SourceMap]:
    """Apply edits to the module source and build the source map.

    Args:
        parsed: Parsed module the edits were computed against
        edits: Recorded edits

    Returns:
        ``(code, source_map)``
    """
    source = parsed.source
    positions = _OriginalPositions(source)
    builder = _MappingBuilder()
    out: List[str] = []
    cursor = 0

    for edit in edits.sorted_edits():
        if edit.start > cursor:
            _copy(source, cursor, edit.start, positions, builder, out)
        if edit.text:
            line, col = positions.at(edit.start)
            builder.add_text(edit.text, line, col, copied=False)
            out.append(edit.text)
        cursor = edit.end

    if cursor < len(source):
        _copy(source, cursor, len(source), positions, builder, out)

    code = "".join(out)
    logger.debug(f"Emitted {parsed.module_id} with {len(edits)} edits")
    source_map = SourceMap(
        file=parsed.module_id,
        sources=[parsed.module_id],
        sources_content=[parsed.source_text],
        mappings=builder.encode(),
    )
    return code, source_map


# =========================================================================
# Helpers
# =========================================================================


def _copy(source, start, end, positions, builder, out):
    text = source[start:end].decode("utf-8", errors="replace")
    line, col = positions.at(start)
    builder.add_text(text, line, col, copied=True)
    out.append(text)


class _OriginalPositions:
    """Byte offset → (line, column) lookup; columns count characters."""

    def __init__(self, source: bytes):
        self._source = source
        self._line_starts = [0]
        index = source.find(b"\n")
        while index != -1:
            self._line_starts.append(index + 1)
            index = source.find(b"\n", index + 1)

    def at(self, offset: int) -> Tuple[int, int]:
        line = bisect.bisect_right(self._line_starts, offset) - 1
        start = self._line_starts[line]
        col = len(self._source[start:offset].decode("utf-8", errors="replace"))
        return line, col


class _MappingBuilder:
    """Collects (generated, original) segments and encodes them as VLQ."""

    def __init__(self):
        self._line = 0
        self._col = 0
        self._segments: List[Tuple[int, int, int, int]] = []

    def add_text(self, text: str, orig_line: int, orig_col: int, copied: bool) -> None:
        self._mark(orig_line, orig_col)
        lines = text.split("\n")
        for extra in lines[1:]:
            self._line += 1
            self._col = 0
            if copied:
                orig_line, orig_col = orig_line + 1, 0
            if extra:
                self._mark(orig_line, orig_col)
        self._col += len(lines[-1]) if len(lines) > 1 else len(text)

    def _mark(self, orig_line: int, orig_col: int) -> None:
        segment = (self._line, self._col, orig_line, orig_col)
        if self._segments and self._segments[-1][:2] == segment[:2]:
            return
        self._segments.append(segment)

    def encode(self) -> str:
        lines: List[List[Tuple[str, int]]] = [[] for _ in range(self._line + 1)]
        prev_orig_line = prev_orig_col = 0
        for gen_line, gen_col, orig_line, orig_col in self._segments:
            row = lines[gen_line]
            prev_gen_col = row[-1][1] if row else 0
            row.append((
                _vlq(gen_col - prev_gen_col)
                + _vlq(0)
                + _vlq(orig_line - prev_orig_line)
                + _vlq(orig_col - prev_orig_col),
                gen_col,
            ))
            prev_orig_line, prev_orig_col = orig_line, orig_col
        return ";".join(",".join(seg for seg, _ in row) for row in lines)


def _vlq(value: int) -> str:
    """Base64 VLQ encoding of one signed integer."""
    v = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = ""
    while True:
        digit = v & 31
        v >>= 5
        if v:
            digit |= 32
        encoded += _BASE64[digit]
        if not v:
            return encoded
