# SPDX-License-Identifier: MIT
"""
Source Map v3 consumer.

Parses the ``mappings`` field (comma/semicolon separated base64 VLQ
segments) and answers generated-to-original position lookups. Lines are
1-based and columns 0-based on both sides.
"""
from __future__ import annotations

import bisect
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from jsleak.core.exceptions import SourceMapError

_BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES = {ch: i for i, ch in enumerate(_BASE64_ALPHABET)}

_VLQ_SHIFT = 5
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT
_VLQ_MASK = _VLQ_CONTINUATION - 1


@dataclass(frozen=True)
class OriginalPosition:
    source: Optional[str]
    line: Optional[int]
    column: Optional[int]
    name: Optional[str] = None


NO_POSITION = OriginalPosition(source=None, line=None, column=None)


def decode_vlq(segment: str) -> List[int]:
    """Decode one mapping segment into its list of signed integers."""
    values = []
    shift = 0
    accumulator = 0
    for ch in segment:
        digit = _BASE64_VALUES.get(ch)
        if digit is None:
            raise SourceMapError(f"Invalid base64 VLQ character {ch!r}")
        accumulator += (digit & _VLQ_MASK) << shift
        if digit & _VLQ_CONTINUATION:
            shift += _VLQ_SHIFT
            continue
        negative = accumulator & 1
        value = accumulator >> 1
        values.append(-value if negative else value)
        accumulator = 0
        shift = 0
    if shift:
        raise SourceMapError("Truncated base64 VLQ segment")
    return values


# (generated_column, source_index, original_line, original_column, name_index)
_Segment = Tuple[int, Optional[int], Optional[int], Optional[int], Optional[int]]


class SourceMapConsumer:
    """Lookups over a parsed Source Map v3 document."""

    def __init__(self, raw: Union[str, bytes, Dict[str, Any]]):
        data = self._load(raw)
        if "sections" in data:
            raise SourceMapError("Indexed source maps are not supported")
        if data.get("version") != 3:
            raise SourceMapError(f"Unsupported source map version: {data.get('version')!r}")

        source_root = data.get("sourceRoot") or ""
        if source_root and not source_root.endswith("/"):
            source_root += "/"
        self.sources: List[str] = [
            source_root + s if s is not None else "" for s in data.get("sources", [])
        ]
        self.names: List[str] = list(data.get("names", []))
        contents = data.get("sourcesContent") or []
        self._contents: Dict[str, Optional[str]] = {}
        for i, source in enumerate(self.sources):
            self._contents[source] = contents[i] if i < len(contents) else None

        self._lines: List[List[_Segment]] = self._parse_mappings(data.get("mappings", ""))
        self._columns: List[List[int]] = [[seg[0] for seg in line] for line in self._lines]

    @staticmethod
    def _load(raw: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(raw, dict):
            return raw
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        # Some servers prefix maps with an XSSI guard line
        if raw.startswith(")]}'"):
            raw = raw.split("\n", 1)[1] if "\n" in raw else ""
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise SourceMapError(f"Source map is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise SourceMapError("Source map must be a JSON object")
        return data

    def _parse_mappings(self, mappings: str) -> List[List[_Segment]]:
        lines: List[List[_Segment]] = []
        source = original_line = original_column = name = 0

        for line_text in mappings.split(";"):
            segments: List[_Segment] = []
            generated_column = 0
            for segment_text in line_text.split(","):
                if not segment_text:
                    continue
                fields = decode_vlq(segment_text)
                if len(fields) not in (1, 4, 5):
                    raise SourceMapError(f"Invalid mapping segment {segment_text!r}")
                generated_column += fields[0]
                if len(fields) == 1:
                    segments.append((generated_column, None, None, None, None))
                    continue
                source += fields[1]
                original_line += fields[2]
                original_column += fields[3]
                name_index = None
                if len(fields) == 5:
                    name += fields[4]
                    name_index = name
                segments.append((generated_column, source, original_line, original_column, name_index))
            segments.sort(key=lambda s: s[0])
            lines.append(segments)
        return lines

    def original_position_for(self, line: int, column: int) -> OriginalPosition:
        """
        Map a generated position to the original source.

        Uses the closest mapping at or before ``column`` on the same
        generated line. Returns ``NO_POSITION`` when nothing maps there.
        """
        index = line - 1
        if index < 0 or index >= len(self._lines):
            return NO_POSITION
        columns = self._columns[index]
        i = bisect.bisect_right(columns, column) - 1
        if i < 0:
            return NO_POSITION

        _, source_index, original_line, original_column, name_index = self._lines[index][i]
        if source_index is None or source_index >= len(self.sources):
            return NO_POSITION
        name = None
        if name_index is not None and name_index < len(self.names):
            name = self.names[name_index]
        return OriginalPosition(
            source=self.sources[source_index],
            line=original_line + 1,
            column=original_column,
            name=name,
        )

    def source_content_for(self, source: str) -> Optional[str]:
        """Embedded original content for ``source``, if the map carries it."""
        return self._contents.get(source)
