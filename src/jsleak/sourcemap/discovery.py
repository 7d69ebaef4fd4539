# SPDX-License-Identifier: MIT
"""Locating source maps and positions inside delivered content."""
from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urljoin, urlparse

from jsleak.core.exceptions import SourceMapError

SOURCE_MAPPING_URL = re.compile(r"//[#@]\s*sourceMappingURL=(\S+)")


@dataclass(frozen=True)
class Position:
    line: int  # 1-based
    column: int  # 0-based


def get_source_map_url(url: str, content: str) -> Optional[str]:
    """
    Return the source map URL advertised by ``content``.

    The last ``sourceMappingURL`` comment wins. Relative references are
    resolved against the delivery URL; inline ``data:`` URIs are returned
    unchanged.
    """
    matches = SOURCE_MAPPING_URL.findall(content)
    if not matches:
        return None
    reference = matches[-1].strip()
    if reference.startswith("data:"):
        return reference
    return urljoin(url, reference)


def decode_data_uri(uri: str) -> str:
    """Decode an inline ``data:`` source map."""
    header, sep, data = uri.partition(",")
    if not sep:
        raise SourceMapError("Malformed data URI")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(data).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise SourceMapError(f"Malformed base64 data URI: {e}") from e
    return unquote(data)


def find_secret_position(content: str, text: str) -> Optional[Position]:
    """Position of the first occurrence of ``text`` in ``content``."""
    if not text:
        return None
    index = content.find(text)
    if index < 0:
        return None
    line = content.count("\n", 0, index) + 1
    line_start = content.rfind("\n", 0, index) + 1
    return Position(line=line, column=index - line_start)


def filename_from_url(url: str) -> str:
    """Last path segment of a delivery URL (or local path)."""
    path = urlparse(url).path if "://" in url else url
    return path.split("/")[-1]
