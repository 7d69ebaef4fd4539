"""Mapping matches in delivered bundles back to their original sources."""

from jsleak.sourcemap.consumer import OriginalPosition, SourceMapConsumer
from jsleak.sourcemap.discovery import find_secret_position, get_source_map_url
from jsleak.sourcemap.resolver import SourceAttributionResolver

__all__ = [
    "OriginalPosition",
    "SourceAttributionResolver",
    "SourceMapConsumer",
    "find_secret_position",
    "get_source_map_url",
]
