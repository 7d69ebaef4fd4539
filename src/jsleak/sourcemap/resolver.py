# SPDX-License-Identifier: MIT
"""
Source attribution resolver.

Maps a match in delivered content back to its original source file using
the content's source map. Any failure along the way (no map, fetch error,
malformed map, unmapped position) degrades to the default attribution:
the delivered file itself with ``-1`` line numbers and a JSON snippet of
the secret payload as content.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import Dict, List, Optional, Sequence, Set, Union

import requests

from jsleak.core.exceptions import SourceMapError
from jsleak.core.findings import SourceContent
from jsleak.core.payloads import SecretPayload
from jsleak.sourcemap.consumer import SourceMapConsumer
from jsleak.sourcemap.discovery import (
    decode_data_uri,
    filename_from_url,
    find_secret_position,
    get_source_map_url,
)

logger = logging.getLogger(__name__)

CONTEXT_LINES = 5
DEFAULT_TIMEOUT = 10.0


class SourceAttributionResolver:
    """Resolves ``SourceContent`` for matches, caching parsed maps by URL."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        enabled: bool = True,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.enabled = enabled
        self._consumers: Dict[str, SourceMapConsumer] = {}
        self._failed: Set[str] = set()
        self._url_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def resolve(
        self,
        content: str,
        match_text: Union[str, Sequence[str]],
        delivery_url: str,
        payload: Optional[SecretPayload] = None,
    ) -> SourceContent:
        """
        Attribute one secret to its original source.

        Args:
            content: Delivered content the secret was found in
            match_text: Matched text, or one text per field of a
                multi-field secret
            delivery_url: URL the content was delivered from
            payload: Secret payload, used for the default content snippet

        Returns:
            SourceContent, never raising
        """
        texts = [match_text] if isinstance(match_text, str) else list(match_text)
        default = self.default_attribution(delivery_url, texts, payload)
        if not self.enabled:
            return default

        try:
            map_url = get_source_map_url(delivery_url, content)
            if not map_url:
                return default
            consumer = self.consumer_for(map_url)
            attributed = self._attribute(consumer, content, texts)
        except Exception as e:
            logger.warning("Source map processing failed for %s: %s", delivery_url, e)
            return default

        return attributed or default

    def default_attribution(
        self,
        delivery_url: str,
        texts: List[str],
        payload: Optional[SecretPayload] = None,
    ) -> SourceContent:
        if payload is not None:
            snippet = payload.snippet()
        else:
            snippet = json.dumps({"match": texts[0] if texts else ""})
        return SourceContent.unattributed(filename_from_url(delivery_url), snippet)

    def consumer_for(self, map_url: str) -> SourceMapConsumer:
        """Fetch and parse a source map once per resolver."""
        with self._lock:
            url_lock = self._url_locks.setdefault(map_url, threading.Lock())
        # Only lookups of the same map wait on its fetch
        with url_lock:
            with self._lock:
                cached = self._consumers.get(map_url)
                if cached is not None:
                    return cached
                if map_url in self._failed:
                    raise SourceMapError(f"Source map previously failed: {map_url[:80]}")
            try:
                consumer = SourceMapConsumer(self._fetch(map_url))
            except (requests.RequestException, SourceMapError):
                with self._lock:
                    self._failed.add(map_url)
                raise
            with self._lock:
                self._consumers[map_url] = consumer
            return consumer

    def _fetch(self, map_url: str) -> str:
        if map_url.startswith("data:"):
            return decode_data_uri(map_url)
        logger.debug("Fetching source map %s", map_url)
        response = self.session.get(map_url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def _attribute(
        self, consumer: SourceMapConsumer, content: str, texts: List[str]
    ) -> Optional[SourceContent]:
        source = None
        lines: List[int] = []
        for text in texts:
            position = find_secret_position(content, text)
            if position is None:
                continue
            original = consumer.original_position_for(position.line, position.column)
            if not original.source or original.line is None:
                continue
            # All fields must come from the same original file
            if source is None:
                source = original.source
            elif original.source != source:
                continue
            lines.append(original.line)

        if source is None:
            return None
        return SourceContent(
            content=consumer.source_content_for(source) or "",
            filename=source,
            start_line=min(lines) - CONTEXT_LINES,
            end_line=max(lines) + CONTEXT_LINES,
            exact_match_lines=tuple(lines),
        )
