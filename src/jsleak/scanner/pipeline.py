# SPDX-License-Identifier: MIT
"""
Generic detection pipeline.

One pipeline runs one secret family over one piece of content:

    extract -> dedup against stored findings -> validate -> attribute
            -> fingerprint -> record

Candidates are validated one at a time, and each confirmed secret is
recorded before the next candidate is looked at, so a later duplicate in
the same pass is caught by the dedup check.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from jsleak.core.findings import Occurrence, Validity
from jsleak.core.fingerprint import compute_fingerprint
from jsleak.core.lifecycle import FindingLifecycleManager
from jsleak.core.redaction import redact_secret
from jsleak.core.store import FindingRepository
from jsleak.detectors.base import SecretFamily
from jsleak.sourcemap.discovery import filename_from_url
from jsleak.sourcemap.resolver import SourceAttributionResolver
from jsleak.validate.core import ValidationResult

logger = logging.getLogger(__name__)


class DetectionPipeline:
    """Finds, confirms and records one family's secrets."""

    def __init__(
        self,
        family: SecretFamily,
        repository: FindingRepository,
        resolver: SourceAttributionResolver,
        lifecycle: Optional[FindingLifecycleManager] = None,
    ):
        self.family = family
        self.repository = repository
        self.resolver = resolver
        self.lifecycle = lifecycle or FindingLifecycleManager(repository)

    def run(self, content: str, url: str) -> List[Occurrence]:
        """
        Scan ``content`` delivered from ``url``.

        Returns:
            Occurrences recorded during this run (confirmed secrets only)
        """
        candidates = self.family.extract(content)
        if not candidates:
            return []
        logger.debug("%s: %d candidate(s) in %s", self.family.name, len(candidates), url)

        occurrences = []
        for payload in candidates:
            key = self.family.dedup_key(payload)
            if self.repository.contains_value(key):
                logger.debug("%s: %s already recorded", self.family.name, redact_secret(key))
                continue

            result = self._validate(payload)
            if result is None or not result.valid:
                continue

            occurrence = self._occurrence(content, url, payload, result)
            self.lifecycle.record_occurrence(occurrence)
            occurrences.append(occurrence)
        return occurrences

    def _validate(self, payload) -> Optional[ValidationResult]:
        try:
            result = self.family.validator.validate(payload)
        except Exception as e:
            logger.warning("%s validator raised: %s", self.family.name, e)
            return None
        logger.debug(
            "%s: %s -> %s (%s)",
            self.family.name,
            redact_secret(self.family.dedup_key(payload)),
            result.state.value,
            result.reason or "",
        )
        return result

    def _occurrence(self, content, url, payload, result) -> Occurrence:
        source_content = self.resolver.resolve(
            content, self.family.attribution_texts(payload), url, payload=payload
        )
        return Occurrence(
            secret_type=self.family.secret_type,
            fingerprint=compute_fingerprint(payload, self.family.fingerprint_algorithm),
            secret_value=payload,
            file_path=filename_from_url(url),
            url=url,
            source_content=source_content,
            type=self.family.resource_type(payload, result),
            validity=Validity.VALID,
        )
