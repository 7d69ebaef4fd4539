# SPDX-License-Identifier: MIT
"""
Content scanner.

Runs every enabled family's pipeline over the same content in parallel.
Families share nothing but the finding repository; a failure inside one
family is logged and never affects the others.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import requests

from jsleak.core.findings import Occurrence
from jsleak.core.lifecycle import FindingLifecycleManager
from jsleak.core.store import FindingRepository, JsonFileFindingStore
from jsleak.detectors import DetectorRegistry
from jsleak.detectors.base import DetectorSettings, SecretFamily
from jsleak.scanner.pipeline import DetectionPipeline
from jsleak.sourcemap.resolver import SourceAttributionResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class ContentScanner:
    """Scans delivered content with a set of secret families."""

    def __init__(
        self,
        families: List[SecretFamily],
        repository: FindingRepository,
        resolver: Optional[SourceAttributionResolver] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        validators: Optional[Dict[str, Any]] = None,
    ):
        self.families = list(families)
        self.repository = repository
        self.resolver = resolver or SourceAttributionResolver()
        self.max_workers = max_workers
        if validators is None:
            validators = {f.secret_type: f.validator for f in self.families}
        self.lifecycle = FindingLifecycleManager(repository, validators=validators)

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        store_path: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> "ContentScanner":
        """Build a scanner from a loaded configuration."""
        validators = config["validators"]
        terms = config["false_positives"]["terms"]
        settings = DetectorSettings(
            timeout=float(validators["timeout_seconds"]),
            allow_network=validators["allow_network"],
            rate_limit=validators["rate_limit"],
            false_positive_terms=tuple(terms) if terms is not None else None,
            session=session,
        )
        registry = DetectorRegistry(settings, disabled=config["disabled_detectors"])
        source_maps = config["source_maps"]
        resolver = SourceAttributionResolver(
            session=session,
            timeout=float(source_maps["timeout_seconds"]),
            enabled=source_maps["enabled"],
        )
        repository = FindingRepository(JsonFileFindingStore(store_path or config["store"]["path"]))
        return cls(
            registry.families(),
            repository,
            resolver=resolver,
            max_workers=config["scanner"]["max_workers"],
            validators=registry.validators_by_secret_type(),
        )

    def scan(self, content: str, url: str) -> List[Occurrence]:
        """
        Run every family over ``content`` delivered from ``url``.

        Returns:
            Occurrences recorded by this scan, grouped by family in
            registration order
        """
        if not self.families:
            return []
        workers = max(1, min(self.max_workers, len(self.families)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                (family, executor.submit(self._run_family, family, content, url))
                for family in self.families
            ]
            occurrences: List[Occurrence] = []
            for family, future in futures:
                occurrences.extend(future.result())
        return occurrences

    def _run_family(self, family: SecretFamily, content: str, url: str) -> List[Occurrence]:
        pipeline = DetectionPipeline(family, self.repository, self.resolver, self.lifecycle)
        try:
            return pipeline.run(content, url)
        except Exception:
            logger.exception("Detector %s failed on %s", family.name, url)
            return []
