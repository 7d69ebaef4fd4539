# SPDX-License-Identifier: MIT
"""
Finding lifecycle manager.

Validity transitions for a stored finding, driven by validator results:

    validator says invalid                    -> invalid
    validator says valid, finding was invalid -> valid (reactivation)
    validator says valid, otherwise           -> valid (refresh)
    validator raised / could not check        -> failed_to_check

Every transition stamps ``validated_at`` and is persisted through the
repository's locked read-modify-write cycle.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Mapping, Optional

from jsleak.core.findings import Finding, Occurrence, Validity
from jsleak.core.redaction import redact_secret
from jsleak.core.store import FindingRepository
from jsleak.validate.core import ValidationResult, ValidationState, Validator

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FindingLifecycleManager:
    """Merges occurrences into findings and applies re-validation results."""

    def __init__(
        self,
        repository: FindingRepository,
        validators: Optional[Mapping[str, Validator]] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.validators: Dict[str, Validator] = dict(validators or {})
        self.clock = clock

    def timestamp(self, previous: Optional[str] = None) -> str:
        """Current time as ISO-8601, strictly later than ``previous``."""
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        if previous:
            try:
                last = datetime.fromisoformat(previous)
            except ValueError:
                last = None
            if last is not None:
                if last.tzinfo is None:
                    last = last.replace(tzinfo=timezone.utc)
                if now <= last:
                    now = last + timedelta(microseconds=1)
        return now.isoformat()

    def record_occurrence(self, occurrence: Occurrence) -> Finding:
        """
        Add an occurrence to the finding with the same fingerprint.

        A new fingerprint creates a new finding. An existing finding keeps
        all earlier occurrences; recording the same sighting twice is a
        no-op.
        """
        with self.repository.transaction() as findings:
            for finding in findings:
                if finding.fingerprint == occurrence.fingerprint:
                    if finding.add_occurrence(occurrence):
                        logger.debug(
                            "Added occurrence of %s at %s", occurrence.secret_type, occurrence.url
                        )
                    return finding

            finding = Finding.from_occurrence(occurrence, self.timestamp())
            findings.append(finding)
            logger.info(
                "New %s finding %s",
                occurrence.secret_type,
                redact_secret(occurrence.secret_value.secret_values()[0]),
            )
            return finding

    def apply_validation(
        self,
        fingerprint: str,
        result: Optional[ValidationResult] = None,
        error: Optional[BaseException] = None,
    ) -> Optional[Finding]:
        """Apply one validator outcome to the stored finding."""
        if result is None and error is None:
            raise ValueError("Either a validation result or an error is required")

        def transition(finding: Finding) -> None:
            if error is not None:
                finding.validity = Validity.FAILED_TO_CHECK
                finding.error = str(error)
            elif result.state == ValidationState.INVALID:
                finding.validity = Validity.INVALID
                finding.error = result.reason
            elif result.state == ValidationState.VALID:
                if finding.validity == Validity.INVALID:
                    logger.info("Finding %s reactivated", fingerprint[:12])
                finding.validity = Validity.VALID
                finding.error = None
            else:
                finding.validity = Validity.FAILED_TO_CHECK
                finding.error = result.reason
            finding.validated_at = self.timestamp(finding.validated_at)

        return self.repository.update(fingerprint, transition)

    def revalidate(self, finding: Finding) -> Optional[Finding]:
        """
        Re-run the family validator over every payload of a finding.

        The first payload that is not confirmed valid decides the outcome.
        """
        validator = self.validators.get(finding.secret_type)
        if validator is None:
            logger.warning("No validator for secret type %s", finding.secret_type)
            return None

        payloads = finding.payloads()
        if not payloads:
            return None

        last_result = None
        for payload in payloads:
            try:
                last_result = validator.validate(payload)
            except Exception as e:
                logger.warning("Validator %s raised: %s", validator.name, e)
                return self.apply_validation(finding.fingerprint, error=e)
            if last_result.state != ValidationState.VALID:
                break

        return self.apply_validation(finding.fingerprint, result=last_result)

    def revalidate_all(self) -> List[Finding]:
        """Re-validate every stored finding, one at a time."""
        updated = []
        for finding in self.repository.all():
            result = self.revalidate(finding)
            if result is not None:
                updated.append(result)
        return updated
