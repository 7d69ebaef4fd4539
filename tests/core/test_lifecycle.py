# SPDX-License-Identifier: MIT
"""
Tests for finding lifecycle transitions.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

from jsleak.core.findings import Finding, Occurrence, SourceContent, Validity
from jsleak.core.fingerprint import compute_fingerprint
from jsleak.core.lifecycle import FindingLifecycleManager
from jsleak.core.payloads import ApiKeyPayload
from jsleak.core.store import FindingRepository, InMemoryFindingStore
from jsleak.validate.core import ValidationResult, ValidationState

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_occurrence(value="gsk_Q7wE4rT9yU2iO5pA8sD1", url="https://app.test/main.js"):
    payload = ApiKeyPayload(api_key=value)
    return Occurrence(
        secret_type="Groq",
        fingerprint=compute_fingerprint(payload),
        secret_value=payload,
        file_path="main.js",
        url=url,
        source_content=SourceContent.unattributed("main.js", payload.snippet()),
        validity=Validity.VALID,
    )


def stub_validator(*states):
    validator = MagicMock()
    validator.name = "stub"
    validator.validate.side_effect = [
        ValidationResult(state=s, reason=None if s == ValidationState.VALID else f"{s.value} reason")
        for s in states
    ]
    return validator


def manager_with(finding=None, validator=None):
    repository = FindingRepository(InMemoryFindingStore([finding] if finding else []))
    validators = {"Groq": validator} if validator else {}
    return FindingLifecycleManager(repository, validators, clock=lambda: FIXED_NOW), repository


def parse(ts):
    return datetime.fromisoformat(ts)


class TestRecordOccurrence:
    """Test merging occurrences into findings."""

    def test_new_finding(self):
        manager, repository = manager_with()
        finding = manager.record_occurrence(make_occurrence())
        assert finding.validity == Validity.VALID
        assert finding.discovered_at == FIXED_NOW.isoformat()
        assert len(repository.all()) == 1

    def test_same_fingerprint_accumulates(self):
        manager, repository = manager_with()
        manager.record_occurrence(make_occurrence())
        manager.record_occurrence(make_occurrence(url="https://cdn.test/vendor.js"))
        manager.record_occurrence(make_occurrence(url="https://cdn.test/vendor.js"))

        stored = repository.all()
        assert len(stored) == 1
        assert stored[0].num_occurrences == 2
        assert [o.url for o in stored[0].occurrences] == [
            "https://app.test/main.js",
            "https://cdn.test/vendor.js",
        ]


class TestApplyValidation:
    """Test the validity state machine."""

    def setup_finding(self, validity, validated_at="2024-05-01T12:00:00+00:00"):
        finding = Finding.from_occurrence(make_occurrence(), "2024-05-01T11:00:00+00:00")
        finding.validity = validity
        finding.validated_at = validated_at
        return finding

    def test_invalid(self):
        finding = self.setup_finding(Validity.VALID)
        manager, _ = manager_with(finding)
        result = ValidationResult(state=ValidationState.INVALID, reason="revoked")
        updated = manager.apply_validation(finding.fingerprint, result=result)
        assert updated.validity == Validity.INVALID
        assert updated.error == "revoked"

    def test_reactivation_stamps_strictly_later(self):
        """Test invalid -> valid with a clock that has not advanced."""
        finding = self.setup_finding(Validity.INVALID)
        finding.error = "revoked"
        manager, repository = manager_with(finding)

        updated = manager.apply_validation(
            finding.fingerprint, result=ValidationResult(state=ValidationState.VALID)
        )

        assert updated.validity == Validity.VALID
        assert updated.error is None
        assert parse(updated.validated_at) > parse(finding.validated_at)
        assert repository.get(finding.fingerprint).validity == Validity.VALID

    def test_refresh(self):
        finding = self.setup_finding(Validity.UNKNOWN, validated_at=None)
        manager, _ = manager_with(finding)
        updated = manager.apply_validation(
            finding.fingerprint, result=ValidationResult(state=ValidationState.VALID)
        )
        assert updated.validity == Validity.VALID
        assert updated.validated_at == FIXED_NOW.isoformat()

    def test_error_is_failed_to_check(self):
        finding = self.setup_finding(Validity.VALID)
        manager, _ = manager_with(finding)
        updated = manager.apply_validation(finding.fingerprint, error=TimeoutError("slow issuer"))
        assert updated.validity == Validity.FAILED_TO_CHECK
        assert updated.error == "slow issuer"

    def test_failed_result_is_failed_to_check(self):
        finding = self.setup_finding(Validity.VALID)
        manager, _ = manager_with(finding)
        result = ValidationResult(state=ValidationState.FAILED_TO_CHECK, reason="HTTP 503")
        updated = manager.apply_validation(finding.fingerprint, result=result)
        assert updated.validity == Validity.FAILED_TO_CHECK


class TestRevalidate:
    """Test re-validation of stored findings."""

    def test_first_non_valid_result_wins(self):
        finding = Finding.from_occurrence(make_occurrence(), "t")
        finding.add_occurrence(make_occurrence(url="https://cdn.test/vendor.js"))
        validator = stub_validator(ValidationState.INVALID, ValidationState.VALID)
        manager, _ = manager_with(finding, validator)

        updated = manager.revalidate(finding)

        assert updated.validity == Validity.INVALID
        assert validator.validate.call_count == 1

    def test_validator_exception(self):
        finding = Finding.from_occurrence(make_occurrence(), "t")
        validator = MagicMock()
        validator.name = "stub"
        validator.validate.side_effect = RuntimeError("crashed")
        manager, _ = manager_with(finding, validator)

        updated = manager.revalidate(finding)

        assert updated.validity == Validity.FAILED_TO_CHECK
        assert updated.error == "crashed"

    def test_unknown_secret_type(self):
        finding = Finding.from_occurrence(make_occurrence(), "t")
        manager, _ = manager_with(finding)
        assert manager.revalidate(finding) is None

    def test_revalidate_all(self):
        finding = Finding.from_occurrence(make_occurrence(), "t")
        finding.validity = Validity.INVALID
        manager, repository = manager_with(finding, stub_validator(ValidationState.VALID))

        updated = manager.revalidate_all()

        assert [f.validity for f in updated] == [Validity.VALID]
        assert repository.all()[0].validity == Validity.VALID
