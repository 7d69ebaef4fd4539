# SPDX-License-Identifier: MIT
"""
Tests for the parallel content scanner.
"""
import logging
import re
from unittest.mock import MagicMock

from jsleak.core.store import FindingRepository, InMemoryFindingStore
from jsleak.detectors import DETECTOR_MODULES
from jsleak.detectors.base import Pattern, SingleKeyFamily
from jsleak.scanner.config import get_default_scanner_config
from jsleak.scanner.orchestrator import ContentScanner
from jsleak.sourcemap.resolver import SourceAttributionResolver
from jsleak.validate.core import ValidationResult, ValidationState

URL = "https://app.test/main.js"


def valid_validator():
    validator = MagicMock()
    validator.validate.return_value = ValidationResult(state=ValidationState.VALID)
    return validator


class AlphaFamily(SingleKeyFamily):
    name = "alpha"
    secret_type = "Alpha"
    pattern = Pattern("Alpha Key", "Alpha", re.compile(r"\b(alpha_[a-z0-9]{24})\b"), 0.0)
    check_false_positives = False


class BrokenFamily(SingleKeyFamily):
    name = "broken"
    secret_type = "Broken"

    def extract(self, content):
        raise RuntimeError("extractor bug")


def make_scanner(session, *families):
    repository = FindingRepository(InMemoryFindingStore())
    resolver = SourceAttributionResolver(session=session)
    return ContentScanner(list(families), repository, resolver=resolver, max_workers=4)


class TestContentScanner:
    def test_family_failure_is_isolated(self, session, caplog):
        scanner = make_scanner(session, BrokenFamily(valid_validator()), AlphaFamily(valid_validator()))
        with caplog.at_level(logging.ERROR):
            occurrences = scanner.scan('key="alpha_k3j5h7g9f1d3s5a7p9o1i3u5"', URL)
        assert [o.secret_type for o in occurrences] == ["Alpha"]
        assert "Detector broken failed" in caplog.text

    def test_lifecycle_knows_every_family(self, session):
        alpha = AlphaFamily(valid_validator())
        scanner = make_scanner(session, alpha)
        assert scanner.lifecycle.validators == {"Alpha": alpha.validator}

    def test_explicit_validators_reach_lifecycle(self, session):
        revalidator = valid_validator()
        repository = FindingRepository(InMemoryFindingStore())
        scanner = ContentScanner(
            [AlphaFamily(valid_validator())], repository, validators={"Alpha": revalidator}
        )
        assert scanner.lifecycle.validators == {"Alpha": revalidator}

    def test_no_families(self, session):
        assert make_scanner(session).scan("anything", URL) == []

    def test_from_config(self, session, tmp_path):
        config = get_default_scanner_config()
        config["validators"]["allow_network"] = False
        config["source_maps"]["enabled"] = False
        config["disabled_detectors"] = ["deepai"]
        config["false_positives"]["terms"] = ["dummy"]

        scanner = ContentScanner.from_config(config, store_path=str(tmp_path / "f.json"), session=session)

        assert len(scanner.families) == len(DETECTOR_MODULES) - 1
        assert "DeepAI" not in scanner.lifecycle.validators
        assert scanner.lifecycle.validators == {f.secret_type: f.validator for f in scanner.families}
        assert scanner.resolver.enabled is False
        assert scanner.repository.store.path == tmp_path / "f.json"
        assert all(f.false_positive_terms == ("dummy",) for f in scanner.families)
        assert all(f.validator.session is session for f in scanner.families)

    def test_from_config_with_network_disabled_records_nothing(self, session, tmp_path):
        config = get_default_scanner_config()
        config["validators"]["allow_network"] = False
        scanner = ContentScanner.from_config(config, store_path=str(tmp_path / "f.json"), session=session)

        content = 'const k = "gsk_' + "Q7wE4rT9yU2iO5pA8sD1fG3hJ6kL0zX2cV5bN8mQ1wE4rT7yU0iO" + '";'
        assert scanner.scan(content, URL) == []
        session.request.assert_not_called()
        assert scanner.repository.all() == []
