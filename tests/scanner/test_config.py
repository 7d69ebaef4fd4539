# SPDX-License-Identifier: MIT
"""
Tests for scanner configuration loading.
"""
import pytest
import yaml

from jsleak.core.exceptions import JsLeakConfigError
from jsleak.scanner.config import (
    _apply_scanner_defaults,
    create_default_config_template,
    get_default_scanner_config,
    load_scanner_config,
)


class TestLoadScannerConfig:
    """Test config file search order and validation."""

    def test_defaults_without_config_file(self, tmp_path):
        assert load_scanner_config(root=str(tmp_path)) == get_default_scanner_config()

    def test_config_in_root(self, tmp_path):
        (tmp_path / ".jsleak.yaml").write_text("validators:\n  timeout_seconds: 3\n")
        config = load_scanner_config(root=str(tmp_path))
        assert config["validators"]["timeout_seconds"] == 3
        assert config["validators"]["allow_network"] is True
        assert config["store"]["path"] == ".jsleak/findings.json"

    def test_yml_preferred_over_yaml(self, tmp_path):
        (tmp_path / ".jsleak.yml").write_text("scanner:\n  max_workers: 2\n")
        (tmp_path / ".jsleak.yaml").write_text("scanner:\n  max_workers: 3\n")
        assert load_scanner_config(root=str(tmp_path))["scanner"]["max_workers"] == 2

    def test_explicit_path_wins(self, tmp_path):
        (tmp_path / ".jsleak.yml").write_text("scanner:\n  max_workers: 2\n")
        explicit = tmp_path / "ci.yml"
        explicit.write_text("disabled_detectors: [gemini, deepai]\n")
        config = load_scanner_config(str(explicit), root=str(tmp_path))
        assert config["disabled_detectors"] == ["gemini", "deepai"]
        assert config["scanner"]["max_workers"] == 8

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(JsLeakConfigError, match="not found"):
            load_scanner_config(str(tmp_path / "nope.yml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_scanner_config(str(path)) == get_default_scanner_config()

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("validators: [unclosed\n")
        with pytest.raises(JsLeakConfigError) as exc_info:
            load_scanner_config(str(path))
        assert exc_info.value.config_path == str(path.resolve())

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(JsLeakConfigError, match="mapping"):
            load_scanner_config(str(path))


class TestApplyScannerDefaults:
    @pytest.mark.parametrize(
        "config, section",
        [
            ({"validators": "on"}, "validators"),
            ({"disabled_detectors": "gemini"}, "disabled_detectors"),
            ({"validators": {"timeout_seconds": True}}, "validators"),
            ({"validators": {"allow_network": "yes"}}, "validators"),
            ({"scanner": {"max_workers": 0}}, "scanner"),
            ({"scanner": {"max_workers": 2.5}}, "scanner"),
            ({"false_positives": {"terms": "example"}}, "false_positives"),
            ({"false_positives": {"terms": ["ok", 3]}}, "false_positives"),
        ],
    )
    def test_rejected(self, config, section):
        with pytest.raises(JsLeakConfigError) as exc_info:
            _apply_scanner_defaults(config, "cfg.yml")
        assert exc_info.value.section == section
        assert "(section: " in str(exc_info.value)

    def test_defaults_are_not_shared(self):
        first = _apply_scanner_defaults({"disabled_detectors": ["slack"]})
        first["validators"]["timeout_seconds"] = 99
        assert get_default_scanner_config()["validators"]["timeout_seconds"] == 10
        assert get_default_scanner_config()["disabled_detectors"] == []


def test_template_loads_as_defaults():
    data = yaml.safe_load(create_default_config_template())
    assert _apply_scanner_defaults(data) == get_default_scanner_config()
