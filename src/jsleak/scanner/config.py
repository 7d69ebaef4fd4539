# SPDX-License-Identifier: MIT
"""
Scanner configuration loader for jsleak.
"""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from jsleak.core.exceptions import JsLeakConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [".jsleak.yml", ".jsleak.yaml"]

DEFAULT_CONFIG: Dict[str, Any] = {
    "validators": {
        "allow_network": True,
        "timeout_seconds": 10,
        "rate_limit": True,
    },
    "source_maps": {
        "enabled": True,
        "timeout_seconds": 10,
    },
    "false_positives": {
        "terms": None,
    },
    "disabled_detectors": [],
    "store": {
        "path": ".jsleak/findings.json",
    },
    "scanner": {
        "max_workers": 8,
    },
}


def load_scanner_config(config_path: Optional[str] = None, root: str = ".") -> Dict[str, Any]:
    """
    Load scanner configuration following the search order.

    Args:
        config_path: Explicit config path from --config CLI flag
        root: Directory searched for .jsleak.yml/.jsleak.yaml

    Returns:
        Dictionary containing the complete scanner configuration

    Raises:
        JsLeakConfigError: If a config file is malformed or an explicitly
            provided config is missing
    """
    root_path = Path(root).resolve()

    # 1. If CLI --config provided, load it
    if config_path:
        config_abs_path = Path(config_path).resolve()
        if not config_abs_path.exists():
            raise JsLeakConfigError(
                f"Specified config file not found: {config_abs_path}",
                config_path=str(config_abs_path),
            )
        config = _load_yaml_config(config_abs_path)
        logger.info("Loaded config: %s", config_abs_path)
        return config

    # 2. Look for .jsleak.yml or .jsleak.yaml in the working directory
    for config_name in CONFIG_FILE_NAMES:
        config_file = root_path / config_name
        if config_file.exists():
            config = _load_yaml_config(config_file)
            logger.info("Loaded config: %s", config_file)
            return config

    # 3. Use built-in defaults
    logger.debug("Using default scanner config")
    return get_default_scanner_config()


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load and validate a YAML config file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise JsLeakConfigError(f"Failed to parse config file: {e}", config_path=str(config_path))

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise JsLeakConfigError("Config must be a mapping", config_path=str(config_path))

    return _apply_scanner_defaults(config, str(config_path))


def _apply_scanner_defaults(config: Dict[str, Any], config_path: Optional[str] = None) -> Dict[str, Any]:
    """Merge a loaded config over the defaults, checking section types."""
    merged = get_default_scanner_config()
    for section, default in DEFAULT_CONFIG.items():
        if section not in config or config[section] is None:
            continue
        value = config[section]
        if isinstance(default, dict):
            if not isinstance(value, dict):
                raise JsLeakConfigError(
                    "Section must be a mapping", config_path=config_path, section=section
                )
            merged[section].update(value)
        elif isinstance(default, list):
            if not isinstance(value, list):
                raise JsLeakConfigError(
                    "Section must be a list", config_path=config_path, section=section
                )
            merged[section] = list(value)

    _check_types(merged, config_path)
    return merged


def _check_types(config: Dict[str, Any], config_path: Optional[str]) -> None:
    checks = [
        ("validators", "allow_network", bool),
        ("validators", "timeout_seconds", (int, float)),
        ("validators", "rate_limit", bool),
        ("source_maps", "enabled", bool),
        ("source_maps", "timeout_seconds", (int, float)),
        ("store", "path", str),
        ("scanner", "max_workers", int),
    ]
    for section, key, expected in checks:
        value = config[section][key]
        # bool is an int subclass; a boolean is never a valid number here
        if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
            raise JsLeakConfigError(
                f"Invalid value for {key}: {value!r}", config_path=config_path, section=section
            )

    if config["scanner"]["max_workers"] < 1:
        raise JsLeakConfigError(
            "max_workers must be at least 1", config_path=config_path, section="scanner"
        )

    terms = config["false_positives"]["terms"]
    if terms is not None and (
        not isinstance(terms, list) or not all(isinstance(t, str) for t in terms)
    ):
        raise JsLeakConfigError(
            "terms must be a list of strings", config_path=config_path, section="false_positives"
        )


def get_default_scanner_config() -> Dict[str, Any]:
    """
    Get the default scanner configuration.

    Returns:
        Dictionary with default scanner settings
    """
    return copy.deepcopy(DEFAULT_CONFIG)


def create_default_config_template() -> str:
    """
    Create a .jsleak.yml template with commented examples.

    Returns:
        YAML string with default configuration template
    """
    return """# jsleak configuration

validators:
  # Set to false to skip every network check (findings stay unconfirmed)
  allow_network: true
  # Per-request timeout for calls to credential issuers
  timeout_seconds: 10
  # Throttle calls to each issuer
  rate_limit: true

source_maps:
  # Attribute findings to original sources through source maps
  enabled: true
  timeout_seconds: 10

false_positives:
  # Replace the built-in term list (case-insensitive)
  # terms:
  #   - example
  #   - sample

# Detectors to disable by name
disabled_detectors: []
  # Examples:
  # - "deepai"
  # - "gemini"

store:
  path: .jsleak/findings.json

scanner:
  # Families scanned in parallel
  max_workers: 8
"""
