"""Detector registry and discovery for jsleak."""

from __future__ import annotations

import importlib
import logging
from typing import Dict, Iterable, List, Optional

from jsleak.detectors.base import DetectorSettings, SecretFamily

logger = logging.getLogger(__name__)

# Known family modules under jsleak.detectors, each exposing NAME and build()
DETECTOR_MODULES = [
    "aws_access_keys",
    "aws_session_keys",
    "anthropic",
    "apollo",
    "artifactory",
    "azure_openai",
    "deepai",
    "deepseek",
    "docker",
    "gcp",
    "gemini",
    "groq",
    "huggingface",
    "jotform",
    "langsmith",
    "mailchimp",
    "mailgun",
    "make_api_token",
    "make_mcp_token",
    "openai",
    "paypal_oauth",
    "rapid_api",
    "slack",
    "telegram_bot_token",
]


class DetectorRegistry:
    """Registry of secret families built from the modules under jsleak.detectors/"""

    def __init__(
        self,
        settings: Optional[DetectorSettings] = None,
        disabled: Iterable[str] = (),
    ):
        self.settings = settings or DetectorSettings()
        self.disabled = set(disabled)
        self._families: Dict[str, SecretFamily] = {}
        self._load_detectors()

    def _load_detectors(self):
        """Load known detectors that have the build() interface."""
        for module_name in DETECTOR_MODULES:
            if module_name in self.disabled:
                logger.debug("Detector %s disabled by configuration", module_name)
                continue
            try:
                module = importlib.import_module(f"jsleak.detectors.{module_name}")
            except ImportError as e:
                logger.warning("Failed to load detector %s: %s", module_name, e)
                continue

            if hasattr(module, "build") and hasattr(module, "NAME"):
                self._families[module.NAME] = module.build(self.settings)

        unknown = self.disabled.difference(DETECTOR_MODULES)
        if unknown:
            logger.warning("Unknown detectors in disabled list: %s", ", ".join(sorted(unknown)))

    def register(self, family: SecretFamily) -> None:
        """Register an additional family."""
        if family.name in self._families:
            raise ValueError(f"Detector {family.name} already registered")
        self._families[family.name] = family

    def get(self, name: str) -> SecretFamily:
        return self._families[name]

    def families(self) -> List[SecretFamily]:
        """All registered families in load order."""
        return list(self._families.values())

    def keys(self):
        return self._families.keys()

    def validators_by_secret_type(self) -> Dict[str, object]:
        """Validator for each secret type, as the lifecycle manager needs them."""
        return {family.secret_type: family.validator for family in self._families.values()}
