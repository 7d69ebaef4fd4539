# SPDX-License-Identifier: MIT
"""Gemini exchange API key and secret detector."""
from __future__ import annotations

from typing import List

from jsleak.core.payloads import GeminiPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, combinations
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.gemini import GeminiValidator

NAME = "gemini"


class GeminiFamily(SecretFamily):
    name = NAME
    secret_type = "Gemini"
    resource_types = {"MASTER": "Master API Key & Secret", "ACCOUNT": "API Key & Secret"}
    validator_class = GeminiValidator

    def extract(self, content: str) -> List[SecretPayload]:
        keys = self.accepted(PATTERNS["Gemini API Key"], content)
        if not keys:
            return []
        # The secret shape is generic enough to hit plain identifiers
        secrets = self.accepted(PATTERNS["Gemini API Secret"], content, check_programming=True)
        return [GeminiPayload(api_key=k, api_secret=s) for k, s in combinations(keys, secrets)]


def build(settings):
    return GeminiFamily.from_settings(settings)
