# SPDX-License-Identifier: MIT
"""Azure OpenAI key detector; keys are paired with resource endpoints."""
from __future__ import annotations

from typing import List

from jsleak.core.payloads import ApiKeyUrlPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, combinations
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.azure_openai import AzureOpenAIValidator

NAME = "azure_openai"


class AzureOpenAIFamily(SecretFamily):
    name = NAME
    secret_type = "Azure OpenAI"
    resource_types = {"API_KEY": "API Key"}
    validator_class = AzureOpenAIValidator

    def extract(self, content: str) -> List[SecretPayload]:
        keys = self.accepted(PATTERNS["Azure OpenAI API Key"], content)
        if not keys:
            return []
        urls = PATTERNS["Azure OpenAI URL"].find_all(content)
        return [ApiKeyUrlPayload(api_key=k, url=u) for k, u in combinations(keys, urls)]


def build(settings):
    return AzureOpenAIFamily.from_settings(settings)
