# SPDX-License-Identifier: MIT
"""DeepAI API key validation with a minimal text-tagging call."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult

TEXT_TAGGING_ENDPOINT = "https://api.deepai.org/api/text-tagging"


class DeepAIValidator(HttpValidator):
    name = "deepai"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "POST",
            TEXT_TAGGING_ENDPOINT,
            headers={"api-key": payload.api_key},
            data={"text": "test"},
        )
        return self.from_status(response, type="API_KEY")
