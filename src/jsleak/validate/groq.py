# SPDX-License-Identifier: MIT
"""Groq API key validation."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult

MODELS_ENDPOINT = "https://api.groq.com/openai/v1/models"


class GroqValidator(HttpValidator):
    name = "groq"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET", MODELS_ENDPOINT, headers={"Authorization": f"Bearer {payload.api_key}"}
        )
        return self.from_status(response, type="API_KEY")
