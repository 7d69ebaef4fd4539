# SPDX-License-Identifier: MIT
"""
Anthropic API key validation.

Admin keys are recognised by the organization key-listing endpoint; plain
API keys by the models endpoint. A 401/404 on one endpoint moves on to the
next.
"""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult

ANTHROPIC_VERSION = "2023-06-01"

ENDPOINTS = (
    ("ADMIN", "https://api.anthropic.com/v1/organizations/api_keys"),
    ("USER", "https://api.anthropic.com/v1/models"),
)


class AnthropicValidator(HttpValidator):
    name = "anthropic"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        headers = {
            "x-api-key": payload.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        for key_type, endpoint in ENDPOINTS:
            response = self.request("GET", endpoint, headers=headers)
            if response.status_code == 200:
                return self.valid(type=key_type)
            if response.status_code in (401, 404):
                continue
            return self.from_status(response)
        return self.invalid("Key rejected by every Anthropic endpoint")
