# SPDX-License-Identifier: MIT
"""LangSmith API key validation."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult

API_KEY_ENDPOINT = "https://api.smith.langchain.com/api/v1/api-key"


class LangSmithValidator(HttpValidator):
    name = "langsmith"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request("GET", API_KEY_ENDPOINT, headers={"X-API-Key": payload.api_key})
        if response.status_code == 200:
            key_type = "lsv2_pt" if payload.api_key.startswith("lsv2_pt_") else "lsv2_sk"
            return self.valid(type=key_type)
        return self.from_status(response)
