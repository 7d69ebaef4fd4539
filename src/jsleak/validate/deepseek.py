# SPDX-License-Identifier: MIT
"""DeepSeek API key validation via the balance endpoint."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult, json_body

BALANCE_ENDPOINT = "https://api.deepseek.com/user/balance"


class DeepSeekValidator(HttpValidator):
    name = "deepseek"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET",
            BALANCE_ENDPOINT,
            headers={"Authorization": f"Bearer {payload.api_key}", "Accept": "application/json"},
        )
        if response.status_code != 200:
            return self.from_status(response)
        data = json_body(response)
        return self.valid(type="API_KEY", is_available=data.get("is_available"))
