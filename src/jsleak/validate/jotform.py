# SPDX-License-Identifier: MIT
"""JotForm API key validation."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult, json_body, json_object

USER_ENDPOINT = "https://api.jotform.com/user"


class JotFormValidator(HttpValidator):
    name = "jotform"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request("GET", USER_ENDPOINT, params={"apiKey": payload.api_key})
        if response.status_code != 200:
            return self.from_status(response)
        content = json_object(json_body(response), "content")
        return self.valid(
            type="API_KEY",
            username=content.get("username"),
            email=content.get("email"),
            account_type=content.get("account_type"),
        )
