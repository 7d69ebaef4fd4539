# SPDX-License-Identifier: MIT
"""Apollo API key validation via the auth health endpoint."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult, json_body

HEALTH_ENDPOINT = "https://api.apollo.io/v1/auth/health"


class ApolloValidator(HttpValidator):
    name = "apollo"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET",
            HEALTH_ENDPOINT,
            headers={"x-api-key": payload.api_key, "Cache-Control": "no-cache"},
        )
        if response.status_code != 200:
            return self.from_status(response)
        # The endpoint answers 200 for any key; only the body tells them apart
        if json_body(response).get("is_logged_in") is True:
            return self.valid(type="API_KEY")
        return self.invalid("Key not logged in")
