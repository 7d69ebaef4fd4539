# SPDX-License-Identifier: MIT
"""PayPal OAuth client credential validation (sandbox token endpoint)."""
from __future__ import annotations

from jsleak.core.payloads import OAuthClientPayload
from .core import HttpValidator, ValidationResult, json_body

TOKEN_ENDPOINT = "https://api-m.sandbox.paypal.com/v1/oauth2/token"


class PayPalOAuthValidator(HttpValidator):
    name = "paypal_oauth"
    payload_type = OAuthClientPayload

    def check(self, payload: OAuthClientPayload) -> ValidationResult:
        response = self.request(
            "POST",
            TOKEN_ENDPOINT,
            auth=(payload.client_id, payload.client_secret),
            headers={"Accept": "application/json"},
            data={"grant_type": "client_credentials"},
        )
        if response.status_code != 200:
            return self.from_status(response)
        data = json_body(response)
        if not data.get("access_token"):
            return self.invalid("Token endpoint returned no access token")
        return self.valid(
            type="CLIENT_CREDENTIALS",
            app_id=data.get("app_id"),
            scope=data.get("scope"),
        )
