# SPDX-License-Identifier: MIT
"""Mailgun API key validation."""
from __future__ import annotations

import base64

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult

DOMAINS_ENDPOINT = "https://api.mailgun.net/v3/domains"

# 72-character keys are already the base64 form of ``api:<key>``
ENCODED_KEY_LENGTH = 72


def authorization_header(api_key: str) -> str:
    if len(api_key) == ENCODED_KEY_LENGTH:
        return f"Basic {api_key}"
    encoded = base64.b64encode(f"api:{api_key}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


class MailgunValidator(HttpValidator):
    name = "mailgun"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET",
            DOMAINS_ENDPOINT,
            headers={"Authorization": authorization_header(payload.api_key)},
        )
        return self.from_status(response, type="API_KEY")
