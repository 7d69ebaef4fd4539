# SPDX-License-Identifier: MIT
"""Mailchimp API key validation against the key's datacenter."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult


class MailchimpValidator(HttpValidator):
    name = "mailchimp"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        _, _, datacenter = payload.api_key.partition("-")
        if not datacenter:
            return self.invalid("Invalid API key format - missing datacenter")
        response = self.request(
            "GET",
            f"https://{datacenter}.api.mailchimp.com/3.0/",
            auth=("anystring", payload.api_key),
            headers={"Accept": "application/json"},
        )
        return self.from_status(response, type="API_KEY")
