# SPDX-License-Identifier: MIT
"""RapidAPI key validation against a free public API."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult

PROBE_HOST = "covid-193.p.rapidapi.com"
PROBE_ENDPOINT = f"https://{PROBE_HOST}/countries"


class RapidApiValidator(HttpValidator):
    name = "rapid_api"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET",
            PROBE_ENDPOINT,
            headers={"x-rapidapi-key": payload.api_key, "x-rapidapi-host": PROBE_HOST},
        )
        return self.from_status(response, type="API_KEY")
