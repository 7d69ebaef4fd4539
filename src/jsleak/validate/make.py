# SPDX-License-Identifier: MIT
"""
Make (formerly Integromat) credential validation.

API tokens are zone-bound, so every known zone is tried until one accepts
the token. MCP URLs carry their token in the path and are checked by
opening the event stream.
"""
from __future__ import annotations

from jsleak.core.payloads import ApiTokenPayload, McpUrlPayload
from .core import HttpValidator, ValidationResult, ValidationState, classify_status

ZONE_BASE_URLS = (
    "https://eu1.make.com/api/v2/",
    "https://eu2.make.com/api/v2/",
    "https://us1.make.com/api/v2/",
    "https://us2.make.com/api/v2/",
    "https://eu1.make.celonis.com/api/v2/",
    "https://eu2.make.celonis.com/api/v2/",
)


class MakeApiTokenValidator(HttpValidator):
    name = "make_api_token"
    payload_type = ApiTokenPayload

    def check(self, payload: ApiTokenPayload) -> ValidationResult:
        unavailable = 0
        for base in ZONE_BASE_URLS:
            response = self.request(
                "GET",
                base + "users/me/current-authorization",
                headers={"Authorization": f"Token {payload.api_token}"},
            )
            if response.status_code == 200:
                try:
                    data = response.json()
                except ValueError:
                    continue
                if isinstance(data, list):
                    return self.valid(type="API_TOKEN", zone=base, scopes=data)
            elif classify_status(response.status_code) == ValidationState.FAILED_TO_CHECK:
                unavailable += 1

        if unavailable == len(ZONE_BASE_URLS):
            return self.failed("No Make zone could be reached")
        return self.invalid("Token rejected by every Make zone")


class MakeMcpValidator(HttpValidator):
    name = "make_mcp_token"
    payload_type = McpUrlPayload

    def check(self, payload: McpUrlPayload) -> ValidationResult:
        response = self.request(
            "GET",
            payload.full_url,
            headers={"Accept": "text/event-stream", "Cache-Control": "no-cache"},
            stream=True,
        )
        try:
            status = response.status_code
        finally:
            # Never read the event stream body
            response.close()
        if status == 200:
            return self.valid(type="MCP_TOKEN")
        return self.invalid(f"MCP endpoint returned status {status}")
