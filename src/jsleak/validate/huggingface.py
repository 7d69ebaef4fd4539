# SPDX-License-Identifier: MIT
"""Hugging Face token validation via ``whoami-v2``."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult, json_body, json_object, json_objects

WHOAMI_ENDPOINT = "https://huggingface.co/api/whoami-v2"


class HuggingFaceValidator(HttpValidator):
    name = "huggingface"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET", WHOAMI_ENDPOINT, headers={"Authorization": f"Bearer {payload.api_key}"}
        )
        if not 200 <= response.status_code < 300:
            return self.from_status(response)

        data = json_body(response)
        auth = json_object(data, "auth")
        token = json_object(auth, "accessToken")
        key_type = "USER"
        if token.get("displayName") and token.get("role"):
            token_info = f"{token['displayName']} ({token['role']})"
        elif token.get("displayName") or token.get("role"):
            token_info = token.get("displayName") or f"({token['role']})"
        elif auth.get("type"):
            token_info = auth["type"]
            key_type = "ORGANIZATION"
        else:
            token_info = "Unknown Token Type"

        return self.valid(
            type=key_type,
            username=data.get("name"),
            email=data.get("email"),
            token_info=token_info,
            organizations=[f"{o.get('name')}:{o.get('roleInOrg')}" for o in json_objects(data, "orgs")],
        )
