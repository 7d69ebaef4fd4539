# SPDX-License-Identifier: MIT
"""OpenAI API key validation against the ``/v1/me`` endpoint."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyPayload
from .core import HttpValidator, ValidationResult, json_body, json_object, json_objects

ME_ENDPOINT = "https://api.openai.com/v1/me"


class OpenAIValidator(HttpValidator):
    name = "openai"
    payload_type = ApiKeyPayload

    def check(self, payload: ApiKeyPayload) -> ValidationResult:
        response = self.request(
            "GET", ME_ENDPOINT, headers={"Authorization": f"Bearer {payload.api_key}"}
        )
        if response.status_code != 200:
            return self.from_status(response)

        data = json_body(response)
        orgs = json_objects(json_object(data, "orgs"), "data")
        metadata = {
            "type": "USER",
            "id": data.get("id"),
            "total_orgs": len(orgs),
            "mfa_enabled": data.get("mfa_flag_enabled"),
        }
        if orgs:
            metadata["description"] = orgs[0].get("description")
            metadata["is_personal"] = orgs[0].get("personal")
        return self.valid(**metadata)
