# SPDX-License-Identifier: MIT
"""Azure OpenAI key validation against the resource endpoint."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyUrlPayload
from .artifactory import normalize_base_url
from .core import HttpValidator, ValidationResult, json_body, json_objects

API_VERSION = "2024-02-01"


class AzureOpenAIValidator(HttpValidator):
    name = "azure_openai"
    payload_type = ApiKeyUrlPayload

    def check(self, payload: ApiKeyUrlPayload) -> ValidationResult:
        if not payload.url:
            return self.invalid("No Azure OpenAI endpoint to validate against")
        endpoint = normalize_base_url(payload.url) + f"/openai/models?api-version={API_VERSION}"
        response = self.request("GET", endpoint, headers={"Api-Key": payload.api_key})
        if response.status_code != 200:
            return self.from_status(response)
        data = json_body(response)
        if data.get("object") == "list" or "data" in data:
            return self.valid(type="API_KEY", models=len(json_objects(data, "data")))
        return self.invalid("Unexpected response body")
