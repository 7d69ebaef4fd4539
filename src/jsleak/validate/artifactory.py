# SPDX-License-Identifier: MIT
"""Artifactory access token validation against the instance it belongs to."""
from __future__ import annotations

from jsleak.core.payloads import ApiKeyUrlPayload
from .core import HttpValidator, ValidationResult


def normalize_base_url(url: str) -> str:
    url = url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


class ArtifactoryValidator(HttpValidator):
    name = "artifactory"
    payload_type = ApiKeyUrlPayload

    def check(self, payload: ApiKeyUrlPayload) -> ValidationResult:
        if not payload.url:
            return self.invalid("No Artifactory URL to validate against")
        endpoint = normalize_base_url(payload.url) + "/artifactory/api/storageinfo"
        response = self.request("GET", endpoint, headers={"X-JFrog-Art-Api": payload.api_key})
        return self.from_status(response, type="ACCESS_TOKEN")
