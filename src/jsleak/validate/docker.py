# SPDX-License-Identifier: MIT
"""
Docker registry credential validation.

The registry's ``/v2/`` endpoint is called with Basic auth. Registries
that delegate to a token service answer 401 with a Bearer challenge; the
credentials are then presented to that token service instead.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

from jsleak.core.payloads import DockerAuthPayload
from .core import HttpValidator, ValidationResult

CHALLENGE_PARAM = re.compile(r'(\w+)="([^"]*)"')


def registry_api_url(registry: str) -> str:
    """``/v2/`` endpoint for a registry name as found in an auths block."""
    url = registry.strip()
    if url.rstrip("/").endswith("docker.io/v1"):
        url = "https://index.docker.io"
    elif url in ("docker.io", "https://docker.io"):
        url = "https://index.docker.io"
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    url = re.sub(r"/v[12]/?$", "", url.rstrip("/"))
    return url + "/v2/"


def parse_bearer_challenge(header: str) -> Optional[Dict[str, str]]:
    """Parameters of a ``Bearer realm="...",service="..."`` challenge."""
    if not header or not header.lower().startswith("bearer "):
        return None
    params = dict(CHALLENGE_PARAM.findall(header))
    return params if params.get("realm") else None


class DockerRegistryValidator(HttpValidator):
    name = "docker"
    payload_type = DockerAuthPayload

    def check(self, payload: DockerAuthPayload) -> ValidationResult:
        credentials = (payload.username, payload.password)
        response = self.request("GET", registry_api_url(payload.registry), auth=credentials)
        if response.status_code == 200:
            return self.valid(type="REGISTRY", registry=payload.registry, username=payload.username)
        if response.status_code != 401:
            return self.from_status(response)

        challenge = parse_bearer_challenge(response.headers.get("Www-Authenticate", ""))
        if challenge is None:
            return self.invalid("Registry rejected the credentials")

        params = {"account": payload.username}
        if challenge.get("service"):
            params["service"] = challenge["service"]
        token_response = self.request("GET", challenge["realm"], params=params, auth=credentials)
        if token_response.status_code == 200:
            return self.valid(type="REGISTRY", registry=payload.registry, username=payload.username)
        return self.from_status(token_response)
