# SPDX-License-Identifier: MIT
"""Artifactory access token detector; tokens are paired with instance URLs."""
from __future__ import annotations

from typing import List

from jsleak.core.payloads import ApiKeyUrlPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, combinations
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.artifactory import ArtifactoryValidator

NAME = "artifactory"


class ArtifactoryFamily(SecretFamily):
    name = NAME
    secret_type = "Artifactory"
    resource_types = {"ACCESS_TOKEN": "Access Token"}
    validator_class = ArtifactoryValidator

    def extract(self, content: str) -> List[SecretPayload]:
        tokens = self.accepted(PATTERNS["Artifactory Access Token"], content)
        if not tokens:
            return []
        urls = PATTERNS["Artifactory URL"].find_all(content)
        return [ApiKeyUrlPayload(api_key=t, url=u) for t, u in combinations(tokens, urls)]


def build(settings):
    return ArtifactoryFamily.from_settings(settings)
