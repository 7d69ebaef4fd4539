# SPDX-License-Identifier: MIT
"""
Google Cloud service-account key detector.

Keys are rarely embedded verbatim; bundlers reformat them into object
literals. Each field is therefore extracted with its own pattern from the
object surrounding a ``type: "service_account"`` marker, and a canonical
credentials JSON is rebuilt from the fields.
"""
from __future__ import annotations

import json
import re
from typing import Dict, List, Optional

from jsleak.core.payloads import GcpServiceAccountPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, balanced_block
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.gcp import GCP_RESOURCE_TYPES, GcpServiceAccountValidator

NAME = "gcp"

DEFAULT_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"

FIELDS = (
    "type",
    "project_id",
    "private_key_id",
    "private_key",
    "client_email",
    "client_id",
    "auth_uri",
    "token_uri",
    "auth_provider_x509_cert_url",
    "client_x509_cert_url",
)

FIELD_PATTERNS = {
    name: re.compile(r"(?<![\w$])[\"']?" + name + r"[\"']?\s*:\s*[\"']([^\"']+)[\"']")
    for name in FIELDS
}

# Fields located in the content to attribute a key to its source
ATTRIBUTION_FIELDS = ("project_id", "private_key_id", "client_email", "client_id")


def enclosing_object(content: str, position: int) -> Optional[str]:
    """The innermost ``{...}`` block containing ``position``."""
    start = content.rfind("{", 0, position)
    while start != -1:
        block = balanced_block(content, start)
        if block is not None and start + len(block) > position:
            return block
        start = content.rfind("{", 0, start)
    return None


def extract_fields(block: str) -> Dict[str, str]:
    fields = {}
    for name, pattern in FIELD_PATTERNS.items():
        match = pattern.search(block)
        if match:
            fields[name] = match.group(1)
    if "private_key" in fields:
        fields["private_key"] = fields["private_key"].replace("\\n", "\n")
    fields.setdefault("auth_uri", DEFAULT_AUTH_URI)
    fields.setdefault("token_uri", DEFAULT_TOKEN_URI)
    return fields


class GcpFamily(SecretFamily):
    name = NAME
    secret_type = "Google Cloud Platform"
    resource_types = GCP_RESOURCE_TYPES
    validator_class = GcpServiceAccountValidator

    def extract(self, content: str) -> List[SecretPayload]:
        payloads: List[SecretPayload] = []
        seen = set()
        for match in PATTERNS["GCP Service Account Key"].regex.finditer(content):
            block = enclosing_object(content, match.start())
            if block is None:
                continue
            fields = extract_fields(block)
            if "private_key" not in fields or "client_email" not in fields:
                continue
            credentials = json.dumps({name: fields[name] for name in FIELDS if name in fields})
            if credentials in seen or not self.accept(credentials, 0.0):
                continue
            seen.add(credentials)
            payloads.append(
                GcpServiceAccountPayload(
                    service_account_key=credentials,
                    project_id=fields.get("project_id", ""),
                    private_key_id=fields.get("private_key_id", ""),
                    client_email=fields.get("client_email", ""),
                )
            )
        return payloads

    def attribution_texts(self, payload: GcpServiceAccountPayload) -> List[str]:
        fields = json.loads(payload.service_account_key)
        return [fields[name] for name in ATTRIBUTION_FIELDS if fields.get(name)]


def build(settings):
    return GcpFamily.from_settings(settings)
