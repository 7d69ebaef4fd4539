# SPDX-License-Identifier: MIT
"""
Central redaction utilities for jsleak.

Console output and log lines pass secrets through these helpers so that
plaintext credentials never leave the findings store.
"""

from __future__ import annotations
from typing import Any, Dict

from jsleak.core.payloads import SecretPayload, payload_from_dict


# Payload fields that identify a credential without granting access
PUBLIC_FIELDS = frozenset(
    {"url", "registry", "username", "email", "token_type", "project_id", "client_email", "private_key_id"}
)


def redact_secret(secret: str) -> str:
    """
    Redact secret showing first 6 + last 4 characters.

    For secrets <= 10 characters, shows only ****.
    For secrets > 10 characters, shows first6****last4.
    """
    if len(secret) <= 10:
        return "****"
    return secret[:6] + "****" + secret[-4:]


def redact_payload(payload: SecretPayload) -> Dict[str, Any]:
    """Return the payload as a dict with every secret value redacted."""
    data = payload.to_dict()
    for key, value in data.items():
        if key == "kind" or key in PUBLIC_FIELDS or not isinstance(value, str) or not value:
            continue
        data[key] = redact_secret(value)
    return data


def redact_occurrence(occurrence: Dict[str, Any]) -> Dict[str, Any]:
    """Redact one serialized occurrence, dropping its source content."""
    occurrence = dict(occurrence)
    if isinstance(occurrence.get("secretValue"), dict):
        occurrence["secretValue"] = redact_payload(payload_from_dict(occurrence["secretValue"]))
    if isinstance(occurrence.get("sourceContent"), dict):
        source = dict(occurrence["sourceContent"])
        source.pop("content", None)
        occurrence["sourceContent"] = source
    return occurrence


def redact_finding(finding: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact secrets in a serialized finding.

    Payloads are redacted field by field; original source content is
    dropped since it contains the secret verbatim.
    """
    redacted = dict(finding)
    if isinstance(redacted.get("secretValue"), dict):
        redacted["secretValue"] = {
            key: redact_payload(payload_from_dict(value))
            for key, value in redacted["secretValue"].items()
        }
    if "occurrences" in redacted:
        redacted["occurrences"] = [redact_occurrence(o) for o in redacted["occurrences"]]
    return redacted
