# SPDX-License-Identifier: MIT
"""
Google Cloud service-account key validation.

The key is checked structurally first (required fields, key material,
client email). Only a well-formed key is exchanged at the OAuth2 token
endpoint using a self-signed RS256 JWT bearer assertion.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Optional

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from jsleak.core.payloads import GcpServiceAccountPayload
from .core import HttpValidator, ValidationResult, ValidationState, classify_status, json_body

logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
SCOPE = "https://www.googleapis.com/auth/cloud-platform"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME = 3600

REQUIRED_FIELDS = (
    "type",
    "project_id",
    "private_key_id",
    "private_key",
    "client_email",
    "auth_provider_x509_cert_url",
)

# Published in documentation samples; never a real credential.
DENYLISTED_EMAILS = frozenset(
    {"image-pulling@authenticated-image-pulling.iam.gserviceaccount.com"}
)

GCP_RESOURCE_TYPES = {"SERVICE_ACCOUNT": "Service Account Key"}


class MalformedKeyError(ValueError):
    """Raised when a service-account key fails structural checks."""


def parse_service_account_key(raw: str) -> Dict[str, Any]:
    """
    Parse and structurally check a service-account key JSON document.

    Raises:
        MalformedKeyError: If anything required is missing or malformed
    """
    try:
        key_info = json.loads(raw)
    except ValueError as e:
        raise MalformedKeyError(f"Invalid JSON: {e}") from e
    if not isinstance(key_info, dict):
        raise MalformedKeyError("Key must be a JSON object")

    missing = [f for f in REQUIRED_FIELDS if not key_info.get(f)]
    if missing:
        raise MalformedKeyError(f"Missing required fields: {', '.join(missing)}")

    if key_info["type"] != "service_account":
        raise MalformedKeyError(f"Unexpected key type: {key_info['type']}")

    email = key_info["client_email"]
    if "@" not in email or "." not in email:
        raise MalformedKeyError("Malformed client_email")

    private_key = key_info["private_key"].replace("\\n", "\n")
    if "BEGIN PRIVATE KEY" not in private_key or "END PRIVATE KEY" not in private_key:
        raise MalformedKeyError("private_key is not a PKCS8 PEM block")
    key_info["private_key"] = private_key
    return key_info


def load_private_key(pem: str) -> rsa.RSAPrivateKey:
    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError) as e:
        raise MalformedKeyError(f"Unreadable private key: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise MalformedKeyError("private_key is not an RSA key")
    return key


def build_assertion(
    key_info: Dict[str, Any],
    private_key: rsa.RSAPrivateKey,
    issued_at: Optional[int] = None,
) -> str:
    """Sign the JWT-bearer assertion for ``key_info``."""
    iat = int(issued_at if issued_at is not None else time.time())
    claims = {
        "iss": key_info["client_email"],
        "scope": SCOPE,
        "aud": TOKEN_ENDPOINT,
        "iat": iat,
        "exp": iat + ASSERTION_LIFETIME,
    }
    return jwt.encode(claims, private_key, algorithm="RS256", headers={"typ": "JWT"})


class GcpServiceAccountValidator(HttpValidator):
    """Exchanges a signed assertion for an access token."""

    name = "gcp_service_account"
    rate_limit_qps = 0.5
    payload_type = GcpServiceAccountPayload

    def __init__(self, *args, clock: Callable[[], float] = time.time, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock

    def validate(self, payload):
        # Structural checks never need the network
        if isinstance(payload, GcpServiceAccountPayload):
            try:
                key_info = parse_service_account_key(payload.service_account_key)
                if key_info["client_email"] in DENYLISTED_EMAILS:
                    return self.invalid("Known example service account")
                load_private_key(key_info["private_key"])
            except MalformedKeyError as e:
                return self.invalid(str(e))
        return super().validate(payload)

    def check(self, payload: GcpServiceAccountPayload) -> ValidationResult:
        key_info = parse_service_account_key(payload.service_account_key)
        private_key = load_private_key(key_info["private_key"])

        assertion = build_assertion(key_info, private_key, issued_at=int(self.clock()))
        response = self.request(
            "POST",
            TOKEN_ENDPOINT,
            data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
        )
        body = json_body(response)

        if response.status_code == 200 and body.get("access_token"):
            return self.valid(
                "Service account key exchanged for an access token",
                type="SERVICE_ACCOUNT",
                project_id=key_info.get("project_id", ""),
                client_email=key_info.get("client_email", ""),
            )
        if response.status_code == 200:
            return self.invalid("Token endpoint returned no access token")

        error = body.get("error_description") or body.get("error") or f"HTTP {response.status_code}"
        if classify_status(response.status_code) == ValidationState.FAILED_TO_CHECK:
            return self.failed(f"Token endpoint unavailable: {error}")
        return self.invalid(f"Token exchange rejected: {error}")
