# SPDX-License-Identifier: MIT
"""
Docker registry credential detector.

Finds ``auths`` blocks shaped like a Docker ``config.json`` (JSON or a
JavaScript object literal), takes each registry's credentials from its
``auth`` value or explicit ``username``/``password`` fields, and validates
against the registry.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from jsleak.core.payloads import DockerAuthPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, balanced_block
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.docker import DockerRegistryValidator

logger = logging.getLogger(__name__)

NAME = "docker"

AUTH_ENTROPY_THRESHOLD = 3.0
PASSWORD_ENTROPY_THRESHOLD = 1.0

# Registries used in documentation samples
EXAMPLE_REGISTRIES = frozenset(
    {
        "https://index.docker.io/v1/",
        "registry.hostname.com",
        "registry.example.com:5000",
        "registry2.example.com:5000",
        "your.private.registry.example.com",
    }
)

UNQUOTED_KEY = re.compile(r"([{,]\s*)([a-zA-Z_$][a-zA-Z0-9_$]*)\s*:")
TRAILING_COMMA = re.compile(r",\s*([}\]])")


def parse_object_literal(block: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object or a simple JavaScript object literal."""
    candidates = [block]
    fixed = UNQUOTED_KEY.sub(r'\1"\2":', block.replace("'", '"'))
    candidates.append(TRAILING_COMMA.sub(r"\1", fixed))
    for text in candidates:
        try:
            data = json.loads(text)
        except ValueError:
            continue
        if isinstance(data, dict):
            return data
    return None


def decode_auth(auth: str) -> Optional[Tuple[str, str]]:
    """Split a base64 ``user:password`` auth value."""
    try:
        decoded = base64.b64decode(auth, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep or not username or not password:
        return None
    return username, password


def resolve_credentials(entry: Dict[str, Any]) -> Optional[Tuple[str, str, str]]:
    """
    Return ``(auth, username, password)`` for one ``auths`` entry.

    Explicit ``username``/``password`` fields are used when present; an
    ``auth`` value must then decode to the same pair or the entry is
    rejected. Without explicit fields the credentials come from ``auth``.
    """
    username = entry.get("username")
    password = entry.get("password")
    explicit = isinstance(username, str) and isinstance(password, str) and username and password
    auth = entry.get("auth")
    if auth is not None and not isinstance(auth, str):
        return None

    if auth:
        decoded = decode_auth(auth)
        if decoded is None:
            return None
        if explicit and decoded != (username, password):
            return None
        username, password = decoded
    elif not explicit:
        return None

    built = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    if auth and built != auth:
        return None
    return built, username, password


class DockerFamily(SecretFamily):
    name = NAME
    secret_type = "Docker"
    resource_types = {"REGISTRY": "Docker Registry Credentials"}
    validator_class = DockerRegistryValidator

    def extract(self, content: str) -> List[SecretPayload]:
        payloads: List[SecretPayload] = []
        seen = set()
        for match in PATTERNS["Docker Auths Structure"].regex.finditer(content):
            block = balanced_block(content, match.end() - 1)
            if block is None:
                continue
            auths = parse_object_literal(block)
            if auths is None:
                logger.debug("Unparseable auths block at offset %d", match.start())
                continue
            for payload in self._payloads_from_auths(auths):
                if payload.auth not in seen:
                    seen.add(payload.auth)
                    payloads.append(payload)
        return payloads

    def _payloads_from_auths(self, auths: Dict[str, Any]) -> List[DockerAuthPayload]:
        payloads = []
        for registry, entry in auths.items():
            if registry in EXAMPLE_REGISTRIES or not isinstance(entry, dict):
                continue
            credentials = resolve_credentials(entry)
            if credentials is None:
                continue
            auth, username, password = credentials
            if not self.accept(auth, AUTH_ENTROPY_THRESHOLD):
                continue
            if not self.accept(password, PASSWORD_ENTROPY_THRESHOLD, check_false_positives=False):
                continue
            payloads.append(
                DockerAuthPayload(
                    auth=auth,
                    registry=registry,
                    username=username,
                    password=password,
                    email=str(entry.get("email") or ""),
                )
            )
        return payloads

    def attribution_texts(self, payload: DockerAuthPayload) -> List[str]:
        # Entries with explicit fields carry no auth value in the content
        return [payload.auth, payload.password]


def build(settings):
    return DockerFamily.from_settings(settings)
