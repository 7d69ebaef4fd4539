# SPDX-License-Identifier: MIT
"""
Tagged secret payloads.

Each secret family stores its credential as exactly one payload type. The
type is chosen when the occurrence is created and persisted together with
an explicit ``kind`` tag, so a stored payload is always decoded through the
registry below and never re-inferred from the keys it happens to carry.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, List, Type

_PAYLOAD_TYPES: Dict[str, Type["SecretPayload"]] = {}


def register_payload(cls):
    """Class decorator adding a payload type to the decoding registry."""
    if not cls.kind:
        raise ValueError(f"Payload type {cls.__name__} has no kind")
    if cls.kind in _PAYLOAD_TYPES:
        raise ValueError(f"Payload kind {cls.kind} already registered")
    _PAYLOAD_TYPES[cls.kind] = cls
    return cls


@dataclass(frozen=True)
class SecretPayload:
    """Structured representation of one credential."""

    kind: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            data[f.name] = getattr(self, f.name)
        return data

    def values(self) -> List[str]:
        """All non-empty string field values, in declaration order."""
        result = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str) and value:
                result.append(value)
        return result

    def secret_values(self) -> List[str]:
        """Values that identify the credential itself (used for dedup)."""
        return self.values()

    def snippet(self) -> str:
        """Minimal JSON rendering used when no better source is known."""
        data = self.to_dict()
        data.pop("kind")
        return json.dumps(data)


def payload_from_dict(data: Dict[str, Any]) -> SecretPayload:
    """Decode a persisted payload using its ``kind`` tag."""
    if not isinstance(data, dict):
        raise ValueError("Payload must be a mapping")
    kind = data.get("kind")
    cls = _PAYLOAD_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown payload kind: {kind!r}")

    kwargs = {}
    for f in fields(cls):
        if f.name in data:
            kwargs[f.name] = data[f.name]
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ValueError(f"Malformed {kind} payload: {e}") from e


def registered_kinds() -> List[str]:
    return sorted(_PAYLOAD_TYPES)


@register_payload
@dataclass(frozen=True)
class ApiKeyPayload(SecretPayload):
    kind: ClassVar[str] = "api_key"

    api_key: str


@register_payload
@dataclass(frozen=True)
class ApiKeyUrlPayload(SecretPayload):
    """API key bound to a customer-specific host (Artifactory, Azure)."""

    kind: ClassVar[str] = "api_key_url"

    api_key: str
    url: str

    def secret_values(self) -> List[str]:
        return [self.api_key]


@register_payload
@dataclass(frozen=True)
class ApiTokenPayload(SecretPayload):
    kind: ClassVar[str] = "api_token"

    api_token: str


@register_payload
@dataclass(frozen=True)
class AwsAccessKeyPayload(SecretPayload):
    kind: ClassVar[str] = "aws_access_key"

    access_key_id: str
    secret_key_id: str


@register_payload
@dataclass(frozen=True)
class AwsSessionKeyPayload(SecretPayload):
    kind: ClassVar[str] = "aws_session_key"

    access_key_id: str
    secret_key_id: str
    session_key_id: str


@register_payload
@dataclass(frozen=True)
class DockerAuthPayload(SecretPayload):
    kind: ClassVar[str] = "docker_auth"

    auth: str
    registry: str
    username: str
    password: str
    email: str = ""

    def secret_values(self) -> List[str]:
        return [self.auth]

    def auth_config(self) -> str:
        """Render as a Docker ``config.json`` style auths document."""
        return json.dumps(
            {
                "auths": {
                    self.registry: {
                        "auth": self.auth,
                        "username": self.username,
                        "password": self.password,
                        "email": self.email,
                    }
                }
            }
        )

    def snippet(self) -> str:
        return self.auth_config()


@register_payload
@dataclass(frozen=True)
class GcpServiceAccountPayload(SecretPayload):
    """Service-account key; ``service_account_key`` holds the full JSON."""

    kind: ClassVar[str] = "gcp_service_account"

    service_account_key: str
    project_id: str = ""
    private_key_id: str = ""
    client_email: str = ""

    def secret_values(self) -> List[str]:
        return [self.service_account_key]

    def snippet(self) -> str:
        return self.service_account_key


@register_payload
@dataclass(frozen=True)
class GeminiPayload(SecretPayload):
    kind: ClassVar[str] = "gemini"

    api_key: str
    api_secret: str


@register_payload
@dataclass(frozen=True)
class McpUrlPayload(SecretPayload):
    kind: ClassVar[str] = "mcp_url"

    full_url: str
    mcp_token: str = ""

    def secret_values(self) -> List[str]:
        return [self.full_url]


@register_payload
@dataclass(frozen=True)
class OAuthClientPayload(SecretPayload):
    kind: ClassVar[str] = "oauth_client"

    client_id: str
    client_secret: str


@register_payload
@dataclass(frozen=True)
class SlackTokenPayload(SecretPayload):
    kind: ClassVar[str] = "slack_token"

    token: str
    token_type: str

    def secret_values(self) -> List[str]:
        return [self.token]


@register_payload
@dataclass(frozen=True)
class BotTokenPayload(SecretPayload):
    kind: ClassVar[str] = "bot_token"

    bot_token: str
