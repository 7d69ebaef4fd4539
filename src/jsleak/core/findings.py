"""Finding data structures and utilities for jsleak."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from jsleak.core.payloads import SecretPayload, payload_from_dict

NO_LINE = -1


class Validity(str, Enum):
    """Validity of a finding as last reported by its validator."""

    UNKNOWN = "unknown"
    VALID = "valid"
    INVALID = "invalid"
    FAILED_TO_CHECK = "failed_to_check"


@dataclass(frozen=True)
class SourceContent:
    """Where a secret was found, ideally in the original (pre-bundle) source."""

    content: str
    filename: str
    start_line: int = NO_LINE
    end_line: int = NO_LINE
    exact_match_lines: Tuple[int, ...] = (NO_LINE,)

    @classmethod
    def unattributed(cls, filename: str, content: str) -> "SourceContent":
        return cls(content=content, filename=filename)

    @property
    def is_attributed(self) -> bool:
        return self.start_line != NO_LINE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "contentFilename": self.filename,
            "contentStartLineNum": self.start_line,
            "contentEndLineNum": self.end_line,
            "exactMatchNumbers": list(self.exact_match_lines),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceContent":
        return cls(
            content=data.get("content") or "",
            filename=data.get("contentFilename", ""),
            start_line=data.get("contentStartLineNum", NO_LINE),
            end_line=data.get("contentEndLineNum", NO_LINE),
            exact_match_lines=tuple(data.get("exactMatchNumbers", [NO_LINE])),
        )


@dataclass(frozen=True)
class Occurrence:
    """One sighting of a secret in a specific piece of delivered content."""

    secret_type: str
    fingerprint: str
    secret_value: SecretPayload
    file_path: str
    url: str
    source_content: SourceContent
    type: Optional[str] = None
    validity: Optional[Validity] = None

    @property
    def occurrence_id(self) -> str:
        """Stable id derived from the secret and where it was seen."""
        h = hashlib.sha256()
        for part in (
            self.fingerprint,
            self.url,
            self.file_path,
            self.source_content.filename,
            ",".join(str(n) for n in self.source_content.exact_match_lines),
        ):
            h.update(part.encode("utf-8"))
            h.update(b"\x00")
        return h.hexdigest()[:16]

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "secretType": self.secret_type,
            "fingerprint": self.fingerprint,
            "secretValue": self.secret_value.to_dict(),
            "filePath": self.file_path,
            "url": self.url,
            "sourceContent": self.source_content.to_dict(),
        }
        if self.type:
            result["type"] = self.type
        if self.validity:
            result["validity"] = self.validity.value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Occurrence":
        validity = data.get("validity")
        return cls(
            secret_type=data["secretType"],
            fingerprint=data["fingerprint"],
            secret_value=payload_from_dict(data["secretValue"]),
            file_path=data.get("filePath", ""),
            url=data.get("url", ""),
            source_content=SourceContent.from_dict(data.get("sourceContent", {})),
            type=data.get("type"),
            validity=Validity(validity) if validity else None,
        )


@dataclass
class Finding:
    """The durable, deduplicated record of a secret, keyed by fingerprint."""

    fingerprint: str
    secret_type: str
    secret_value: Dict[str, SecretPayload]
    validity: Validity = Validity.UNKNOWN
    discovered_at: Optional[str] = None
    validated_at: Optional[str] = None
    occurrences: List[Occurrence] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def num_occurrences(self) -> int:
        return len(self.occurrences)

    @classmethod
    def from_occurrence(cls, occurrence: Occurrence, timestamp: str) -> "Finding":
        """Create a Finding from its first observed occurrence."""
        return cls(
            fingerprint=occurrence.fingerprint,
            secret_type=occurrence.secret_type,
            secret_value={occurrence.occurrence_id: occurrence.secret_value},
            validity=occurrence.validity or Validity.UNKNOWN,
            discovered_at=timestamp,
            validated_at=timestamp if occurrence.validity else None,
            occurrences=[occurrence],
        )

    def add_occurrence(self, occurrence: Occurrence) -> bool:
        """
        Append a new sighting, keeping all earlier ones.

        Returns False (and changes nothing) when the same sighting is
        already recorded.
        """
        if occurrence.fingerprint != self.fingerprint:
            raise ValueError("Occurrence fingerprint does not match finding")
        occurrence_id = occurrence.occurrence_id
        if occurrence_id in self.secret_value:
            return False
        self.secret_value[occurrence_id] = occurrence.secret_value
        self.occurrences.append(occurrence)
        return True

    def payloads(self) -> List[SecretPayload]:
        return list(self.secret_value.values())

    def contains_value(self, value: str) -> bool:
        return any(value in payload.secret_values() for payload in self.secret_value.values())

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "fingerprint": self.fingerprint,
            "secretType": self.secret_type,
            "secretValue": {k: v.to_dict() for k, v in self.secret_value.items()},
            "validity": self.validity.value,
            "discoveredAt": self.discovered_at,
            "validatedAt": self.validated_at,
            "numOccurrences": self.num_occurrences,
            "occurrences": [o.to_dict() for o in self.occurrences],
        }
        if self.error:
            result["error"] = self.error
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            fingerprint=data["fingerprint"],
            secret_type=data["secretType"],
            secret_value={
                k: payload_from_dict(v) for k, v in data.get("secretValue", {}).items()
            },
            validity=Validity(data.get("validity", Validity.UNKNOWN.value)),
            discovered_at=data.get("discoveredAt"),
            validated_at=data.get("validatedAt"),
            occurrences=[Occurrence.from_dict(o) for o in data.get("occurrences", [])],
            error=data.get("error"),
        )
