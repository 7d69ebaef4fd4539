# SPDX-License-Identifier: MIT
"""
Secret family building blocks.

A family bundles what the generic detection pipeline needs to know about
one kind of credential: how to extract candidate payloads from content,
which validator confirms them, which fingerprint algorithm identifies
them, and how to label the validated resource.
"""
from __future__ import annotations

import itertools
import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests

from jsleak.accuracy.entropy import meets_threshold
from jsleak.accuracy.false_positives import is_known_false_positive
from jsleak.accuracy.programming import is_programming_pattern
from jsleak.core.fingerprint import DEFAULT_ALGORITHM
from jsleak.core.payloads import ApiKeyPayload, SecretPayload
from jsleak.validate.core import DEFAULT_TIMEOUT, ValidationResult, Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pattern:
    """Matching rule for one secret component."""

    name: str
    family_name: str
    regex: re.Pattern
    entropy_threshold: float = 0.0

    def find_all(self, content: str) -> List[str]:
        """
        All non-overlapping matches, deduplicated in first-seen order.
        """
        seen = set()
        values = []
        for match in self.regex.finditer(content):
            value = next((g for g in match.groups() if g), None) or match.group(0)
            if value not in seen:
                seen.add(value)
                values.append(value)
        return values


@dataclass
class DetectorSettings:
    """Runtime knobs shared by every family."""

    timeout: float = DEFAULT_TIMEOUT
    allow_network: bool = True
    rate_limit: bool = True
    false_positive_terms: Optional[Tuple[str, ...]] = None
    session: Optional[requests.Session] = None

    def validator_kwargs(self) -> Dict[str, Any]:
        return {
            "session": self.session,
            "timeout": self.timeout,
            "allow_network": self.allow_network,
            "rate_limit": self.rate_limit,
        }


class SecretFamily(ABC):
    """Capability set for one kind of secret."""

    name = ""
    secret_type = ""
    fingerprint_algorithm = DEFAULT_ALGORITHM
    resource_types: Dict[str, str] = {}
    validator_class: Optional[type] = None

    def __init__(self, validator: Validator, false_positive_terms: Optional[Iterable[str]] = None):
        self.validator = validator
        self.false_positive_terms = (
            tuple(false_positive_terms) if false_positive_terms is not None else None
        )

    @classmethod
    def from_settings(cls, settings: DetectorSettings) -> "SecretFamily":
        """Build the family with its default validator."""
        validator = cls.validator_class(**settings.validator_kwargs())
        return cls(validator, settings.false_positive_terms)

    @abstractmethod
    def extract(self, content: str) -> List[SecretPayload]:
        """Candidate payloads that passed the cheap filters."""

    def dedup_key(self, payload: SecretPayload) -> str:
        """Value checked against stored findings before validating."""
        return payload.secret_values()[0]

    def attribution_texts(self, payload: SecretPayload) -> List[str]:
        """Texts located in the content for source attribution."""
        return payload.values()

    def resource_type(self, payload: SecretPayload, result: ValidationResult) -> Optional[str]:
        key = result.resource_type
        if key is None:
            return None
        return self.resource_types.get(key, key)

    def accept(
        self,
        value: str,
        threshold: float,
        check_false_positives: bool = True,
        check_programming: bool = False,
    ) -> bool:
        """Entropy first, then the false-positive and identifier filters."""
        if not meets_threshold(value, threshold):
            return False
        if check_false_positives:
            is_fp, reason = is_known_false_positive(value, self.false_positive_terms)
            if is_fp:
                logger.debug("%s candidate rejected: %s", self.name, reason)
                return False
        if check_programming and is_programming_pattern(value):
            return False
        return True

    def accepted(self, pattern: Pattern, content: str, **checks) -> List[str]:
        return [v for v in pattern.find_all(content) if self.accept(v, pattern.entropy_threshold, **checks)]


class SingleKeyFamily(SecretFamily):
    """Family whose secret is one matched string."""

    pattern: Pattern = None
    check_false_positives = True
    check_programming_patterns = False

    def build_payload(self, value: str) -> SecretPayload:
        return ApiKeyPayload(api_key=value)

    def extract(self, content: str) -> List[SecretPayload]:
        values = self.accepted(
            self.pattern,
            content,
            check_false_positives=self.check_false_positives,
            check_programming=self.check_programming_patterns,
        )
        return [self.build_payload(v) for v in values]


def combinations(*groups: List[str]) -> List[Tuple[str, ...]]:
    """Every pairing of one value from each group, skipping reused values."""
    return [combo for combo in itertools.product(*groups) if len(set(combo)) == len(combo)]


def balanced_block(content: str, start: int) -> Optional[str]:
    """
    The ``{...}`` block opening at ``content[start]``.

    Braces inside quoted strings are ignored. Returns None when the block
    never closes.
    """
    if start >= len(content) or content[start] != "{":
        return None
    depth = 0
    quote = None
    escaped = False
    for i in range(start, len(content)):
        char = content[i]
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in "\"'`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return content[start : i + 1]
    return None
