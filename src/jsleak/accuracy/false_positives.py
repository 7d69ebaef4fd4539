# SPDX-License-Identifier: MIT
"""
Known false-positive filter.

Checks run in a fixed priority order and stop at the first hit, so the
verdict and reason for a candidate only depend on the candidate and the
term set.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

DEFAULT_FALSE_POSITIVE_TERMS: Tuple[str, ...] = (
    "example",
    "xxxxxx",
    "aaaaaa",
    "abcde",
    "00000",
    "sample",
    "*****",
)

# Lowercase only: uppercase 40-char hex is left to the other checks.
HASH_PATTERN = re.compile(r"^[a-f0-9]{40}$")

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def is_valid_utf8(candidate: str) -> bool:
    """False when the string holds lone surrogates or other unencodable text."""
    try:
        candidate.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def looks_like_hash(candidate: str) -> bool:
    return HASH_PATTERN.match(candidate) is not None


def looks_like_uuid(candidate: str) -> bool:
    return UUID_PATTERN.match(candidate) is not None


def is_known_false_positive(
    candidate: str, terms: Optional[Iterable[str]] = None
) -> Tuple[bool, str]:
    """
    Decide whether a candidate is an obvious false positive.

    Args:
        candidate: Matched text
        terms: Replacement for the default term set

    Returns:
        ``(is_false_positive, reason)``; reason is ``""`` when accepted
    """
    if not is_valid_utf8(candidate):
        return True, "invalid utf8"

    term_list = tuple(t.lower() for t in (DEFAULT_FALSE_POSITIVE_TERMS if terms is None else terms))
    lower = candidate.lower()

    if lower in term_list:
        return True, f"matches term: {lower}"

    for term in term_list:
        if term and term in lower:
            return True, f"contains term: {term}"

    if looks_like_hash(candidate):
        return True, "matches hash pattern"

    if looks_like_uuid(candidate):
        return True, "matches UUID pattern"

    return False, ""
