# SPDX-License-Identifier: MIT
"""Shannon entropy of candidate strings."""
from __future__ import annotations

import math
from collections import Counter


def calculate_shannon_entropy(value: str) -> float:
    """
    Return ``-sum(p(c) * log2(p(c)))`` over the characters of ``value``.

    The empty string has entropy 0.
    """
    if not value:
        return 0.0
    length = len(value)
    entropy = 0.0
    for count in Counter(value).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


def meets_threshold(value: str, threshold: float) -> bool:
    return calculate_shannon_entropy(value) >= threshold
