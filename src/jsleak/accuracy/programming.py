# SPDX-License-Identifier: MIT
"""
Identifier heuristics.

Loose key patterns (plain alphanumeric runs) also match identifiers in
minified code. These expressions recognise common naming conventions so
such matches can be dropped before validation.
"""
from __future__ import annotations

import re

_SUFFIXES = (
    "Buffer|Parser|Handler|Manager|Service|Config|Helper|Util|Utils|Factory|Builder|"
    "Provider|Controller|Processor|Generator|Validator|Converter|Transformer|Formatter|"
    "Scanner|Monitor|Logger|Writer|Reader"
)

_PREFIXES = (
    "get|set|is|has|can|should|will|did|create|update|delete|add|remove|find|search|"
    "filter|sort|parse|format|validate|process|handle|manage|execute|run|start|stop|"
    "init|destroy"
)

PROGRAMMING_PATTERNS = [
    # PascalCase
    re.compile(r"^[A-Z][a-z]+(?:[A-Z][a-z]+)+$"),
    # camelCase
    re.compile(r"^[a-z]+(?:[A-Z][a-z]+)+$"),
    # embedded acronym: setHTTPSProxy, ParseXMLDocument
    re.compile(r"^[a-z]+[A-Z]{3,}[A-Za-z]+$|^[A-Z][a-z]+[A-Z]{3,}[A-Za-z]*$"),
    # numbered identifiers: handler2Buffer
    re.compile(r"^[A-Za-z]+\d{1,3}[A-Za-z]+$"),
    # CONSTANT_CASE
    re.compile(r"^[A-Z]{2,}(?:_[A-Z]{2,})+$"),
    # snake_case
    re.compile(r"^[a-z]{2,}(?:_[a-z]{2,})+$"),
    # CONSTANT_CASE with numbered parts
    re.compile(r"^[A-Z]{2,}(?:_[A-Z]{2,}|_[A-Z]*\d+[A-Z]*)+$"),
    re.compile(r"^[A-Z][a-z]{2,}(?:" + _SUFFIXES + r")$", re.IGNORECASE),
    re.compile(r"^(?:" + _PREFIXES + r")[A-Z][a-z]{2,}.*$"),
    # file-type words run together: configjsonparser
    re.compile(
        r"^[a-z]{3,}(?:html|json|xml|css|jsx|tsx|php|java|cpp|hpp|swift|scala|yaml|toml|conf|properties)[a-z]+$",
        re.IGNORECASE,
    ),
    # header names: x-amz-server-side-encryption
    re.compile(r"^(?:amz|aws|fwd|header|x)(?:-[a-z0-9]+){3,}-?$"),
    re.compile(r"^[a-z]+(?:-[a-z]+){4,}-?$"),
]


def is_programming_pattern(text: str) -> bool:
    """Whether ``text`` looks like a code identifier rather than a key."""
    return any(pattern.match(text) for pattern in PROGRAMMING_PATTERNS)
