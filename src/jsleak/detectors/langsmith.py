# SPDX-License-Identifier: MIT
"""LangSmith detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.langsmith import LangSmithValidator

NAME = "langsmith"


class LangSmithFamily(SingleKeyFamily):
    name = NAME
    secret_type = "LangSmith"
    pattern = PATTERNS["LangSmith API Key"]
    validator_class = LangSmithValidator
    resource_types = {"lsv2_pt": "Personal API Token", "lsv2_sk": "Service Key"}


def build(settings):
    return LangSmithFamily.from_settings(settings)
