# SPDX-License-Identifier: MIT
"""Groq detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.groq import GroqValidator

NAME = "groq"


class GroqFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Groq"
    pattern = PATTERNS["Groq API Key"]
    validator_class = GroqValidator
    resource_types = {"API_KEY": "API Key"}


def build(settings):
    return GroqFamily.from_settings(settings)
