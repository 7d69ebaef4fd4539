# SPDX-License-Identifier: MIT
"""OpenAI detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.openai import OpenAIValidator

NAME = "openai"


class OpenAIFamily(SingleKeyFamily):
    name = NAME
    secret_type = "OpenAI"
    pattern = PATTERNS["OpenAI API Key"]
    validator_class = OpenAIValidator
    resource_types = {"USER": "User API Key"}


def build(settings):
    return OpenAIFamily.from_settings(settings)
