# SPDX-License-Identifier: MIT
"""Anthropic AI detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.anthropic import AnthropicValidator

NAME = "anthropic"


class AnthropicFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Anthropic AI"
    pattern = PATTERNS["Anthropic API Key"]
    validator_class = AnthropicValidator
    resource_types = {"ADMIN": "Admin API Key", "USER": "API Key"}


def build(settings):
    return AnthropicFamily.from_settings(settings)
