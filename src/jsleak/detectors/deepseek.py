# SPDX-License-Identifier: MIT
"""DeepSeek detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.deepseek import DeepSeekValidator

NAME = "deepseek"


class DeepSeekFamily(SingleKeyFamily):
    name = NAME
    secret_type = "DeepSeek"
    pattern = PATTERNS["DeepSeek API Key"]
    validator_class = DeepSeekValidator
    resource_types = {"API_KEY": "API Key"}


def build(settings):
    return DeepSeekFamily.from_settings(settings)
