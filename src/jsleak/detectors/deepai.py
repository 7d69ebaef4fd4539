# SPDX-License-Identifier: MIT
"""DeepAI detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.deepai import DeepAIValidator

NAME = "deepai"


class DeepAIFamily(SingleKeyFamily):
    name = NAME
    secret_type = "DeepAI"
    pattern = PATTERNS["DeepAI API Key"]
    validator_class = DeepAIValidator
    resource_types = {"API_KEY": "API Key"}
    # Keys are UUID-shaped and would always trip the UUID filter
    check_false_positives = False


def build(settings):
    return DeepAIFamily.from_settings(settings)
