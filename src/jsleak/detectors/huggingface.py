# SPDX-License-Identifier: MIT
"""Hugging Face detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.huggingface import HuggingFaceValidator

NAME = "huggingface"


class HuggingFaceFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Hugging Face"
    pattern = PATTERNS["Hugging Face Access Token"]
    validator_class = HuggingFaceValidator
    resource_types = {"USER": "User Access Token", "ORGANIZATION": "Organization API Token"}


def build(settings):
    return HuggingFaceFamily.from_settings(settings)
