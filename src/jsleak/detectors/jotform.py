# SPDX-License-Identifier: MIT
"""JotForm detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.jotform import JotFormValidator

NAME = "jotform"


class JotFormFamily(SingleKeyFamily):
    name = NAME
    secret_type = "JotForm"
    pattern = PATTERNS["JotForm API Key"]
    validator_class = JotFormValidator
    resource_types = {"API_KEY": "API Key"}


def build(settings):
    return JotFormFamily.from_settings(settings)
