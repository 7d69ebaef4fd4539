# SPDX-License-Identifier: MIT
"""RapidAPI detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.rapid_api import RapidApiValidator

NAME = "rapid_api"


class RapidApiFamily(SingleKeyFamily):
    name = NAME
    secret_type = "RapidAPI"
    pattern = PATTERNS["RapidAPI Key"]
    validator_class = RapidApiValidator
    resource_types = {"API_KEY": "API Key"}
    check_programming_patterns = True


def build(settings):
    return RapidApiFamily.from_settings(settings)
