# SPDX-License-Identifier: MIT
"""Apollo detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.apollo import ApolloValidator

NAME = "apollo"


class ApolloFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Apollo"
    pattern = PATTERNS["Apollo API Key"]
    validator_class = ApolloValidator
    resource_types = {"API_KEY": "API Key"}
    check_programming_patterns = True


def build(settings):
    return ApolloFamily.from_settings(settings)
