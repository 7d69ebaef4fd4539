# SPDX-License-Identifier: MIT
"""Make API token detector."""
from __future__ import annotations

from jsleak.core.payloads import ApiTokenPayload
from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.make import MakeApiTokenValidator

NAME = "make_api_token"


class MakeApiTokenFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Make"
    pattern = PATTERNS["Make API Token"]
    validator_class = MakeApiTokenValidator
    resource_types = {"API_TOKEN": "API Token"}
    # Tokens are UUIDs and would always trip the UUID filter
    check_false_positives = False

    def build_payload(self, value: str) -> ApiTokenPayload:
        return ApiTokenPayload(api_token=value)


def build(settings):
    return MakeApiTokenFamily.from_settings(settings)
