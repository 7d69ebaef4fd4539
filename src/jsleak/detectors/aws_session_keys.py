# SPDX-License-Identifier: MIT
"""AWS temporary (STS) session credential detector."""
from __future__ import annotations

from typing import List

from jsleak.core.payloads import AwsSessionKeyPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, combinations
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.aws import AWS_RESOURCE_TYPES, AwsStsValidator, session_token_matches

NAME = "aws_session_keys"


class AwsSessionKeysFamily(SecretFamily):
    name = NAME
    secret_type = "AWS Session Keys"
    resource_types = AWS_RESOURCE_TYPES
    validator_class = AwsStsValidator

    def extract(self, content: str) -> List[SecretPayload]:
        access_keys = self.accepted(PATTERNS["AWS Session Key ID"], content)
        if not access_keys:
            return []
        secret_keys = self.accepted(PATTERNS["AWS Session Secret Key"], content)
        tokens = self.accepted(PATTERNS["AWS Session Token"], content)

        payloads = []
        for access, secret, token in combinations(access_keys, secret_keys, tokens):
            if not session_token_matches(token, secret):
                continue
            payloads.append(
                AwsSessionKeyPayload(access_key_id=access, secret_key_id=secret, session_key_id=token)
            )
        return payloads


def build(settings):
    return AwsSessionKeysFamily.from_settings(settings)
