# SPDX-License-Identifier: MIT
"""
AWS access key detector.

Every accepted access key id is paired with every accepted secret key in
the same content; each pair is validated on its own.
"""
from __future__ import annotations

from typing import List

from jsleak.core.payloads import AwsAccessKeyPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, combinations
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.aws import AWS_RESOURCE_TYPES, AwsStsValidator

NAME = "aws_access_keys"


class AwsAccessKeysFamily(SecretFamily):
    name = NAME
    secret_type = "AWS Access & Secret Keys"
    resource_types = AWS_RESOURCE_TYPES
    validator_class = AwsStsValidator

    def extract(self, content: str) -> List[SecretPayload]:
        access_keys = self.accepted(PATTERNS["AWS Access Key"], content)
        if not access_keys:
            return []
        secret_keys = self.accepted(PATTERNS["AWS Secret Key"], content)
        return [
            AwsAccessKeyPayload(access_key_id=access, secret_key_id=secret)
            for access, secret in combinations(access_keys, secret_keys)
        ]


def build(settings):
    return AwsAccessKeysFamily.from_settings(settings)
