# SPDX-License-Identifier: MIT
"""PayPal OAuth client id and secret detector."""
from __future__ import annotations

from typing import List

from jsleak.core.payloads import OAuthClientPayload, SecretPayload
from jsleak.detectors.base import SecretFamily, combinations
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.paypal_oauth import PayPalOAuthValidator

NAME = "paypal_oauth"


class PayPalOAuthFamily(SecretFamily):
    name = NAME
    secret_type = "PayPal OAuth"
    resource_types = {"CLIENT_CREDENTIALS": "Client Credentials"}
    validator_class = PayPalOAuthValidator

    def extract(self, content: str) -> List[SecretPayload]:
        client_ids = self.accepted(PATTERNS["PayPal OAuth Client ID"], content)
        if not client_ids:
            return []
        secrets = self.accepted(PATTERNS["PayPal OAuth Client Secret"], content)
        return [
            OAuthClientPayload(client_id=c, client_secret=s)
            for c, s in combinations(client_ids, secrets)
        ]


def build(settings):
    return PayPalOAuthFamily.from_settings(settings)
