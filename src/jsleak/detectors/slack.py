# SPDX-License-Identifier: MIT
"""Slack token detector."""
from __future__ import annotations

from jsleak.core.payloads import SlackTokenPayload
from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.slack import SlackValidator

NAME = "slack"

TOKEN_TYPES = {
    "xoxb": "Bot Token",
    "xoxp": "User Token",
    "xoxa": "Workspace Access Token",
    "xoxr": "Workspace Refresh Token",
}


def token_type(token: str) -> str:
    return TOKEN_TYPES.get(token[:4], "Unknown Token")


class SlackFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Slack"
    pattern = PATTERNS["Slack Token"]
    validator_class = SlackValidator

    def build_payload(self, value: str) -> SlackTokenPayload:
        return SlackTokenPayload(token=value, token_type=token_type(value))

    def attribution_texts(self, payload):
        return [payload.token]


def build(settings):
    return SlackFamily.from_settings(settings)
