# SPDX-License-Identifier: MIT
"""Make MCP server URL detector; the token is part of the URL path."""
from __future__ import annotations

import re

from jsleak.core.payloads import McpUrlPayload
from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.make import MakeMcpValidator

NAME = "make_mcp_token"

TOKEN_IN_PATH = re.compile(r"/u/([a-f0-9\-]{36})/")


class MakeMcpTokenFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Make MCP"
    pattern = PATTERNS["Make MCP Token"]
    validator_class = MakeMcpValidator
    resource_types = {"MCP_TOKEN": "MCP Token"}
    check_false_positives = False

    def build_payload(self, value: str) -> McpUrlPayload:
        match = TOKEN_IN_PATH.search(value)
        return McpUrlPayload(full_url=value, mcp_token=match.group(1) if match else "")

    def attribution_texts(self, payload):
        return [payload.full_url]


def build(settings):
    return MakeMcpTokenFamily.from_settings(settings)
