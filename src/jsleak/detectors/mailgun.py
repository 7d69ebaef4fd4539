# SPDX-License-Identifier: MIT
"""Mailgun detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.mailgun import MailgunValidator

NAME = "mailgun"


class MailgunFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Mailgun"
    pattern = PATTERNS["Mailgun API Key"]
    validator_class = MailgunValidator
    resource_types = {"API_KEY": "API Key"}
    check_programming_patterns = True


def build(settings):
    return MailgunFamily.from_settings(settings)
