# SPDX-License-Identifier: MIT
"""Mailchimp detector."""
from __future__ import annotations

from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.mailchimp import MailchimpValidator

NAME = "mailchimp"


class MailchimpFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Mailchimp"
    pattern = PATTERNS["Mailchimp API Key"]
    validator_class = MailchimpValidator
    resource_types = {"API_KEY": "API Key"}


def build(settings):
    return MailchimpFamily.from_settings(settings)
