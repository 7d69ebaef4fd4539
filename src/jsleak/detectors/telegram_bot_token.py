# SPDX-License-Identifier: MIT
"""Telegram bot token detector."""
from __future__ import annotations

from jsleak.core.payloads import BotTokenPayload
from jsleak.detectors.base import SingleKeyFamily
from jsleak.detectors.patterns import PATTERNS
from jsleak.validate.telegram_bot_token import TelegramBotTokenValidator

NAME = "telegram_bot_token"


class TelegramBotTokenFamily(SingleKeyFamily):
    name = NAME
    secret_type = "Telegram Bot Token"
    pattern = PATTERNS["Telegram Bot Token"]
    validator_class = TelegramBotTokenValidator
    resource_types = {"BOT_TOKEN": "Bot Token"}

    def build_payload(self, value: str) -> BotTokenPayload:
        return BotTokenPayload(bot_token=value)


def build(settings):
    return TelegramBotTokenFamily.from_settings(settings)
