# SPDX-License-Identifier: MIT
"""Telegram bot token validation via ``getMe``."""
from __future__ import annotations

from jsleak.core.payloads import BotTokenPayload
from .core import HttpValidator, ValidationResult, json_body, json_object

API_BASE = "https://api.telegram.org"


class TelegramBotTokenValidator(HttpValidator):
    name = "telegram_bot_token"
    payload_type = BotTokenPayload

    def check(self, payload: BotTokenPayload) -> ValidationResult:
        response = self.request("GET", f"{API_BASE}/bot{payload.bot_token}/getMe")
        if response.status_code != 200:
            return self.from_status(response)
        data = json_body(response)
        if not data.get("ok"):
            return self.invalid(data.get("description") or "Telegram rejected the token")
        result = json_object(data, "result")
        return self.valid(
            type="BOT_TOKEN",
            bot_id=result.get("id"),
            username=result.get("username"),
            first_name=result.get("first_name"),
        )
