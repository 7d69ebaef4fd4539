# SPDX-License-Identifier: MIT
"""Slack token validation via ``auth.test``."""
from __future__ import annotations

from jsleak.core.payloads import SlackTokenPayload
from .core import HttpValidator, ValidationResult, json_body

AUTH_TEST_ENDPOINT = "https://slack.com/api/auth.test"

SLACK_ERRORS = {
    "invalid_auth": "Invalid authentication token",
    "account_inactive": "Authentication token is for a deleted user or workspace",
    "token_revoked": "Authentication token has been revoked",
}


class SlackValidator(HttpValidator):
    name = "slack"
    payload_type = SlackTokenPayload

    def check(self, payload: SlackTokenPayload) -> ValidationResult:
        response = self.request(
            "POST",
            AUTH_TEST_ENDPOINT,
            headers={
                "Authorization": f"Bearer {payload.token}",
                "Content-Type": "application/json; charset=utf-8",
            },
        )
        if response.status_code != 200:
            return self.from_status(response)

        data = json_body(response)
        if data.get("ok"):
            return self.valid(
                type=payload.token_type,
                url=data.get("url"),
                team=data.get("team"),
                user=data.get("user"),
                team_id=data.get("team_id"),
                user_id=data.get("user_id"),
                bot_id=data.get("bot_id"),
            )
        error = data.get("error") or "Unknown error"
        if error == "ratelimited":
            return self.failed("Slack rate limited the check")
        return self.invalid(SLACK_ERRORS.get(error, error))
