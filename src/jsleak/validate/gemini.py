# SPDX-License-Identifier: MIT
"""
Gemini exchange API key validation.

Private endpoints take a base64 JSON payload signed with HMAC-SHA384 over
the API secret. Master keys must name the account they act on.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from typing import Callable

from jsleak.core.payloads import GeminiPayload
from .core import HttpValidator, ValidationResult, json_body, json_object

API_BASE = "https://api.gemini.com"
ACCOUNT_PATH = "/v1/account"


def signed_headers(api_key: str, api_secret: str, nonce: int) -> dict:
    request = {"request": ACCOUNT_PATH, "nonce": nonce}
    if api_key.startswith("master-"):
        request["account"] = "primary"
    encoded = base64.b64encode(json.dumps(request).encode("utf-8"))
    signature = hmac.new(api_secret.encode("utf-8"), encoded, hashlib.sha384).hexdigest()
    return {
        "Content-Type": "text/plain",
        "Content-Length": "0",
        "X-GEMINI-APIKEY": api_key,
        "X-GEMINI-PAYLOAD": encoded.decode("ascii"),
        "X-GEMINI-SIGNATURE": signature,
        "Cache-Control": "no-cache",
    }


class GeminiValidator(HttpValidator):
    name = "gemini"
    payload_type = GeminiPayload

    def __init__(self, *args, clock: Callable[[], float] = time.time, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock

    def check(self, payload: GeminiPayload) -> ValidationResult:
        nonce = int(self.clock() * 1_000_000)
        response = self.request(
            "POST",
            API_BASE + ACCOUNT_PATH,
            headers=signed_headers(payload.api_key, payload.api_secret, nonce),
        )
        if response.status_code != 200:
            return self.from_status(response)

        data = json_body(response)
        account = json_object(data, "account")
        return self.valid(
            type="MASTER" if payload.api_key.startswith("master-") else "ACCOUNT",
            account=account.get("accountName"),
            name=account.get("shortName"),
            is_active=account.get("is_active"),
        )
