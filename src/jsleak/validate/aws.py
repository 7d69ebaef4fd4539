# SPDX-License-Identifier: MIT
"""
AWS credential validation via STS ``GetCallerIdentity``.

Requests are signed with Signature Version 4. A 403 is retried exactly
once after a fixed delay; any other non-2xx answer is a definitive
rejection.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import quote, urlsplit

from jsleak.core.payloads import AwsAccessKeyPayload, AwsSessionKeyPayload, SecretPayload
from jsleak.core.redaction import redact_secret
from .core import HttpValidator, ValidationResult, json_body, json_object

logger = logging.getLogger(__name__)

STS_ENDPOINT = "https://sts.amazonaws.com/"
STS_REGION = "us-east-1"
STS_SERVICE = "sts"
STS_QUERY = {"Action": "GetCallerIdentity", "Version": "2011-06-15"}

RETRY_DELAY_SECONDS = 5.0

EMPTY_PAYLOAD_HASH = hashlib.sha256(b"").hexdigest()

AWS_RESOURCE_TYPES: Dict[str, str] = {
    "AKIA": "Access Key",
    "ABIA": "AWS STS Service Bearer Token",
    "ACCA": "Context-specific Credential",
    "AIDA": "IAM User",
    "ASIA": "Temporary (AWS STS) Access Key",
}


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def signing_key(secret_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """Derive the SigV4 signing key for one day/region/service scope."""
    k_date = _hmac(("AWS4" + secret_key).encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, "aws4_request")


def canonical_query_string(params: Dict[str, str]) -> str:
    return "&".join(
        f"{quote(k, safe='-_.~')}={quote(str(v), safe='-_.~')}" for k, v in sorted(params.items())
    )


def sign_request(
    method: str,
    url: str,
    params: Dict[str, str],
    access_key: str,
    secret_key: str,
    session_token: Optional[str] = None,
    region: str = STS_REGION,
    service: str = STS_SERVICE,
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Build SigV4 headers for an empty-body request.

    Returns:
        Headers to send: ``Authorization``, ``x-amz-date``,
        ``x-amz-content-sha256`` and, with a session token,
        ``x-amz-security-token``
    """
    now = now or datetime.now(timezone.utc)
    amz_date = now.strftime("%Y%m%dT%H%M%SZ")
    date_stamp = now.strftime("%Y%m%d")

    parts = urlsplit(url)
    host = parts.netloc
    canonical_uri = parts.path or "/"

    headers = {"host": host, "x-amz-date": amz_date}
    if session_token:
        headers["x-amz-security-token"] = session_token
    signed_header_names = sorted(headers)
    canonical_headers = "".join(f"{name}:{headers[name].strip()}\n" for name in signed_header_names)
    signed_headers = ";".join(signed_header_names)

    canonical_request = "\n".join(
        [
            method,
            canonical_uri,
            canonical_query_string(params),
            canonical_headers,
            signed_headers,
            EMPTY_PAYLOAD_HASH,
        ]
    )

    scope = f"{date_stamp}/{region}/{service}/aws4_request"
    string_to_sign = "\n".join(
        [
            "AWS4-HMAC-SHA256",
            amz_date,
            scope,
            hashlib.sha256(canonical_request.encode("utf-8")).hexdigest(),
        ]
    )
    signature = hmac.new(
        signing_key(secret_key, date_stamp, region, service),
        string_to_sign.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()

    result = {
        "Authorization": (
            f"AWS4-HMAC-SHA256 Credential={access_key}/{scope}, "
            f"SignedHeaders={signed_headers}, Signature={signature}"
        ),
        "x-amz-date": amz_date,
        "x-amz-content-sha256": EMPTY_PAYLOAD_HASH,
    }
    if session_token:
        result["x-amz-security-token"] = session_token
    return result


class AwsStsValidator(HttpValidator):
    """Validates AWS access keys and temporary session credentials."""

    name = "aws_sts"
    rate_limit_qps = 0.5
    payload_type = (AwsAccessKeyPayload, AwsSessionKeyPayload)

    def __init__(self, *args, clock: Callable[[], datetime] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def check(self, payload: SecretPayload) -> ValidationResult:
        session_token = getattr(payload, "session_key_id", None)
        return self._get_caller_identity(
            payload.access_key_id.strip(),
            payload.secret_key_id.strip(),
            session_token.strip() if session_token else None,
            retry_on_403=True,
        )

    def _get_caller_identity(
        self,
        access_key: str,
        secret_key: str,
        session_token: Optional[str],
        retry_on_403: bool,
    ) -> ValidationResult:
        headers = {"Accept": "application/json"}
        headers.update(
            sign_request(
                "GET",
                STS_ENDPOINT,
                STS_QUERY,
                access_key,
                secret_key,
                session_token=session_token,
                now=self.clock(),
            )
        )
        response = self.request("GET", STS_ENDPOINT, params=STS_QUERY, headers=headers)

        if 200 <= response.status_code < 300:
            account, arn, user_id = self._parse_identity(response)
            return self.valid(
                "Credentials accepted by STS",
                type=access_key[:4],
                account_id=account,
                arn=arn,
                user_id=user_id,
            )

        if response.status_code == 403 and retry_on_403:
            logger.debug(
                "STS returned 403 for %s, retrying in %.0fs",
                redact_secret(access_key),
                RETRY_DELAY_SECONDS,
            )
            self.sleep(RETRY_DELAY_SECONDS)
            return self._get_caller_identity(access_key, secret_key, session_token, retry_on_403=False)

        return self.invalid(f"STS rejected credentials (HTTP {response.status_code})")

    @staticmethod
    def _parse_identity(response) -> Tuple[str, str, str]:
        body = json_body(response)
        result = json_object(json_object(body, "GetCallerIdentityResponse"), "GetCallerIdentityResult")
        return result.get("Account", ""), result.get("Arn", ""), result.get("UserId", "")


def session_token_matches(session_token: str, secret_key: str) -> bool:
    """
    Whether a long base64 run plausibly is an STS session token.

    Real tokens embed recognisable base64 fragments of ``aws`` /
    ``origin_ec`` or carry the secret key itself.
    """
    return "YXdz" in session_token or "Jb3JpZ2luX2Vj" in session_token or secret_key in session_token
