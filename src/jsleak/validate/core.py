# SPDX-License-Identifier: MIT
"""
Validator core with network kill-switch and rate limiting.

Every network validator shares the same contract: it receives a secret
payload, calls the credential's issuing service, and returns a
``ValidationResult``. Validators never raise; transport failures and
timeouts surface as ``FAILED_TO_CHECK`` so they are never confused with a
definitive rejection.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

import requests

from jsleak.core.payloads import SecretPayload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
USER_AGENT = "jsleak-validator/1.0"


class ValidationState(Enum):
    """Possible states for validation results."""

    VALID = "valid"
    INVALID = "invalid"
    FAILED_TO_CHECK = "failed_to_check"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one secret payload."""

    state: ValidationState
    reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    validator_name: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.state == ValidationState.VALID

    @property
    def resource_type(self) -> Optional[str]:
        return self.metadata.get("type")


class Validator(Protocol):
    """Protocol for all validators."""

    @property
    def name(self) -> str:
        """Unique validator name."""
        ...

    @property
    def rate_limit_qps(self) -> float:
        """Rate limit in queries per second for this validator."""
        ...

    @property
    def requires_network(self) -> bool:
        """Whether this validator requires network access."""
        ...

    def validate(self, payload: SecretPayload) -> ValidationResult:
        """Validate a payload and return result."""
        ...


class TokenBucket:
    """Token bucket for rate limiting."""

    def __init__(self, qps: float, capacity: Optional[float] = None):
        self.qps = qps
        self.capacity = capacity or qps  # Burst capacity
        self.tokens = self.capacity
        self.last_refill = time.time()
        self._lock = threading.Lock()

    def acquire(self, tokens: int = 1) -> bool:
        """Try to acquire tokens. Returns True if successful."""
        with self._lock:
            now = time.time()

            # Add tokens based on elapsed time
            elapsed = now - self.last_refill
            self.tokens = min(self.capacity, self.tokens + elapsed * self.qps)
            self.last_refill = now

            if self.tokens >= tokens:
                self.tokens -= tokens
                return True
            return False

    def wait_time(self, tokens: int = 1) -> float:
        """Seconds until ``tokens`` would be available."""
        with self._lock:
            missing = tokens - self.tokens
        if missing <= 0 or self.qps <= 0:
            return 0.0
        return missing / self.qps

    def wait(self, tokens: int = 1, sleep: Callable[[float], None] = time.sleep) -> None:
        """Block until tokens can be acquired."""
        while not self.acquire(tokens):
            sleep(max(self.wait_time(tokens), 0.01))


def classify_status(status_code: int) -> ValidationState:
    """
    Default mapping from an issuer's HTTP status to a validation state.

    2xx is valid. Throttling and server errors mean the issuer could not
    give an answer, every other status is a rejection.
    """
    if 200 <= status_code < 300:
        return ValidationState.VALID
    if status_code == 429 or status_code >= 500:
        return ValidationState.FAILED_TO_CHECK
    return ValidationState.INVALID


class HttpValidator:
    """
    Base class for validators that call an issuing service over HTTPS.

    Subclasses implement ``check`` and may raise freely from it;
    ``validate`` turns any exception into ``FAILED_TO_CHECK``.
    """

    name = "http"
    rate_limit_qps = 1.0
    requires_network = True
    payload_type = SecretPayload

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        allow_network: bool = True,
        rate_limit: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.allow_network = allow_network
        self.sleep = sleep
        self.bucket = TokenBucket(self.rate_limit_qps, capacity=5) if rate_limit else None

    def validate(self, payload: SecretPayload) -> ValidationResult:
        if self.requires_network and not self.allow_network:
            return self.failed("Network disabled - validator skipped")

        if not isinstance(payload, self.payload_type):
            return self.invalid(f"Unsupported payload kind: {payload.kind}")

        if self.bucket is not None:
            self.bucket.wait(sleep=self.sleep)

        try:
            return self.check(payload)
        except requests.Timeout as e:
            logger.info("%s timed out: %s", self.name, e)
            return self.failed(f"Request timed out: {e}")
        except requests.RequestException as e:
            logger.info("%s network error: %s", self.name, e)
            return self.failed(f"Network error: {e}")
        except Exception as e:
            logger.warning("%s raised unexpectedly: %s", self.name, e)
            return self.failed(f"Validation error: {e}")

    def check(self, payload: SecretPayload) -> ValidationResult:
        raise NotImplementedError

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        headers = {"User-Agent": USER_AGENT}
        headers.update(kwargs.pop("headers", None) or {})
        return self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)

    def valid(self, reason: str = None, **metadata) -> ValidationResult:
        return ValidationResult(
            state=ValidationState.VALID,
            reason=reason,
            metadata=metadata,
            validator_name=self.name,
        )

    def invalid(self, reason: str, **metadata) -> ValidationResult:
        return ValidationResult(
            state=ValidationState.INVALID,
            reason=reason,
            metadata=metadata,
            validator_name=self.name,
        )

    def failed(self, reason: str) -> ValidationResult:
        return ValidationResult(
            state=ValidationState.FAILED_TO_CHECK,
            reason=reason,
            validator_name=self.name,
        )

    def from_status(self, response: requests.Response, **metadata) -> ValidationResult:
        """Classify a response with the default status policy."""
        state = classify_status(response.status_code)
        if state == ValidationState.VALID:
            return self.valid(**metadata)
        if state == ValidationState.FAILED_TO_CHECK:
            return self.failed(f"Service returned status {response.status_code}")
        return self.invalid(f"Credential rejected (HTTP {response.status_code})")


def json_body(response: requests.Response) -> Dict[str, Any]:
    """Parse a JSON object body, returning {} when it is not one."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def json_object(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object under ``key``, or {} when missing or of another shape."""
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def json_objects(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """The objects in the list under ``key``, skipping anything else."""
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]
