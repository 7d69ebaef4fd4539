# SPDX-License-Identifier: MIT
"""
Tests for the validator core functionality.
"""
from unittest.mock import patch

import pytest
import requests

from jsleak.core.payloads import ApiKeyPayload, SlackTokenPayload
from jsleak.validate.core import (
    HttpValidator,
    TokenBucket,
    ValidationResult,
    ValidationState,
    classify_status,
    json_body,
)
from jsleak.validate.groq import GroqValidator


class TestTokenBucket:
    """Test token bucket rate limiting."""

    def test_token_bucket_basic(self):
        """Test basic token bucket functionality."""
        bucket = TokenBucket(qps=1.0, capacity=2.0)

        assert bucket.acquire(1) is True
        assert bucket.acquire(1) is True

        # Should fail when capacity exceeded
        assert bucket.acquire(1) is False

    @patch("time.time")
    def test_token_bucket_refill(self, mock_time):
        """Test token bucket refill over time."""
        mock_time.return_value = 0.0

        bucket = TokenBucket(qps=2.0, capacity=2.0)

        assert bucket.acquire(2) is True
        assert bucket.acquire(1) is False

        # Advance time by 1 second (should add 2 tokens)
        mock_time.return_value = 1.0
        assert bucket.acquire(2) is True
        assert bucket.acquire(1) is False

    @patch("time.time")
    def test_wait_sleeps_until_refill(self, mock_time):
        """Test that wait() sleeps for the missing tokens."""
        clock = {"now": 0.0}
        mock_time.side_effect = lambda: clock["now"]
        bucket = TokenBucket(qps=2.0, capacity=1.0)
        assert bucket.acquire(1) is True

        sleeps = []

        def fake_sleep(seconds):
            sleeps.append(seconds)
            clock["now"] += seconds

        bucket.wait(sleep=fake_sleep)
        assert sleeps == [pytest.approx(0.5)]


class TestClassifyStatus:
    """Test the default status policy."""

    @pytest.mark.parametrize(
        "status, state",
        [
            (200, ValidationState.VALID),
            (204, ValidationState.VALID),
            (401, ValidationState.INVALID),
            (403, ValidationState.INVALID),
            (404, ValidationState.INVALID),
            (429, ValidationState.FAILED_TO_CHECK),
            (500, ValidationState.FAILED_TO_CHECK),
            (503, ValidationState.FAILED_TO_CHECK),
        ],
    )
    def test_classify(self, status, state):
        assert classify_status(status) == state


class TestHttpValidator:
    """Test the shared validate() contract."""

    def test_kill_switch_skips_network(self, session):
        validator = GroqValidator(session=session, allow_network=False)
        result = validator.validate(ApiKeyPayload(api_key="gsk_x"))
        assert result.state == ValidationState.FAILED_TO_CHECK
        assert result.reason == "Network disabled - validator skipped"
        session.request.assert_not_called()

    def test_wrong_payload_kind(self, session):
        validator = GroqValidator(session=session, rate_limit=False)
        result = validator.validate(SlackTokenPayload(token="xoxb-1", token_type="Bot Token"))
        assert result.state == ValidationState.INVALID
        assert "slack_token" in result.reason
        session.request.assert_not_called()

    def test_timeout_is_failed_to_check(self, session):
        session.request.side_effect = requests.Timeout("read timed out")
        result = GroqValidator(session=session, rate_limit=False).validate(ApiKeyPayload(api_key="gsk_x"))
        assert result.state == ValidationState.FAILED_TO_CHECK
        assert "timed out" in result.reason

    def test_connection_error_is_failed_to_check(self, session):
        session.request.side_effect = requests.ConnectionError("refused")
        result = GroqValidator(session=session, rate_limit=False).validate(ApiKeyPayload(api_key="gsk_x"))
        assert result.state == ValidationState.FAILED_TO_CHECK
        assert "refused" in result.reason

    def test_unexpected_exception_is_failed_to_check(self, session):
        class Broken(HttpValidator):
            name = "broken"

            def check(self, payload):
                raise KeyError("missing")

        result = Broken(session=session, rate_limit=False).validate(ApiKeyPayload(api_key="k"))
        assert result.state == ValidationState.FAILED_TO_CHECK
        assert result.validator_name == "broken"

    def test_request_sets_timeout_and_user_agent(self, session, make_response):
        session.request.return_value = make_response(200, {"data": []})
        validator = GroqValidator(session=session, timeout=3.0, rate_limit=False)

        result = validator.validate(ApiKeyPayload(api_key="gsk_x"))

        assert result.valid
        assert result.resource_type == "API_KEY"
        kwargs = session.request.call_args.kwargs
        assert kwargs["timeout"] == 3.0
        assert kwargs["headers"]["Authorization"] == "Bearer gsk_x"
        assert "User-Agent" in kwargs["headers"]

    def test_status_mapping(self, session, make_response):
        validator = GroqValidator(session=session, rate_limit=False)
        session.request.return_value = make_response(401)
        assert validator.validate(ApiKeyPayload(api_key="gsk_x")).state == ValidationState.INVALID
        session.request.return_value = make_response(502)
        assert validator.validate(ApiKeyPayload(api_key="gsk_x")).state == ValidationState.FAILED_TO_CHECK


class TestJsonBody:
    def test_non_object_bodies(self, make_response):
        assert json_body(make_response(200, [1, 2])) == {}
        assert json_body(make_response(200, text="<html>")) == {}
        assert json_body(make_response(200, {"a": 1})) == {"a": 1}


def test_result_properties():
    result = ValidationResult(state=ValidationState.VALID, metadata={"type": "USER"})
    assert result.valid
    assert result.resource_type == "USER"
