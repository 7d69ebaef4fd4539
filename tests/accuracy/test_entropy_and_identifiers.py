# SPDX-License-Identifier: MIT
"""
Tests for entropy scoring and identifier heuristics.
"""
import pytest

from jsleak.accuracy.entropy import calculate_shannon_entropy, meets_threshold
from jsleak.accuracy.programming import is_programming_pattern


class TestShannonEntropy:
    """Test the entropy calculation."""

    def test_empty_and_uniform(self):
        assert calculate_shannon_entropy("") == 0.0
        assert calculate_shannon_entropy("aaaa") == 0.0

    def test_known_values(self):
        assert calculate_shannon_entropy("ab") == pytest.approx(1.0)
        assert calculate_shannon_entropy("abcd") == pytest.approx(2.0)
        assert calculate_shannon_entropy("aabb") == pytest.approx(1.0)

    def test_threshold(self):
        assert meets_threshold("abcd", 2.0)
        assert not meets_threshold("aabb", 1.5)


class TestProgrammingPatterns:
    """Test identifier recognition."""

    @pytest.mark.parametrize(
        "identifier",
        ["getUserName", "RequestHandler", "user_profile_id", "MAX_RETRY_COUNT", "x-amz-server-side-encryption"],
    )
    def test_identifiers(self, identifier):
        assert is_programming_pattern(identifier)

    @pytest.mark.parametrize("key", ["k8Zq2Lm5Vx9Tp3Kw7Ny1Hb", "3Xq9LmT2vR8kW4nZ7pB1yH6cJ5d"])
    def test_random_keys(self, key):
        assert not is_programming_pattern(key)
