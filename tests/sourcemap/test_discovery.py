# SPDX-License-Identifier: MIT
"""Tests for source map discovery and position lookup."""
import base64

import pytest

from jsleak.core.exceptions import SourceMapError
from jsleak.sourcemap.discovery import (
    Position,
    decode_data_uri,
    filename_from_url,
    find_secret_position,
    get_source_map_url,
)


class TestGetSourceMapUrl:
    def test_relative_reference(self):
        content = "var a=1;\n//# sourceMappingURL=main.js.map"
        assert get_source_map_url("https://cdn.example.com/static/main.js", content) == (
            "https://cdn.example.com/static/main.js.map"
        )

    def test_legacy_marker_and_absolute_path(self):
        content = "var a=1;\n//@ sourceMappingURL=/maps/main.js.map"
        assert get_source_map_url("https://cdn.example.com/static/main.js", content) == (
            "https://cdn.example.com/maps/main.js.map"
        )

    def test_last_reference_wins(self):
        content = "//# sourceMappingURL=old.map\nvar a=1;\n//# sourceMappingURL=new.map"
        assert get_source_map_url("https://x.test/a.js", content) == "https://x.test/new.map"

    def test_data_uri_unchanged(self):
        content = "//# sourceMappingURL=data:application/json;base64,e30="
        assert get_source_map_url("https://x.test/a.js", content) == "data:application/json;base64,e30="

    def test_no_reference(self):
        assert get_source_map_url("https://x.test/a.js", "var a=1;") is None


class TestDecodeDataUri:
    def test_base64(self):
        encoded = base64.b64encode(b'{"version":3}').decode()
        assert decode_data_uri(f"data:application/json;base64,{encoded}") == '{"version":3}'

    def test_percent_encoded(self):
        assert decode_data_uri("data:application/json,%7B%7D") == "{}"

    def test_malformed(self):
        with pytest.raises(SourceMapError):
            decode_data_uri("data:application/json;base64")


class TestFindSecretPosition:
    def test_line_and_column(self):
        content = "line one\n  const k = 'SECRET';\n"
        assert find_secret_position(content, "SECRET") == Position(line=2, column=13)

    def test_first_line(self):
        assert find_secret_position("SECRET", "SECRET") == Position(line=1, column=0)

    def test_missing_or_empty(self):
        assert find_secret_position("abc", "SECRET") is None
        assert find_secret_position("abc", "") is None


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://cdn.example.com/static/js/main.4f2a.js?v=3", "main.4f2a.js"),
        ("file:///srv/www/app.js", "app.js"),
        ("build/app.js", "app.js"),
    ],
)
def test_filename_from_url(url, expected):
    assert filename_from_url(url) == expected
