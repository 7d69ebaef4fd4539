# SPDX-License-Identifier: MIT
"""
Pattern catalog.

One entry per matchable secret component. Where a pattern has a capture
group, the first non-empty group is the candidate; otherwise the whole
match is.
"""
from __future__ import annotations

import re
from typing import Dict

from jsleak.detectors.base import Pattern

_UUID = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"


def _context(keyword: str, value: str) -> str:
    """Value pattern that must follow a keyword within a short window."""
    return r"(?i:" + keyword + r")[\w\s\"'`=:.,\-]{0,40}?\b(" + value + r")\b"


def _pattern(name: str, family: str, regex: str, entropy: float, flags: int = 0) -> Pattern:
    return Pattern(
        name=name,
        family_name=family,
        regex=re.compile(regex, flags),
        entropy_threshold=entropy,
    )


PATTERNS: Dict[str, Pattern] = {
    p.name: p
    for p in (
        _pattern(
            "AWS Access Key",
            "AWS Access & Secret Keys",
            r"\b((?:AKIA|ABIA|ACCA|AIDA)[A-Z0-9]{16})\b",
            3.0,
        ),
        _pattern(
            "AWS Secret Key",
            "AWS Access & Secret Keys",
            r"(?<![A-Za-z0-9+/])([A-Za-z0-9+/]{40})(?![A-Za-z0-9+/])",
            4.25,
        ),
        _pattern(
            "AWS Session Key ID",
            "AWS Session Keys",
            r"\b(ASIA[A-Z0-9]{16})\b",
            3.0,
        ),
        _pattern(
            "AWS Session Secret Key",
            "AWS Session Keys",
            r"(?<![A-Za-z0-9+/])([A-Za-z0-9+/]{40})(?![A-Za-z0-9+/])",
            4.5,
        ),
        _pattern(
            "AWS Session Token",
            "AWS Session Keys",
            r"(?<![A-Za-z0-9+/])([A-Za-z0-9+/]{100,}={0,3})(?![A-Za-z0-9+/=])",
            4.5,
        ),
        _pattern(
            "Anthropic API Key",
            "Anthropic AI",
            r"\b(sk-ant-(?:admin01|api03)-[\w\-]{93}AA)\b",
            0.0,
        ),
        _pattern(
            "Apollo API Key",
            "Apollo",
            _context("apollo", r"[A-Za-z0-9_\-]{22}"),
            3.9,
        ),
        _pattern(
            "Artifactory Access Token",
            "Artifactory",
            r"\b(AKCp[A-Za-z0-9]{69}|cmVmdGtuOjAxOj[A-Za-z0-9]{50,})\b",
            4.0,
        ),
        _pattern(
            "Artifactory URL",
            "Artifactory",
            r"\b((?:https?://)?[A-Za-z0-9][A-Za-z0-9\-]*\.jfrog\.io)\b",
            0.0,
        ),
        _pattern(
            "Azure OpenAI API Key",
            "Azure OpenAI",
            _context(r"azure|openai|api[-_]?key", r"[a-f0-9]{32}"),
            3.0,
        ),
        _pattern(
            "Azure OpenAI URL",
            "Azure OpenAI",
            r"\b((?:https?://)?[a-z0-9][a-z0-9\-]{1,62}\.openai\.azure\.com)\b",
            0.0,
        ),
        _pattern(
            "DeepAI API Key",
            "DeepAI",
            r"\b([a-z0-9]{8}-[a-z0-9]{4}-[a-z0-9]{4}-[a-z0-9]{4}-[a-z0-9]{12})\b",
            3.5,
        ),
        _pattern(
            "DeepSeek API Key",
            "DeepSeek",
            r"\b(sk-[a-zA-Z0-9]{32})\b",
            3.0,
        ),
        _pattern(
            "Docker Auths Structure",
            "Docker",
            r"[\"']?auths[\"']?\s*:\s*\{",
            3.0,
        ),
        _pattern(
            "GCP Service Account Key",
            "Google Cloud Platform",
            r"[\"']?type[\"']?\s*:\s*[\"']service_account[\"']",
            0.0,
        ),
        _pattern(
            "Gemini API Key",
            "Gemini",
            r"\b((?:master-|account-)[0-9A-Za-z]{20})\b",
            0.0,
        ),
        _pattern(
            "Gemini API Secret",
            "Gemini",
            r"\b([A-Za-z0-9]{27,28})\b",
            0.0,
        ),
        _pattern(
            "Groq API Key",
            "Groq",
            r"\b(gsk_[a-zA-Z0-9]{52})\b",
            4.0,
        ),
        _pattern(
            "Hugging Face Access Token",
            "Hugging Face",
            r"\b((?:hf_|api_org_)[a-zA-Z0-9]{34})\b",
            2.5,
        ),
        _pattern(
            "JotForm API Key",
            "JotForm",
            _context("jotform", r"[a-z0-9]{32}"),
            3.5,
        ),
        _pattern(
            "LangSmith API Key",
            "LangSmith",
            r"\b(lsv2_(?:pt|sk)_[a-f0-9]{32}_[a-f0-9]{10})\b",
            0.0,
        ),
        _pattern(
            "Mailchimp API Key",
            "Mailchimp",
            r"\b([a-f0-9]{32}-us[0-9]{1,2})\b",
            4.0,
        ),
        _pattern(
            "Mailgun API Key",
            "Mailgun",
            r"\b(key-[a-z0-9]{32}|[a-f0-9]{32}-[a-f0-9]{8}-[a-f0-9]{8}|[a-zA-Z0-9\-]{72})\b",
            3.9,
        ),
        _pattern(
            "Make API Token",
            "Make",
            _context(r"make|integromat", _UUID),
            3.0,
        ),
        _pattern(
            "Make MCP Token",
            "Make MCP",
            r"(https://[a-z0-9.\-]*make\.(?:com|celonis\.com)/mcp/(?:api/v\d/)?u/" + _UUID + r"/[A-Za-z0-9_\-/]*)",
            0.0,
        ),
        _pattern(
            "OpenAI API Key",
            "OpenAI",
            r"\b(sk-[a-zA-Z0-9_-]+T3BlbkFJ[a-zA-Z0-9_-]+)\b",
            3.0,
        ),
        _pattern(
            "PayPal OAuth Client ID",
            "PayPal OAuth",
            r"\b([A-Za-z0-9_\.]{7}-[A-Za-z0-9_\.]{72}|[A-Za-z0-9_\.]{5}-[A-Za-z0-9_\.]{38})\b",
            4.0,
        ),
        _pattern(
            "PayPal OAuth Client Secret",
            "PayPal OAuth",
            r"\b(E[A-Za-z0-9_\-]{79})\b",
            4.5,
        ),
        _pattern(
            "RapidAPI Key",
            "RapidAPI",
            _context(r"rapid[-_]?api", r"[A-Za-z0-9_\-]{50}"),
            4.0,
        ),
        _pattern(
            "Slack Token",
            "Slack",
            r"\b(xox[bpar]-[0-9A-Za-z\-]{10,250})\b",
            0.0,
        ),
        _pattern(
            "Telegram Bot Token",
            "Telegram Bot Token",
            r"\b([0-9]{8,10}:[A-Za-z0-9_\-]{35})(?![A-Za-z0-9_\-])",
            3.0,
        ),
    )
}
