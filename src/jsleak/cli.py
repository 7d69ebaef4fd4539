# SPDX-License-Identifier: MIT
"""
jsleak - Command Line Interface

This CLI provides:
- jsleak version
- jsleak scan <file-or-url> [--url URL] --format {text,json}
- jsleak revalidate
- jsleak findings --format {text,json}
- jsleak init-config [path]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

import requests

from . import __version__
from .core.exceptions import JsLeakError
from .core.findings import Finding, Validity
from .core.redaction import redact_finding, redact_occurrence, redact_payload

logger = logging.getLogger("jsleak")

FETCH_TIMEOUT = 30


def main(argv=None):
    argv = argv if argv is not None else sys.argv[1:]
    p = argparse.ArgumentParser(prog="jsleak", description="Find live secrets in delivered JavaScript")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")

    sp = sub.add_parser("scan", help="scan a JavaScript file or URL")
    sp.add_argument("target", help="local file path or http(s) URL")
    sp.add_argument("--url", help="delivery URL to attribute a local file to")
    sp.add_argument("--config", help="path to config YAML file")
    sp.add_argument("--store", help="path to the findings store")
    sp.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="output format (default: text)",
    )

    rp = sub.add_parser("revalidate", help="re-check every stored finding")
    rp.add_argument("--config", help="path to config YAML file")
    rp.add_argument("--store", help="path to the findings store")

    fp = sub.add_parser("findings", help="list stored findings")
    fp.add_argument("--config", help="path to config YAML file")
    fp.add_argument("--store", help="path to the findings store")
    fp.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="output format (default: text)",
    )

    ip = sub.add_parser("init-config", help="write a config template")
    ip.add_argument("path", nargs="?", default=".jsleak.yml", help="destination (default: .jsleak.yml)")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "version":
        print(__version__)
        return 0

    handlers = {
        "scan": handle_scan_command,
        "revalidate": handle_revalidate_command,
        "findings": handle_findings_command,
        "init-config": handle_init_config_command,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        p.print_help()
        return 0

    try:
        return handler(args)
    except JsLeakError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


def is_url(target: str) -> bool:
    return urlparse(target).scheme in ("http", "https")


def read_target(target: str, session: requests.Session):
    """Return ``(content, delivery_url)`` for a file path or URL."""
    if is_url(target):
        response = session.get(target, timeout=FETCH_TIMEOUT)
        response.raise_for_status()
        return response.text, target
    path = Path(target)
    return path.read_text(encoding="utf-8", errors="replace"), path.resolve().as_uri()


def handle_scan_command(args):
    """Handle the scan subcommand."""
    from .scanner.config import load_scanner_config
    from .scanner.orchestrator import ContentScanner

    config = load_scanner_config(args.config)
    session = requests.Session()

    try:
        content, delivery_url = read_target(args.target, session)
    except (OSError, requests.RequestException) as e:
        print(f"Error reading {args.target}: {e}", file=sys.stderr)
        return 2
    if args.url:
        delivery_url = args.url

    scanner = ContentScanner.from_config(config, store_path=args.store, session=session)
    occurrences = scanner.scan(content, delivery_url)

    if args.format == "json":
        print(json.dumps([redact_occurrence(o.to_dict()) for o in occurrences], indent=2))
    else:
        print_occurrences(occurrences, delivery_url)

    # Confirmed live secrets fail the run
    return 1 if occurrences else 0


def handle_revalidate_command(args):
    """Handle the revalidate subcommand."""
    from .scanner.config import load_scanner_config
    from .scanner.orchestrator import ContentScanner

    config = load_scanner_config(args.config)
    scanner = ContentScanner.from_config(config, store_path=args.store)
    updated = scanner.lifecycle.revalidate_all()
    print_findings(updated)
    return 0


def handle_findings_command(args):
    """Handle the findings subcommand."""
    from .core.store import FindingRepository, JsonFileFindingStore
    from .scanner.config import load_scanner_config

    config = load_scanner_config(args.config)
    repository = FindingRepository(JsonFileFindingStore(args.store or config["store"]["path"]))
    findings = repository.all()

    if args.format == "json":
        print(json.dumps([redact_finding(f.to_dict()) for f in findings], indent=2))
    else:
        print_findings(findings)
    return 0


def handle_init_config_command(args):
    """Handle the init-config subcommand."""
    from .scanner.config import create_default_config_template

    path = Path(args.path)
    if path.exists():
        print(f"Error: {path} already exists", file=sys.stderr)
        return 1
    path.write_text(create_default_config_template(), encoding="utf-8")
    print(f"Wrote {path}")
    return 0


def print_occurrences(occurrences, delivery_url):
    """Print a text summary of confirmed secrets."""
    print(f"\njsleak scan results for {delivery_url}")
    print("=" * 50)
    print(f"Live secrets: {len(occurrences)}")

    for occurrence in occurrences:
        source = occurrence.source_content
        location = source.filename
        if source.is_attributed:
            lines = ", ".join(str(n) for n in source.exact_match_lines)
            location += f" (line {lines})"
        label = occurrence.secret_type
        if occurrence.type:
            label += f" - {occurrence.type}"
        print(f"\n  {label}")
        print(f"    fingerprint: {occurrence.fingerprint[:16]}")
        print(f"    source:      {location}")
        for key, value in redact_payload(occurrence.secret_value).items():
            if key != "kind":
                print(f"    {key}: {value}")


def print_findings(findings):
    """Print stored findings grouped by validity."""
    print(f"\nStored findings: {len(findings)}")
    if not findings:
        return

    by_validity = {}
    for finding in findings:
        by_validity.setdefault(finding.validity, []).append(finding)

    for validity in Validity:
        group = by_validity.get(validity, [])
        if not group:
            continue
        print(f"\n{validity.value} ({len(group)})")
        for finding in group:
            print(f"  {describe_finding(finding)}")


def describe_finding(finding: Finding) -> str:
    description = (
        f"{finding.secret_type} {finding.fingerprint[:16]} "
        f"occurrences={finding.num_occurrences} validated={finding.validated_at or '-'}"
    )
    if finding.error:
        description += f" error={finding.error}"
    return description
