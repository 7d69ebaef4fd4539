"""Scanning layer: configuration, the per-family pipeline and the content scanner.

Usage:
    from jsleak.scanner import ContentScanner, load_scanner_config
"""

from jsleak.scanner.config import load_scanner_config
from jsleak.scanner.orchestrator import ContentScanner
from jsleak.scanner.pipeline import DetectionPipeline

__all__ = ["ContentScanner", "DetectionPipeline", "load_scanner_config"]
