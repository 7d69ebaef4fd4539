"""jsleak custom exceptions."""

from __future__ import annotations


class JsLeakError(Exception):
    """Base class for all jsleak errors."""


class JsLeakConfigError(JsLeakError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg


class FindingStoreError(JsLeakError):
    """Raised when the persisted findings cannot be read or written."""

    def __init__(self, message: str, store_path: str = None):
        self.store_path = store_path
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.store_path:
            msg += f" (store: {self.store_path})"
        return msg


class SourceMapError(JsLeakError):
    """Raised when a source map cannot be fetched or parsed."""
