"""
Custom exception definitions.

This module defines the exception hierarchy for pikegen-specific errors.
Every error is fatal to the emission pass that raised it; no partial output
is ever returned alongside one.
"""

from typing import Optional


class PikegenError(Exception):
    """
    Base exception for all pikegen-related errors.

    This is the root exception class for all pikegen-specific
    errors, providing common formatting of error context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize pikegen error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class NamingError(PikegenError):
    """
    Raised when the naming engine cannot resolve a name.

    The engine never invents a fallback for a name that has no candidates,
    so an empty candidate set ends up here.
    """

    def __init__(self, message: str, namespace: Optional[str] = None):
        """
        Initialize naming error.

        Args:
            message: Error description
            namespace: Optional description of the naming scope involved
        """
        details = {}
        if namespace is not None:
            details['namespace'] = namespace

        super().__init__(message, details)
        self.namespace = namespace


class UnsupportedTypeError(PikegenError):
    """
    Raised when a type kind has no handler.

    Dispatch tables are checked when their module is imported, so adding a
    type kind without a mapping fails before any output is produced.
    """

    def __init__(self, kinds, reason: str = ""):
        """
        Initialize unsupported type error.

        Args:
            kinds: Names of the unhandled type kinds
            reason: Optional explanation of where the handler is missing
        """
        kinds = sorted(str(kind) for kind in kinds)
        message = f"Unsupported type kind(s) {', '.join(kinds)}"
        if reason:
            message += f": {reason}"

        super().__init__(message, {'kinds': kinds})
        self.kinds = kinds
        self.reason = reason


class TypeGraphError(PikegenError):
    """Raised when a type graph or type graph document is malformed."""

    def __init__(self, message: str, path: Optional[str] = None):
        """
        Initialize type graph error.

        Args:
            message: Error description
            path: Optional location of the offending entry in the document
        """
        details = {}
        if path is not None:
            details['path'] = path

        super().__init__(message, details)
        self.path = path


class ConfigError(PikegenError):
    """Raised when a configuration file cannot be loaded or is invalid."""

    def __init__(self, message: str, config_file: Optional[str] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_file: Optional path of the configuration file
        """
        details = {}
        if config_file is not None:
            details['config_file'] = config_file

        super().__init__(message, details)
        self.config_file = config_file


class RenderError(PikegenError):
    """Raised when rendering output text fails, e.g. in a template."""

    def __init__(self, message: str, template: Optional[str] = None):
        details = {}
        if template is not None:
            details['template'] = template

        super().__init__(message, details)
        self.template = template
