"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
pikegen package with appropriate formatting and levels.
"""

import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the pikegen package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
    """
    # Determine log level
    if level is None:
        level = os.environ.get("PIKEGEN_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    # Configure root logger for pikegen
    logger = logging.getLogger("pikegen")
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console handler (stderr, generated code goes to stdout)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == "pikegen" or name.startswith("pikegen."):
        return logging.getLogger(name)
    return logging.getLogger(f"pikegen.{name}")


class RenderLogger:
    """
    Logging helpers for one rendering pass.

    Groups the messages emitted while a type graph is turned into
    source text so that every backend reports progress the same way.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_render_start(self, language: str, named_count: int, top_level_count: int) -> None:
        """
        Log beginning of a rendering pass.

        Args:
            language: Target language name
            named_count: Number of named types in the graph
            top_level_count: Number of top-level types in the graph
        """
        self.logger.debug(
            f"Rendering {language}: {named_count} named types, {top_level_count} top levels"
        )

    def log_render_complete(self, language: str, line_count: int, elapsed: float) -> None:
        """
        Log completion of a rendering pass.

        Args:
            language: Target language name
            line_count: Number of lines produced
            elapsed: Time spent rendering (seconds)
        """
        self.logger.info(f"Rendered {line_count} lines of {language} in {elapsed:.3f}s")

    def log_namespace_resolved(self, namespace: str, names: int) -> None:
        """
        Log resolution of every name in a namespace.

        Args:
            namespace: Namespace description
            names: Number of names resolved
        """
        self.logger.debug(f"Resolved {names} names in namespace '{namespace}'")

    def log_nullable_union_skipped(self, members: str) -> None:
        """
        Log that a nullable union got no declaration of its own.

        Args:
            members: Printable summary of the union members
        """
        self.logger.debug(f"No declaration for nullable union of {members}")


# Initialize logging on module import
setup_logging()
