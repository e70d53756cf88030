"""
Template Rendering Engine.

This module provides template-based rendering of the leading comment
blocks using Jinja2, with a filter for the comment syntax of the generated
code.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ...utils.constants import COMMENT_PREFIX
from ...utils.exceptions import RenderError

TEMPLATE_DIR = os.path.dirname(__file__)


class JinjaTemplateRenderer:
    """Jinja2-based template renderer for generated source text."""

    def __init__(self, template_dir: Optional[str] = None):
        """Initialize the template renderer."""
        if template_dir is None:
            template_dir = TEMPLATE_DIR

        self._template_dir = Path(template_dir)
        self._env = Environment(
            loader=FileSystemLoader(str(self._template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
            autoescape=False,
        )

        self._setup_custom_filters()

    def _setup_custom_filters(self) -> None:
        """Set up custom Jinja2 filters for source generation."""

        def comment_filter(text: str, prefix: str = COMMENT_PREFIX) -> str:
            """Turn every line of text into a line comment."""
            return "\n".join(f"{prefix}{line}".rstrip() for line in str(text).splitlines())

        self._env.filters["comment"] = comment_filter

    def render_file(self, template_path: str, context: Dict[str, Any]) -> str:
        """Render a template file with the given context."""
        try:
            template = self._env.get_template(template_path)
            return template.render(**context)
        except TemplateError as e:
            raise RenderError(f"Template file rendering failed: {e}", template_path) from e


def create_template_renderer(template_dir: Optional[str] = None) -> JinjaTemplateRenderer:
    """Create a template renderer."""
    return JinjaTemplateRenderer(template_dir)
