"""
Template Rendering System.

Jinja2 templates for the comment blocks placed at the top of generated
files, organized by target language:
- pike/: Pike templates
"""

from .renderer import (
    JinjaTemplateRenderer,
    create_template_renderer,
)

__all__ = [
    "JinjaTemplateRenderer",
    "create_template_renderer",
]
