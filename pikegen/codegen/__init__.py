"""
Codegen module for rendering type graphs as source text.

- source: composable syntax fragments
- emitter: line buffer with indentation and aligned tables
- renderer: shared naming pre-pass and traversal for backends
- pike: the Pike backend
"""

from .source import MultiWord, Sourcelike, multi_word, paren_if_needed, serialize, single_word
from .emitter import SourceEmitter, for_each_with_blank_lines
from .renderer import RenderResult, TypeGraphRenderer
from .pike import PikeRenderer, PikeTypeSyntax

__all__ = [
    "MultiWord",
    "Sourcelike",
    "multi_word",
    "paren_if_needed",
    "serialize",
    "single_word",
    "SourceEmitter",
    "for_each_with_blank_lines",
    "RenderResult",
    "TypeGraphRenderer",
    "PikeRenderer",
    "PikeTypeSyntax",
]
