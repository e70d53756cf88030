"""
Namers: styling policies for one naming context.

A namer turns the candidate strings of a name into styled identifiers
and, when they are all taken, produces numbered alternatives.
"""

from __future__ import annotations

from typing import Iterable, List

from ..utils.constants import NamingStyle
from ..utils.string_utils import get_style_function


class Namer:
    """Applies one naming style to name candidates."""

    def __init__(self, style: NamingStyle, description: str = ""):
        self.style = style
        self.description = description or style.value
        self._style_function = get_style_function(style)

    def styled(self, candidate: str) -> str:
        return self._style_function(candidate)

    def proposals(self, candidates: Iterable[str]) -> List[str]:
        """Styled candidates, in order, without duplicates."""
        proposals: List[str] = []
        for candidate in candidates:
            styled = self.styled(candidate)
            if styled not in proposals:
                proposals.append(styled)
        return proposals

    def alternative(self, candidate: str, number: int) -> str:
        """A numbered variant, e.g. ``name_2`` or ``Person2``."""
        return self.styled(f"{candidate} {number}")

    def __repr__(self) -> str:
        return f"Namer({self.description!r})"
