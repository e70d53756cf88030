"""
Name handles.

A name is an unresolved identity owned by exactly one namespace. The
namespace turns it into a final string the first time any name in it is
asked for, and the string never changes afterwards.
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

from .namer import Namer
from ..utils.exceptions import NamingError

if TYPE_CHECKING:
    from .namespace import Namespace


class Name:
    """Base class of name handles; compared by identity."""

    def __init__(self):
        self.namespace: Optional["Namespace"] = None

    def proposals(self, resolve) -> Tuple[str, ...]:
        """Preferred strings, best first."""
        raise NotImplementedError

    def alternative(self, proposal: str, number: int) -> str:
        """A numbered variant of `proposal` used when every proposal is taken."""
        raise NotImplementedError


class SimpleName(Name):
    """A name proposed from candidate strings, styled by a namer."""

    def __init__(self, candidates, namer: Namer):
        super().__init__()
        self.candidates: Tuple[str, ...] = tuple(candidates)
        if not self.candidates:
            raise NamingError("A name needs at least one candidate", namer.description)
        self.namer = namer

    def proposals(self, resolve) -> Tuple[str, ...]:
        return tuple(self.namer.proposals(self.candidates))

    def alternative(self, proposal: str, number: int) -> str:
        return self.namer.alternative(self.candidates[0], number)

    def __repr__(self) -> str:
        return f"SimpleName({self.candidates[0]!r})"


class DerivedName(Name):
    """
    A name derived from another, already resolvable name.

    `template` is a format string with one ``{}`` slot for the resolved
    base, e.g. ``"to_{}"``.
    """

    def __init__(self, base: Name, template: str):
        super().__init__()
        if template.count("{}") != 1:
            raise NamingError(f"Derived name template '{template}' needs exactly one '{{}}'")
        self.base = base
        self.template = template

    def proposals(self, resolve) -> Tuple[str, ...]:
        return (self.template.format(resolve(self.base)),)

    def alternative(self, proposal: str, number: int) -> str:
        return f"{proposal}_{number}"

    def __repr__(self) -> str:
        return f"DerivedName({self.template!r}, base={self.base!r})"
