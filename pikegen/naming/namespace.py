"""
Namespaces and the Naming Engine.

One global namespace holds the named types and the names derived from
the top-level types. Every record, enum and union gets a child namespace
for its properties, cases or members. A child forbids its own words, the
global forbidden words (unless told otherwise) and every resolved global
name.

Names are resolved lazily: the first query against a namespace assigns
every name registered in it, in registration order, simple names before
derived ones. Because assignment depends only on registration order, the
result is the same whichever component asks first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .names import DerivedName, Name
from ..utils.exceptions import NamingError
from ..utils.logging import RenderLogger

render_logger = RenderLogger(__name__)


@dataclass(frozen=True)
class ForbiddenWordsInfo:
    """Words a child namespace must avoid."""

    names: Tuple[str, ...] = ()
    include_global_forbidden: bool = True


class Namespace:
    """A scope in which every name resolves to a distinct string."""

    def __init__(
        self,
        description: str,
        forbidden: Iterable[str] = (),
        parent: Optional["Namespace"] = None,
        include_parent_forbidden: bool = True,
    ):
        self.description = description
        self.parent = parent
        self._forbidden: Tuple[str, ...] = tuple(forbidden)
        self._include_parent_forbidden = include_parent_forbidden
        self._names: List[Name] = []
        self._assigned: Optional[Dict[Name, str]] = None

    @property
    def names(self) -> Tuple[Name, ...]:
        return tuple(self._names)

    @property
    def is_resolved(self) -> bool:
        return self._assigned is not None

    def add(self, name: Name) -> Name:
        """Register a name; only allowed before the namespace is resolved."""
        if self._assigned is not None:
            raise NamingError(f"Cannot add {name!r} after names were assigned", self.description)
        if name.namespace is not None:
            raise NamingError(f"{name!r} already belongs to '{name.namespace.description}'", self.description)
        name.namespace = self
        self._names.append(name)
        return name

    def forbidden_words(self) -> Set[str]:
        """Own forbidden words plus whatever the parent scope contributes."""
        words = set(self._forbidden)
        if self.parent is not None:
            if self._include_parent_forbidden:
                words.update(self.parent.forbidden_words())
            words.update(self.parent.assigned_names())
        return words

    def assigned_names(self) -> Set[str]:
        self._ensure_assigned()
        return set(self._assigned.values())

    def resolve(self, name: Name) -> str:
        """Return the final string of a name owned by this namespace."""
        if name.namespace is not self:
            raise NamingError(f"{name!r} is not registered here", self.description)
        self._ensure_assigned()
        return self._assigned[name]

    def _ensure_assigned(self) -> None:
        if self._assigned is not None:
            return

        used = self.forbidden_words()
        assigned: Dict[Name, str] = {}

        def resolve_base(base: Name) -> str:
            if base.namespace is self:
                if base not in assigned:
                    raise NamingError(f"{base!r} must be registered before names derived from it", self.description)
                return assigned[base]
            if base.namespace is None:
                raise NamingError(f"{base!r} is not registered in any namespace", self.description)
            return base.namespace.resolve(base)

        simple = [name for name in self._names if not isinstance(name, DerivedName)]
        derived = [name for name in self._names if isinstance(name, DerivedName)]
        for name in simple + derived:
            proposals = name.proposals(resolve_base)
            chosen = next((p for p in proposals if p not in used), None)
            number = 2
            while chosen is None:
                candidate = name.alternative(proposals[0], number)
                if candidate not in used:
                    chosen = candidate
                number += 1
            used.add(chosen)
            assigned[name] = chosen

        self._assigned = assigned
        render_logger.log_namespace_resolved(self.description, len(assigned))

    def __repr__(self) -> str:
        return f"Namespace({self.description!r}, names={len(self._names)})"


class NamingEngine:
    """
    Owns the global namespace and its per-type child namespaces.

    Args:
        forbidden: Words no global name may take, e.g. target keywords
    """

    def __init__(self, forbidden: Iterable[str] = ()):
        self.global_namespace = Namespace("global", forbidden)
        self._children: List[Namespace] = []

    def child_namespace(self, description: str, info: Optional[ForbiddenWordsInfo] = None) -> Namespace:
        info = info or ForbiddenWordsInfo()
        namespace = Namespace(
            description,
            info.names,
            parent=self.global_namespace,
            include_parent_forbidden=info.include_global_forbidden,
        )
        self._children.append(namespace)
        return namespace

    @property
    def namespaces(self) -> Tuple[Namespace, ...]:
        return (self.global_namespace, *self._children)

    def resolve(self, name: Name) -> str:
        """Final string for a name; cached after the first call."""
        if name.namespace is None:
            raise NamingError(f"{name!r} is not registered in any namespace")
        return name.namespace.resolve(name)
