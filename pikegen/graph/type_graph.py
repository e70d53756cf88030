"""
Type Graph and Traversal Order for pikegen.

The graph is a read-only view over the type nodes reachable from the
top-level types. It provides the dependency-respecting order in which
named types are declared.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Set, Tuple

from .types import (
    Type,
    UnionType,
    child_types,
    is_inlined,
    is_nullable_union,
    type_name_candidate,
)
from ..utils.exceptions import TypeGraphError
from ..utils.logging import get_logger

logger = get_logger(__name__)


class TypeGraph:
    """
    Immutable type graph rooted at ordered top-level types.

    Cycles are allowed through named types; arrays, maps and anonymous
    unions are only reached through their owners.
    """

    def __init__(self, top_levels: Mapping[str, Type]):
        """
        Initialize the graph.

        Args:
            top_levels: Ordered mapping from top-level key to type

        Raises:
            TypeGraphError: If there are no top-level types
        """
        if not top_levels:
            raise TypeGraphError("A type graph needs at least one top-level type")

        self._top_levels: Tuple[Tuple[str, Type], ...] = tuple(top_levels.items())
        self._named_types: Tuple[Type, ...] = tuple(self._collect_named_types())
        self._check_unions()
        logger.debug(
            f"Type graph: {len(self._top_levels)} top levels, {len(self._named_types)} named types"
        )

    def _collect_named_types(self) -> List[Type]:
        """Depth-first post-order over the graph; dependencies come first."""
        ordered: List[Type] = []
        visited: Dict[int, Type] = {}

        def visit(t: Type) -> None:
            if id(t) in visited:
                return
            visited[id(t)] = t
            for child in child_types(t):
                visit(child)
            if t.is_named:
                ordered.append(t)

        for _, t in self._top_levels:
            visit(t)
        return ordered

    def _check_unions(self) -> None:
        """
        Reject unions that cannot be written out.

        A nullable union is spelled inline wherever it is used, so it must
        not reach itself through arrays, maps and nullable unions alone.
        """
        for t in self._named_types:
            if not isinstance(t, UnionType):
                continue
            if not t.members:
                raise TypeGraphError(f"Members of union '{type_name_candidate(t)}' were never set")
            if is_nullable_union(t) and self._reaches_inline(t):
                raise TypeGraphError(
                    f"Nullable union '{type_name_candidate(t)}' refers to itself "
                    "without a declared type in between"
                )

    @staticmethod
    def _reaches_inline(target: UnionType) -> bool:
        seen: Set[int] = set()
        pending = list(child_types(target))
        while pending:
            t = pending.pop()
            if t is target:
                return True
            if id(t) in seen or not is_inlined(t):
                continue
            seen.add(id(t))
            pending.extend(child_types(t))
        return False

    def top_levels(self) -> Tuple[Tuple[str, Type], ...]:
        """Ordered (key, type) pairs of the top-level types."""
        return self._top_levels

    def named_types(self) -> Tuple[Type, ...]:
        """All reachable records, enums and unions, dependencies first."""
        return self._named_types

    def declared_types(self) -> Iterator[Type]:
        """Named types that get a declaration, i.e. all but nullable unions."""
        return (t for t in self._named_types if not is_nullable_union(t))

    def __len__(self) -> int:
        return len(self._named_types)
