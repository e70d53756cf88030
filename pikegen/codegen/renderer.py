"""
Renderer Base for Target Languages.

This module provides the machinery every backend shares: allocating
names for the whole type graph in one pre-pass, iterating named types,
top levels, properties, cases and members in a stable order, and
delegating text output to the emitter. A backend supplies naming policy
through the hook methods and writes its output in
`emit_source_structure`.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from .emitter import SourceEmitter, for_each_with_blank_lines
from .source import Sourcelike
from ..config.config import PikegenConfig, get_config
from ..graph.type_graph import TypeGraph
from ..graph.types import (
    ClassProperty,
    ClassType,
    EnumType,
    Type,
    UnionType,
    is_nullable_union,
    type_name_candidate,
)
from ..naming.namer import Namer
from ..naming.names import DerivedName, Name, SimpleName
from ..naming.namespace import ForbiddenWordsInfo, NamingEngine
from ..utils.constants import BlankLines
from ..utils.logging import RenderLogger

render_logger = RenderLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Complete result of rendering a type graph."""

    text: str
    declaration_count: int
    top_level_count: int

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self.text.splitlines())


class TypeGraphRenderer(ABC):
    """
    Base class for backends that render a type graph as source text.

    All names are allocated when the renderer is created; they are
    resolved on first use and stay fixed for the renderer's lifetime.
    """

    language = "abstract"

    def __init__(self, graph: TypeGraph, config: Optional[PikegenConfig] = None):
        self.graph = graph
        self.config = config or get_config()
        self.naming = NamingEngine(self.forbidden_names_for_global_namespace())
        self.emitter = SourceEmitter(self.naming.resolve, self.config.output.indent_size)

        self._named_type_names: Dict[Type, Name] = {}
        self._top_level_names: Dict[str, Name] = {}
        self._top_level_dependents: Dict[str, Tuple[Name, ...]] = {}
        self._property_names: Dict[ClassType, Tuple[Name, ...]] = {}
        self._enum_case_names: Dict[EnumType, Tuple[Name, ...]] = {}
        self._union_member_names: Dict[UnionType, Tuple[Name, ...]] = {}
        self._setup_names()

    # -------------------------------------------------------------------------
    # Naming policy hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def make_named_type_namer(self) -> Namer:
        pass

    @abstractmethod
    def namer_for_object_property(self) -> Namer:
        pass

    @abstractmethod
    def make_enum_case_namer(self) -> Namer:
        pass

    @abstractmethod
    def make_union_member_namer(self) -> Namer:
        pass

    def forbidden_names_for_global_namespace(self) -> Tuple[str, ...]:
        return tuple(self.config.naming.extra_forbidden_names)

    def forbidden_for_object_properties(self, c: ClassType, class_name: Name) -> ForbiddenWordsInfo:
        return ForbiddenWordsInfo()

    def forbidden_for_enum_cases(self, e: EnumType, enum_name: Name) -> ForbiddenWordsInfo:
        return ForbiddenWordsInfo()

    def forbidden_for_union_members(self, u: UnionType, union_name: Name) -> ForbiddenWordsInfo:
        return ForbiddenWordsInfo()

    def top_level_dependency_templates(self) -> Tuple[str, ...]:
        """Templates of global names derived from each top-level name."""
        return ()

    # -------------------------------------------------------------------------
    # Name allocation
    # -------------------------------------------------------------------------

    def _setup_names(self) -> None:
        global_namespace = self.naming.global_namespace
        type_namer = self.make_named_type_namer()

        for t in self.graph.named_types():
            if is_nullable_union(t):
                continue
            self._named_type_names[t] = global_namespace.add(
                SimpleName([type_name_candidate(t)], type_namer)
            )

        for key, t in self.graph.top_levels():
            name = self._named_type_names.get(t)
            if name is None:
                name = global_namespace.add(SimpleName([key], type_namer))
            self._top_level_names[key] = name

        templates = self.top_level_dependency_templates()
        for key, name in self._top_level_names.items():
            self._top_level_dependents[key] = tuple(
                global_namespace.add(DerivedName(name, template)) for template in templates
            )

        for t, name in self._named_type_names.items():
            if isinstance(t, ClassType):
                self._property_names[t] = self._add_child_names(
                    f"class {type_name_candidate(t)}",
                    self.forbidden_for_object_properties(t, name),
                    [prop.json_name for prop in t.properties],
                    self.namer_for_object_property(),
                )
            elif isinstance(t, EnumType):
                self._enum_case_names[t] = self._add_child_names(
                    f"enum {type_name_candidate(t)}",
                    self.forbidden_for_enum_cases(t, name),
                    t.cases,
                    self.make_enum_case_namer(),
                )
            elif isinstance(t, UnionType):
                self._union_member_names[t] = self._add_child_names(
                    f"union {type_name_candidate(t)}",
                    self.forbidden_for_union_members(t, name),
                    [type_name_candidate(member) for member in t.members],
                    self.make_union_member_namer(),
                )

    def _add_child_names(self, description, info, candidates, namer) -> Tuple[Name, ...]:
        namespace = self.naming.child_namespace(description, info)
        return tuple(namespace.add(SimpleName([candidate], namer)) for candidate in candidates)

    # -------------------------------------------------------------------------
    # Name lookup
    # -------------------------------------------------------------------------

    def name_for_named_type(self, t: Type) -> Name:
        return self._named_type_names[t]

    def name_for_top_level(self, key: str) -> Name:
        return self._top_level_names[key]

    def dependents_for_top_level(self, key: str) -> Tuple[Name, ...]:
        return self._top_level_dependents[key]

    def resolve(self, name: Name) -> str:
        return self.naming.resolve(name)

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def for_each_named_type(
        self,
        blank_lines: BlankLines,
        on_class: Callable[[ClassType, Name], None],
        on_enum: Callable[[EnumType, Name], None],
        on_union: Callable[[UnionType, Optional[Name]], None],
    ) -> None:
        """
        Visit every named type in declaration order.

        Nullable unions are passed with no name: they have none.
        """
        def visit(t: Type) -> None:
            name = self._named_type_names.get(t)
            if isinstance(t, ClassType):
                on_class(t, name)
            elif isinstance(t, EnumType):
                on_enum(t, name)
            else:
                on_union(t, name)

        for_each_with_blank_lines(self.emitter, self.graph.named_types(), blank_lines, visit)

    def for_each_top_level(self, blank_lines: BlankLines, f: Callable[[str, Type, Name], None]) -> None:
        for_each_with_blank_lines(
            self.emitter,
            self.graph.top_levels(),
            blank_lines,
            lambda item: f(item[0], item[1], self._top_level_names[item[0]]),
        )

    def for_each_class_property(
        self, c: ClassType, blank_lines: BlankLines, f: Callable[[Name, str, ClassProperty], None]
    ) -> None:
        names = self._property_names[c]
        for_each_with_blank_lines(
            self.emitter,
            range(len(c.properties)),
            blank_lines,
            lambda i: f(names[i], c.properties[i].json_name, c.properties[i]),
        )

    def for_each_enum_case(self, e: EnumType, blank_lines: BlankLines, f: Callable[[Name, str], None]) -> None:
        names = self._enum_case_names[e]
        for_each_with_blank_lines(
            self.emitter, range(len(e.cases)), blank_lines, lambda i: f(names[i], e.cases[i])
        )

    def for_each_union_member(
        self,
        u: UnionType,
        members: Sequence[Type],
        blank_lines: BlankLines,
        f: Callable[[Name, Type], None],
    ) -> None:
        """Visit the given subset of a union's members, in union order."""
        names = self._union_member_names[u]
        selected = [i for i, member in enumerate(u.members) if any(member is m for m in members)]
        for_each_with_blank_lines(self.emitter, selected, blank_lines, lambda i: f(names[i], u.members[i]))

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def emit_line(self, *parts: Sourcelike) -> None:
        self.emitter.emit_line(*parts)

    def emit_table(self, rows: Sequence[Sequence[Sourcelike]]) -> None:
        self.emitter.emit_table(rows)

    def ensure_blank_line(self) -> None:
        self.emitter.ensure_blank_line()

    def indent(self):
        return self.emitter.indent()

    def emit_description(self, description: Sequence[str]) -> None:
        if description and self.config.output.emit_descriptions:
            self.emitter.emit_comment_lines(description)

    def serialize(self, source: Sourcelike) -> str:
        return self.emitter.serialize(source)

    @abstractmethod
    def emit_source_structure(self) -> None:
        pass

    def render(self) -> RenderResult:
        """Render the whole graph; repeated calls give identical text."""
        start = time.perf_counter()
        declarations = sum(1 for _ in self.graph.declared_types())
        top_levels = len(self.graph.top_levels())
        render_logger.log_render_start(self.language, len(self.graph), top_levels)

        self.emitter.reset()
        self.emit_source_structure()
        text = self.emitter.text()

        render_logger.log_render_complete(
            self.language, len(self.emitter.lines), time.perf_counter() - start
        )
        return RenderResult(text=text, declaration_count=declarations, top_level_count=top_levels)
