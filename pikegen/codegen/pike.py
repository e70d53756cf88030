"""
Pike Backend.

Renders a type graph as Pike declarations: one ``class`` per record, one
``enum`` per enumeration and one ``typedef`` per union, followed by a
``Convert`` class holding a decode and an encode stub for every top-level
type. Only the signatures are generated; the stub bodies are empty.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .renderer import TypeGraphRenderer
from .source import MultiWord, Sourcelike, multi_word, paren_if_needed, single_word
from .templates.renderer import JinjaTemplateRenderer, create_template_renderer
from ..config.config import PikegenConfig
from ..graph.type_graph import TypeGraph
from ..graph.types import (
    ArrayType,
    ClassProperty,
    ClassType,
    EnumType,
    MapType,
    PrimitiveType,
    Type,
    TypeVisitor,
    UnionType,
    nullable_from_union,
    remove_null_from_union,
    type_name_candidate,
)
from ..naming.namer import Namer
from ..naming.names import Name
from ..naming.namespace import ForbiddenWordsInfo
from ..utils.constants import (
    BLOCK_CLOSE,
    BLOCK_OPEN,
    BlankLines,
    DECODER_NAME_TEMPLATE,
    DECODER_PARAMETER,
    ENCODER_NAME_TEMPLATE,
    ENCODER_PARAMETER_NAME,
    NamingStyle,
    PIKE_KEYWORDS,
)
from ..utils.logging import RenderLogger
from ..utils.string_utils import string_escape

render_logger = RenderLogger(__name__)

HEADER_TEMPLATE = "pike/header.j2"


class PikeTypeSyntax(TypeVisitor[MultiWord]):
    """
    Maps type nodes to Pike type expressions.

    Records, enums and non-nullable unions are referenced by name, never
    inlined. A nullable union is the one case that looks inside a union:
    it becomes an inline alternation with ``mixed``.
    """

    def __init__(self, name_for_named_type: Callable[[Type], Name]):
        self._name_for_named_type = name_for_named_type

    def type_expr(self, t: Type) -> MultiWord:
        return self.visit(t)

    def visit_any(self, t: PrimitiveType) -> MultiWord:
        return single_word("mixed")

    def visit_null(self, t: PrimitiveType) -> MultiWord:
        return single_word("mixed")

    def visit_bool(self, t: PrimitiveType) -> MultiWord:
        return single_word("bool")

    def visit_integer(self, t: PrimitiveType) -> MultiWord:
        return single_word("int")

    def visit_double(self, t: PrimitiveType) -> MultiWord:
        return single_word("float")

    def visit_string(self, t: PrimitiveType) -> MultiWord:
        return single_word("string")

    def visit_array(self, t: ArrayType) -> MultiWord:
        return single_word("array(", self.visit(t.items), ")")

    def visit_map(self, t: MapType) -> MultiWord:
        # Keys are always strings
        return single_word("mapping(string:", self.visit(t.values), ")")

    def visit_class(self, t: ClassType) -> MultiWord:
        return single_word(self._name_for_named_type(t))

    def visit_enum(self, t: EnumType) -> MultiWord:
        return single_word(self._name_for_named_type(t))

    def visit_union(self, t: UnionType) -> MultiWord:
        if nullable_from_union(t) is not None:
            return multi_word("|", *(paren_if_needed(self.visit(member)) for member in t.members))
        return single_word(self._name_for_named_type(t))


class PikeRenderer(TypeGraphRenderer):
    """Renders a type graph as Pike source."""

    language = "Pike"

    def __init__(
        self,
        graph: TypeGraph,
        config: Optional[PikegenConfig] = None,
        template_renderer: Optional[JinjaTemplateRenderer] = None,
    ):
        super().__init__(graph, config)
        self.type_syntax = PikeTypeSyntax(self.name_for_named_type)
        self._template_renderer = template_renderer

    # -------------------------------------------------------------------------
    # Naming policy
    # -------------------------------------------------------------------------

    def make_named_type_namer(self) -> Namer:
        return Namer(NamingStyle.PASCAL, "named types")

    def namer_for_object_property(self) -> Namer:
        return Namer(NamingStyle.UNDERSCORE, "properties")

    def make_enum_case_namer(self) -> Namer:
        return Namer(NamingStyle.UNDERSCORE, "enum cases")

    def make_union_member_namer(self) -> Namer:
        return Namer(NamingStyle.UNDERSCORE, "union members")

    def forbidden_names_for_global_namespace(self):
        return (
            *PIKE_KEYWORDS,
            self.config.output.convert_class_name,
            *super().forbidden_names_for_global_namespace(),
        )

    def forbidden_for_object_properties(self, c: ClassType, class_name: Name) -> ForbiddenWordsInfo:
        return ForbiddenWordsInfo(names=(), include_global_forbidden=True)

    def forbidden_for_enum_cases(self, e: EnumType, enum_name: Name) -> ForbiddenWordsInfo:
        return ForbiddenWordsInfo(names=(), include_global_forbidden=True)

    def forbidden_for_union_members(self, u: UnionType, union_name: Name) -> ForbiddenWordsInfo:
        return ForbiddenWordsInfo(names=(), include_global_forbidden=True)

    def top_level_dependency_templates(self):
        return (DECODER_NAME_TEMPLATE, ENCODER_NAME_TEMPLATE)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def type_expr(self, t: Type) -> MultiWord:
        return self.type_syntax.type_expr(t)

    def emit_source_structure(self) -> None:
        if self.config.output.leading_comments:
            self.emit_leading_comments()

        self.for_each_named_type(
            BlankLines.LEADING_AND_INTERPOSING,
            self.emit_class_definition,
            self.emit_enum,
            self.emit_union,
        )
        self.ensure_blank_line()
        self.emit_convert_module()

    def emit_leading_comments(self) -> None:
        from .. import __version__

        renderer = self._template_renderer or create_template_renderer()
        top_levels = []
        for key, t in self.graph.top_levels():
            decoder = self.dependents_for_top_level(key)[0]
            top_levels.append({
                "type": self.serialize(self.type_expr(t)),
                "decoder": self.resolve(decoder),
            })

        text = renderer.render_file(HEADER_TEMPLATE, {
            "version": __version__,
            "convert_class": self.config.output.convert_class_name,
            "top_levels": top_levels,
        })
        for line in text.splitlines():
            self.emit_line(line)

    def emit_block(self, line: Sourcelike, body: Callable[[], None]) -> None:
        self.emit_line(line, BLOCK_OPEN)
        with self.indent():
            body()
        self.emit_line(BLOCK_CLOSE)

    def emit_class_definition(self, c: ClassType, class_name: Name) -> None:
        self.emit_description(c.description)
        self.emit_block(["class ", class_name], lambda: self.emit_class_members(c))

    def emit_class_members(self, c: ClassType) -> None:
        table: List[List[Sourcelike]] = []

        def add_row(name: Name, json_name: str, prop: ClassProperty) -> None:
            table.append([
                [self.type_expr(prop.type), " "],
                [name, "; "],
                ['// json: "', string_escape(json_name), '"'],
            ])

        self.for_each_class_property(c, BlankLines.NONE, add_row)
        self.emit_table(table)

    def emit_enum(self, e: EnumType, enum_name: Name) -> None:
        self.emit_description(e.description)

        def body() -> None:
            table: List[List[Sourcelike]] = []
            self.for_each_enum_case(
                e,
                BlankLines.NONE,
                lambda name, json_name: table.append(
                    [[name, ", "], ['// json: "', string_escape(json_name), '"']]
                ),
            )
            self.emit_table(table)

        self.emit_block(["enum ", enum_name], body)

    def emit_union(self, u: UnionType, union_name: Optional[Name]) -> None:
        if nullable_from_union(u) is not None:
            render_logger.log_nullable_union_skipped(type_name_candidate(u))
            return

        self.emit_description(u.description)

        null_member, non_nulls = remove_null_from_union(u)
        members: List[MultiWord] = []
        self.for_each_union_member(
            u,
            non_nulls,
            BlankLines.NONE,
            lambda name, t: members.append(paren_if_needed(self.type_expr(t))),
        )
        if not members:
            members.append(self.type_expr(null_member))

        self.emit_line("typedef ", multi_word("|", *members), " ", union_name, ";")

    def emit_convert_module(self) -> None:
        self.emit_block(
            ["class ", self.config.output.convert_class_name],
            self.emit_convert_module_body,
        )

    def emit_convert_module_body(self) -> None:
        def emit_pair(key: str, t: Type, name: Name) -> None:
            decoder, encoder = self.dependents_for_top_level(key)
            type_source = self.type_expr(t)
            self.emit_block([type_source, " ", decoder, "(", DECODER_PARAMETER, ")"], lambda: None)
            self.ensure_blank_line()
            self.emit_block(
                ["string ", encoder, "(", type_source, " ", ENCODER_PARAMETER_NAME, ")"],
                lambda: None,
            )

        self.for_each_top_level(BlankLines.LEADING_AND_INTERPOSING, emit_pair)
