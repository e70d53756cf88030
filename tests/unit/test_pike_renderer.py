"""
Unit tests for the Pike renderer: name allocation, declarations and
the conversion class.
"""

import pytest

from pikegen.codegen.pike import PikeRenderer
from pikegen.codegen.renderer import RenderResult
from pikegen.config.config import PikegenConfig
from pikegen.graph.loader import build_type_graph
from pikegen.graph.type_graph import TypeGraph
from pikegen.graph.types import (
    ArrayType,
    ClassProperty,
    ClassType,
    EnumType,
    MapType,
    PrimitiveType,
    TypeKind,
    UnionType,
)
from pikegen.utils.constants import BlankLines


def prim(kind):
    return PrimitiveType(kind)


class TestNameAllocation:
    """Test the names the renderer allocates for a graph."""

    def test_named_type_and_contract_names(self, plain_config, person_class):
        renderer = PikeRenderer(TypeGraph({"Person": person_class}), plain_config)
        assert renderer.resolve(renderer.name_for_named_type(person_class)) == "Person"
        decoder, encoder = renderer.dependents_for_top_level("Person")
        assert renderer.resolve(decoder) == "to_Person"
        assert renderer.resolve(encoder) == "Person_to_json"

    def test_top_level_shares_named_type_name(self, plain_config, person_class):
        renderer = PikeRenderer(TypeGraph({"Whatever": person_class}), plain_config)
        assert renderer.name_for_top_level("Whatever") is renderer.name_for_named_type(person_class)

    def test_structural_top_level_named_from_key(self, plain_config, person_class):
        graph = TypeGraph({"people list": ArrayType(person_class)})
        renderer = PikeRenderer(graph, plain_config)
        assert renderer.resolve(renderer.name_for_top_level("people list")) == "PeopleList"

    def test_convert_is_reserved(self, plain_config):
        convert = ClassType("Convert")
        renderer = PikeRenderer(TypeGraph({"Convert": convert}), plain_config)
        assert renderer.resolve(renderer.name_for_named_type(convert)) == "Convert2"

    def test_name_without_legal_characters(self, render):
        text = render(ClassType("ÄÖ"), top_level="ÄÖ")
        assert text.startswith("class Empty {\n}\n")
        assert "    Empty to_Empty(string json_str) {\n" in text

    def test_keywords_are_reserved(self, render):
        cls = ClassType("mapping")
        cls.set_properties([ClassProperty("string", prim(TypeKind.STRING))])
        text = render(cls, top_level="mapping")
        assert "class Mapping {\n    string string_2; // json: \"string\"\n}\n" in text

    def test_same_named_classes_distinct(self, plain_config):
        first, second = ClassType("Item"), ClassType("Item")
        holder = ClassType("Holder")
        holder.set_properties([ClassProperty("a", first), ClassProperty("b", second)])
        renderer = PikeRenderer(TypeGraph({"Holder": holder}), plain_config)
        names = {renderer.resolve(renderer.name_for_named_type(t)) for t in (first, second)}
        assert names == {"Item", "Item2"}

    def test_nullable_union_gets_no_name(self, plain_config, nullable_string):
        holder = ClassType("Holder")
        holder.set_properties([ClassProperty("x", nullable_string)])
        renderer = PikeRenderer(TypeGraph({"Holder": holder}), plain_config)
        with pytest.raises(KeyError):
            renderer.name_for_named_type(nullable_string)

    def test_extra_forbidden_names(self, plain_config, person_class):
        plain_config.naming.extra_forbidden_names = ["Person"]
        renderer = PikeRenderer(TypeGraph({"Person": person_class}), plain_config)
        assert renderer.resolve(renderer.name_for_named_type(person_class)) == "Person2"
        decoder, _ = renderer.dependents_for_top_level("Person")
        assert renderer.resolve(decoder) == "to_Person2"

    def test_property_avoids_global_forbidden(self, render, plain_config, person_class):
        plain_config.naming.extra_forbidden_names = ["name"]
        text = render(person_class, config=plain_config, top_level="Person")
        assert "    string name_2; // json: \"name\"\n" in text


class TestTraversal:
    """Test the iteration helpers the backend builds on."""

    def test_for_each_named_type(self, plain_config, rich_graph):
        renderer = PikeRenderer(rich_graph, plain_config)
        seen = []
        renderer.for_each_named_type(
            BlankLines.NONE,
            lambda c, n: seen.append(("class", renderer.resolve(n))),
            lambda e, n: seen.append(("enum", renderer.resolve(n))),
            lambda u, n: seen.append(("union", n and renderer.resolve(n))),
        )
        assert seen == [
            ("union", None),
            ("enum", "Color"),
            ("union", "IntOrString"),
            ("class", "Person"),
        ]

    def test_for_each_union_member_subset(self, plain_config):
        null, integer, string = prim(TypeKind.NULL), prim(TypeKind.INTEGER), prim(TypeKind.STRING)
        union = UnionType((integer, null, string), name="Value")
        renderer = PikeRenderer(TypeGraph({"Value": union}), plain_config)
        seen = []
        renderer.for_each_union_member(
            union, (string, integer), BlankLines.NONE,
            lambda name, t: seen.append((renderer.resolve(name), t.kind)),
        )
        assert seen == [("integer", TypeKind.INTEGER), ("string_2", TypeKind.STRING)]


class TestDeclarations:
    """Test the declaration of each named type."""

    def test_class_block(self, render, person_class):
        text = render(person_class, top_level="Person")
        assert text.startswith(
            "class Person {\n"
            "    string name; // json: \"name\"\n"
            "    int    age;  // json: \"age\"\n"
            "}\n"
        )

    def test_empty_class(self, render):
        text = render(ClassType("Empty"), top_level="Empty")
        assert text.startswith("class Empty {\n}\n")

    def test_enum_block(self, render, color_enum):
        text = render(color_enum, top_level="Color")
        assert text.startswith(
            "enum Color {\n"
            "    red,        // json: \"red\"\n"
            "    green,      // json: \"green\"\n"
            "    light_blue, // json: \"light \\\"blue\\\"\"\n"
            "}\n"
        )

    def test_union_typedef(self, render, int_or_string):
        assert render(int_or_string).startswith("typedef int|string IntOrString;\n")

    def test_union_typedef_drops_null(self, render):
        union = UnionType((prim(TypeKind.NULL), prim(TypeKind.INTEGER), prim(TypeKind.STRING)), name="Maybe")
        assert render(union).startswith("typedef int|string Maybe;\n")

    def test_union_typedef_with_nested_alternation(self, render):
        nested = UnionType((prim(TypeKind.NULL), prim(TypeKind.STRING)))
        union = UnionType((prim(TypeKind.INTEGER), ArrayType(nested)), name="Mixed")
        assert render(union).startswith("typedef int|array(mixed|string) Mixed;\n")

    def test_union_typedef_parenthesizes_alternations(self, render):
        nested = UnionType((prim(TypeKind.NULL), prim(TypeKind.STRING)))
        union = UnionType((prim(TypeKind.INTEGER), nested), name="Loose")
        assert render(union).startswith("typedef int|(mixed|string) Loose;\n")

    def test_union_of_only_null(self, render):
        union = UnionType((prim(TypeKind.NULL),), name="Nothing")
        assert render(union).startswith("typedef mixed Nothing;\n")

    def test_recursive_union_typedef(self, render):
        graph = build_type_graph({
            "top_levels": {"Json": "Json"},
            "types": {"Json": {"kind": "union", "members": ["string", {"kind": "array", "items": "Json"}]}},
        })
        text = render(graph)
        assert text.startswith("typedef string|array(Json) Json;\n")
        assert "    Json to_Json(string json_str) {\n" in text
        assert "    string Json_to_json(Json value) {\n" in text

    def test_recursive_union_through_map(self, render):
        tree = UnionType(name="Tree")
        tree.set_members([prim(TypeKind.INTEGER), MapType(tree)])
        assert render(tree).startswith("typedef int|mapping(string:Tree) Tree;\n")

    def test_nullable_union_not_declared(self, render, nullable_string):
        text = render(nullable_string)
        assert "typedef" not in text
        assert "mixed|string to_Top(string json_str) {" in text

    def test_descriptions(self, render, plain_config):
        cls = ClassType("Doc", description=("First line.", "Second line."))
        text = render(cls, top_level="Doc")
        assert text.startswith("// First line.\n// Second line.\nclass Doc {\n")

        plain_config.output.emit_descriptions = False
        assert render(cls, config=plain_config, top_level="Doc").startswith("class Doc {\n")

    def test_union_description(self, render):
        union = UnionType((prim(TypeKind.INTEGER), prim(TypeKind.STRING)), name="Id", description=("An id.",))
        assert render(union).startswith("// An id.\ntypedef int|string Id;\n")


class TestConvertClass:
    """Test the conversion stubs."""

    def test_stub_pair(self, render, person_class):
        text = render(person_class, top_level="Person")
        assert text.endswith(
            "class Convert {\n"
            "    Person to_Person(string json_str) {\n"
            "    }\n"
            "\n"
            "    string Person_to_json(Person value) {\n"
            "    }\n"
            "}\n"
        )

    def test_structural_top_level_uses_type_expression(self, render):
        text = render(MapType(prim(TypeKind.DOUBLE)), top_level="Scores")
        assert "    mapping(string:float) to_Scores(string json_str) {\n" in text
        assert "    string Scores_to_json(mapping(string:float) value) {\n" in text

    def test_pairs_separated_by_blank_line(self, render, person_class):
        graph = TypeGraph({"Person": person_class, "People": ArrayType(person_class)})
        lines = render(graph).splitlines()
        start = lines.index("class Convert {")
        assert lines[start + 1:] == [
            "    Person to_Person(string json_str) {",
            "    }",
            "",
            "    string Person_to_json(Person value) {",
            "    }",
            "",
            "    array(Person) to_People(string json_str) {",
            "    }",
            "",
            "    string People_to_json(array(Person) value) {",
            "    }",
            "}",
        ]

    def test_custom_convert_class_name(self, render, plain_config, person_class):
        plain_config.output.convert_class_name = "Codec"
        text = render(person_class, config=plain_config, top_level="Person")
        assert "class Codec {" in text
        assert "class Convert {" not in text

    def test_indent_size(self, render, plain_config, person_class):
        plain_config.output.indent_size = 2
        text = render(person_class, config=plain_config, top_level="Person")
        assert "  Person to_Person(string json_str) {\n  }\n" in text


class TestRenderResult:
    def test_counts(self, plain_config, rich_graph):
        result = PikeRenderer(rich_graph, plain_config).render()
        assert isinstance(result, RenderResult)
        assert result.declaration_count == 3
        assert result.top_level_count == 2
        assert result.lines[-1] == "}"

    def test_render_is_idempotent(self, plain_config, rich_graph):
        renderer = PikeRenderer(rich_graph, plain_config)
        assert renderer.render().text == renderer.render().text

    def test_separate_renderers_agree(self, rich_graph):
        config = PikegenConfig()
        assert PikeRenderer(rich_graph, config).render().text == PikeRenderer(rich_graph, config).render().text

    def test_uses_global_config_by_default(self, person_class):
        text = PikeRenderer(TypeGraph({"Person": person_class})).render().text
        assert text.startswith("// This file was generated by pikegen")
