"""
Pytest configuration and shared fixtures for pikegen tests.

This module provides common type graph fixtures and renderer factories
used across the test suite.
"""

import pytest

from pikegen.codegen.pike import PikeRenderer
from pikegen.config.config import PikegenConfig, set_config
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


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep environment overrides and the global config out of each test."""
    for var in ("PIKEGEN_CONFIG", "PIKEGEN_INDENT_SIZE", "PIKEGEN_NO_LEADING_COMMENTS"):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


# Primitive helpers
def string_t():
    return PrimitiveType(TypeKind.STRING)


def int_t():
    return PrimitiveType(TypeKind.INTEGER)


def null_t():
    return PrimitiveType(TypeKind.NULL)


# Type fixtures
@pytest.fixture
def person_class():
    """Record Person{name: string, age: integer}."""
    person = ClassType("Person")
    person.set_properties([
        ClassProperty("name", string_t()),
        ClassProperty("age", int_t()),
    ])
    return person


@pytest.fixture
def nullable_string():
    """Union {null, string}."""
    return UnionType((null_t(), string_t()))


@pytest.fixture
def int_or_string():
    """Non-nullable union IntOrString {integer, string}."""
    return UnionType((int_t(), string_t()), name="IntOrString")


@pytest.fixture
def color_enum():
    return EnumType("Color", ("red", "green", "light \"blue\""))


@pytest.fixture
def rich_graph(color_enum, int_or_string):
    """A graph exercising every type kind, with a self-reference."""
    person = ClassType("Person", description=("A person known to the address book.",))
    person.set_properties([
        ClassProperty("name", string_t()),
        ClassProperty("age", int_t()),
        ClassProperty("nickname", UnionType((null_t(), string_t()))),
        ClassProperty("favorite-color", color_enum),
        ClassProperty("lucky number", int_or_string),
        ClassProperty("friends", ArrayType(person)),
        ClassProperty("tags", MapType(PrimitiveType(TypeKind.DOUBLE))),
        ClassProperty("active", PrimitiveType(TypeKind.BOOL)),
        ClassProperty("extra", PrimitiveType(TypeKind.ANY)),
    ])
    return TypeGraph({"Person": person, "People": ArrayType(person)})


@pytest.fixture
def plain_config():
    """Default configuration without the leading comment block."""
    config = PikegenConfig()
    config.output.leading_comments = False
    return config


@pytest.fixture
def render(plain_config):
    """Render a graph (or a single top-level type) to Pike text."""
    def _render(graph_or_type, config=None, top_level="Top"):
        if not isinstance(graph_or_type, TypeGraph):
            graph_or_type = TypeGraph({top_level: graph_or_type})
        return PikeRenderer(graph_or_type, config or plain_config).render().text
    return _render


# Pytest hooks for test collection and reporting
def pytest_collection_modifyitems(config, items):
    """Add markers based on test path."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "filecheck" in path:
            item.add_marker(pytest.mark.filecheck)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "filecheck: FileCheck-style output validation tests"
    )
