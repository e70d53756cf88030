"""
pikegen: Pike Declarations from Type Graphs

Renders a type graph of records, enumerations, unions, arrays, maps and
primitives as Pike source: one declaration per named type in dependency
order, plus a Convert class with decode/encode stubs for every top-level
type.

Usage:
    from pikegen import PikeRenderer, load_type_graph

    graph = load_type_graph("schema.yaml")
    print(PikeRenderer(graph).render().text)
"""

__version__ = "0.1.0"
__author__ = "pikegen Team"
__email__ = "pikegen@example.com"

# Public API exports
from .graph import (
    TypeGraph,
    TypeKind,
    PrimitiveType,
    ArrayType,
    MapType,
    ClassProperty,
    ClassType,
    EnumType,
    UnionType,
    build_type_graph,
    load_type_graph,
)

from .codegen import (
    PikeRenderer,
    PikeTypeSyntax,
    RenderResult,
)

from .config import (
    get_config,
    PikegenConfig,
)

from .utils.exceptions import PikegenError

__all__ = [
    "TypeGraph",
    "TypeKind",
    "PrimitiveType",
    "ArrayType",
    "MapType",
    "ClassProperty",
    "ClassType",
    "EnumType",
    "UnionType",
    "build_type_graph",
    "load_type_graph",
    "PikeRenderer",
    "PikeTypeSyntax",
    "RenderResult",
    "get_config",
    "PikegenConfig",
    "PikegenError",
]
