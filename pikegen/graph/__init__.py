"""
Type graph package.

Type nodes, the read-only type graph with its declaration order, and the
loader for type graph documents.
"""

from .types import (
    TypeKind,
    Type,
    PrimitiveType,
    ArrayType,
    MapType,
    ClassProperty,
    ClassType,
    EnumType,
    UnionType,
    TypeVisitor,
    nullable_from_union,
    remove_null_from_union,
    is_nullable_union,
    child_types,
)
from .type_graph import TypeGraph
from .loader import build_type_graph, load_type_graph

__all__ = [
    "TypeKind",
    "Type",
    "PrimitiveType",
    "ArrayType",
    "MapType",
    "ClassProperty",
    "ClassType",
    "EnumType",
    "UnionType",
    "TypeVisitor",
    "nullable_from_union",
    "remove_null_from_union",
    "is_nullable_union",
    "child_types",
    "TypeGraph",
    "build_type_graph",
    "load_type_graph",
]
