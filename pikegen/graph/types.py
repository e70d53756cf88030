"""
Type Node Definitions for pikegen.

This module contains the nodes of the type graph that backends render:
primitives, arrays, maps, records (classes), enumerations and unions.
Records, enums and unions are the named types; they compare and hash by
identity so they can key the naming tables, while arrays and maps are
purely structural.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Generic, Optional, Tuple, TypeVar

from ..utils.exceptions import TypeGraphError, UnsupportedTypeError


class TypeKind(Enum):
    """Kinds of type nodes."""

    ANY = "any"
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    ARRAY = "array"
    MAP = "map"
    CLASS = "class"
    ENUM = "enum"
    UNION = "union"


PRIMITIVE_KINDS = frozenset({
    TypeKind.ANY,
    TypeKind.NULL,
    TypeKind.BOOL,
    TypeKind.INTEGER,
    TypeKind.DOUBLE,
    TypeKind.STRING,
})

NAMED_KINDS = frozenset({TypeKind.CLASS, TypeKind.ENUM, TypeKind.UNION})


class Type:
    """Base class of all type nodes."""

    kind: TypeKind

    @property
    def is_named(self) -> bool:
        return self.kind in NAMED_KINDS


@dataclass(eq=False)
class PrimitiveType(Type):
    """A primitive: any, null, bool, integer, double or string."""

    kind: TypeKind

    def __post_init__(self):
        if self.kind not in PRIMITIVE_KINDS:
            raise TypeGraphError(f"'{self.kind.value}' is not a primitive type kind")


@dataclass(eq=False)
class ArrayType(Type):
    """A homogeneous array of `items`."""

    kind: ClassVar[TypeKind] = TypeKind.ARRAY
    items: Type


@dataclass(eq=False)
class MapType(Type):
    """A mapping with string keys and `values`."""

    kind: ClassVar[TypeKind] = TypeKind.MAP
    values: Type


@dataclass(eq=False)
class ClassProperty:
    """One property of a record, keyed by its original external name."""

    json_name: str
    type: Type
    description: Tuple[str, ...] = ()


@dataclass(eq=False, repr=False)
class ClassType(Type):
    """
    A named record with ordered properties.

    Properties may be attached after construction, once, so that records
    can refer to themselves or to each other.
    """

    kind: ClassVar[TypeKind] = TypeKind.CLASS
    name: str
    properties: Tuple[ClassProperty, ...] = ()
    description: Tuple[str, ...] = ()

    def __post_init__(self):
        self._properties_set = False
        if self.properties:
            properties = self.properties
            self.properties = ()
            self.set_properties(properties)

    def set_properties(self, properties) -> None:
        """Attach the record's properties; allowed exactly once."""
        if self._properties_set:
            raise TypeGraphError(f"Properties of class '{self.name}' are already set")

        properties = tuple(properties)
        seen = set()
        for prop in properties:
            if prop.json_name in seen:
                raise TypeGraphError(
                    f"Duplicate property '{prop.json_name}' in class '{self.name}'"
                )
            seen.add(prop.json_name)

        self.properties = properties
        self._properties_set = True

    def __repr__(self) -> str:
        return f"ClassType(name={self.name!r}, properties={len(self.properties)})"


@dataclass(eq=False)
class EnumType(Type):
    """A named enumeration of string cases."""

    kind: ClassVar[TypeKind] = TypeKind.ENUM
    name: str
    cases: Tuple[str, ...]
    description: Tuple[str, ...] = ()

    def __post_init__(self):
        self.cases = tuple(self.cases)
        if len(set(self.cases)) != len(self.cases):
            raise TypeGraphError(f"Duplicate case in enum '{self.name}'")


@dataclass(eq=False, repr=False)
class UnionType(Type):
    """
    A union of member types; `name` is None for anonymous unions.

    Like record properties, members may be attached after construction,
    once, so that a union can reach itself through an array or a map.
    """

    kind: ClassVar[TypeKind] = TypeKind.UNION
    members: Tuple[Type, ...] = ()
    name: Optional[str] = None
    description: Tuple[str, ...] = ()

    def __post_init__(self):
        self._members_set = False
        if self.members:
            members = self.members
            self.members = ()
            self.set_members(members)

    def set_members(self, members) -> None:
        """Attach the union's members; allowed exactly once."""
        label = f"'{self.name}'" if self.name is not None else "(anonymous)"
        if self._members_set:
            raise TypeGraphError(f"Members of union {label} are already set")

        members = tuple(members)
        if not members:
            raise TypeGraphError("A union needs at least one member")
        if any(member is self for member in members):
            raise TypeGraphError(f"Union {label} contains itself")

        self.members = members
        self._members_set = True

    def __repr__(self) -> str:
        return f"UnionType(name={self.name!r}, members={len(self.members)})"


# =============================================================================
# Union Helpers
# =============================================================================

def remove_null_from_union(union: UnionType) -> Tuple[Optional[Type], Tuple[Type, ...]]:
    """Split a union into its null member (if any) and its other members."""
    null_member = None
    non_nulls = []
    for member in union.members:
        if member.kind is TypeKind.NULL:
            null_member = member
        else:
            non_nulls.append(member)
    return null_member, tuple(non_nulls)


def nullable_from_union(union: UnionType) -> Optional[Type]:
    """
    Return X when the union's members are exactly {null, X}.

    Such a union only means "X, optionally absent" and never gets a
    declaration of its own.
    """
    if len(union.members) != 2:
        return None
    null_member, non_nulls = remove_null_from_union(union)
    if null_member is None or len(non_nulls) != 1:
        return None
    return non_nulls[0]


def is_nullable_union(t: Type) -> bool:
    return isinstance(t, UnionType) and nullable_from_union(t) is not None


def is_inlined(t: Type) -> bool:
    """True for nodes written out in place: arrays, maps and nullable unions."""
    return isinstance(t, (ArrayType, MapType)) or is_nullable_union(t)


def child_types(t: Type) -> Tuple[Type, ...]:
    """Direct children of a node, in declaration order."""
    if isinstance(t, ArrayType):
        return (t.items,)
    if isinstance(t, MapType):
        return (t.values,)
    if isinstance(t, ClassType):
        return tuple(prop.type for prop in t.properties)
    if isinstance(t, UnionType):
        return t.members
    return ()


def type_name_candidate(t: Type, _enclosing: Tuple[Type, ...] = ()) -> str:
    """A descriptive name for a type, used when it has no name of its own."""
    if isinstance(t, (ClassType, EnumType)):
        return t.name
    if isinstance(t, ArrayType):
        return f"{type_name_candidate(t.items, _enclosing)} array"
    if isinstance(t, MapType):
        return f"{type_name_candidate(t.values, _enclosing)} map"
    if isinstance(t, UnionType):
        if t.name is not None:
            return t.name
        # An anonymous union met again inside itself
        if any(t is outer for outer in _enclosing):
            return "union"
        return " or ".join(
            type_name_candidate(member, (*_enclosing, t)) for member in t.members
        )
    return t.kind.value


# =============================================================================
# Visitor
# =============================================================================

R = TypeVar("R")

_VISIT_METHODS: Dict[TypeKind, str] = {
    TypeKind.ANY: "visit_any",
    TypeKind.NULL: "visit_null",
    TypeKind.BOOL: "visit_bool",
    TypeKind.INTEGER: "visit_integer",
    TypeKind.DOUBLE: "visit_double",
    TypeKind.STRING: "visit_string",
    TypeKind.ARRAY: "visit_array",
    TypeKind.MAP: "visit_map",
    TypeKind.CLASS: "visit_class",
    TypeKind.ENUM: "visit_enum",
    TypeKind.UNION: "visit_union",
}

_unhandled = set(TypeKind) - set(_VISIT_METHODS)
if _unhandled:
    raise UnsupportedTypeError(
        [kind.value for kind in _unhandled], "no visitor method in the dispatch table"
    )


class TypeVisitor(ABC, Generic[R]):
    """
    Exhaustive visitor over type nodes.

    Every kind has an abstract method, so a subclass that misses one
    cannot be instantiated.
    """

    def visit(self, t: Type) -> R:
        return getattr(self, _VISIT_METHODS[t.kind])(t)

    @abstractmethod
    def visit_any(self, t: PrimitiveType) -> R:
        pass

    @abstractmethod
    def visit_null(self, t: PrimitiveType) -> R:
        pass

    @abstractmethod
    def visit_bool(self, t: PrimitiveType) -> R:
        pass

    @abstractmethod
    def visit_integer(self, t: PrimitiveType) -> R:
        pass

    @abstractmethod
    def visit_double(self, t: PrimitiveType) -> R:
        pass

    @abstractmethod
    def visit_string(self, t: PrimitiveType) -> R:
        pass

    @abstractmethod
    def visit_array(self, t: ArrayType) -> R:
        pass

    @abstractmethod
    def visit_map(self, t: MapType) -> R:
        pass

    @abstractmethod
    def visit_class(self, t: ClassType) -> R:
        pass

    @abstractmethod
    def visit_enum(self, t: EnumType) -> R:
        pass

    @abstractmethod
    def visit_union(self, t: UnionType) -> R:
        pass
