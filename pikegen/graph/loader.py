"""
Type Graph Documents.

A type graph document is a JSON or YAML serialization of an already-built
type graph, so the command line driver can render one without a schema
front end:

    top_levels:
      Person: Person
    types:
      Person:
        kind: class
        description: A person.
        properties:
          name: string
          age: integer
          nickname: {kind: union, members: [null, string]}
      IntOrString: {kind: union, members: [integer, string]}

A type reference is a primitive kind name (``any``, ``null``, ``bool``,
``integer``, ``double``, ``string``; YAML ``null`` also means null), the key
of an entry in ``types``, or an inline ``array``, ``map`` or ``union``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union

import yaml

from .type_graph import TypeGraph
from .types import (
    ArrayType,
    ClassProperty,
    ClassType,
    EnumType,
    MapType,
    PRIMITIVE_KINDS,
    PrimitiveType,
    Type,
    TypeKind,
    UnionType,
)
from ..utils.exceptions import TypeGraphError
from ..utils.logging import get_logger

logger = get_logger(__name__)

_PRIMITIVES = {kind.value: kind for kind in PRIMITIVE_KINDS}
_NAMED_DEFINITION_KINDS = ("class", "enum", "union")
_INLINE_KINDS = ("array", "map", "union")


def _description_lines(value: Any, path: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.splitlines())
    if isinstance(value, list) and all(isinstance(line, str) for line in value):
        return tuple(value)
    raise TypeGraphError("Description must be a string or a list of strings", path)


class _DocumentBuilder:
    """Builds type nodes from one document; named entries are built once."""

    def __init__(self, document: Mapping[str, Any]):
        if not isinstance(document, Mapping):
            raise TypeGraphError("Type graph document must be a mapping", "$")

        definitions = document.get("types") or {}
        if not isinstance(definitions, Mapping):
            raise TypeGraphError("'types' must be a mapping", "$.types")

        self._document = document
        self._definitions: Mapping[str, Any] = definitions
        self._named: Dict[str, Type] = {}

    def build(self) -> TypeGraph:
        # Every named type first, records and unions as empty shells, so
        # properties and members can refer to any named type
        for key, definition in self._definitions.items():
            self._named[key] = self._named_shell(key, definition, f"$.types.{key}")

        for key, definition in self._definitions.items():
            path = f"$.types.{key}"
            t = self._named[key]
            if isinstance(t, ClassType):
                self._fill_properties(t, definition, path)
            elif isinstance(t, UnionType):
                self._fill_members(t, key, definition, path)

        top_levels = self._document.get("top_levels")
        if not isinstance(top_levels, Mapping) or not top_levels:
            raise TypeGraphError("'top_levels' must be a non-empty mapping", "$.top_levels")

        resolved = {
            str(key): self._resolve(ref, f"$.top_levels.{key}")
            for key, ref in top_levels.items()
        }
        return TypeGraph(resolved)

    def _named_shell(self, key: str, definition: Any, path: str) -> Type:
        if not isinstance(definition, Mapping):
            raise TypeGraphError("Type definition must be a mapping", path)
        kind = definition.get("kind")
        if kind not in _NAMED_DEFINITION_KINDS:
            raise TypeGraphError(
                f"Unknown named type kind {kind!r}, expected one of {', '.join(_NAMED_DEFINITION_KINDS)}",
                path,
            )

        description = _description_lines(definition.get("description"), path)
        name = str(definition.get("name", key))

        if kind == "class":
            return ClassType(name=name, description=description)
        if kind == "union":
            return UnionType(name=name, description=description)

        cases = definition.get("cases")
        if not isinstance(cases, list) or not all(isinstance(case, str) for case in cases):
            raise TypeGraphError("Enum cases must be a list of strings", f"{path}.cases")
        return EnumType(name=name, cases=tuple(cases), description=description)

    def _fill_properties(self, cls: ClassType, definition: Mapping[str, Any], path: str) -> None:
        properties = definition.get("properties") or {}
        if not isinstance(properties, Mapping):
            raise TypeGraphError("Properties must be a mapping", f"{path}.properties")

        resolved = []
        for json_name, entry in properties.items():
            prop_path = f"{path}.properties.{json_name}"
            description: Tuple[str, ...] = ()
            if isinstance(entry, Mapping) and "type" in entry:
                description = _description_lines(entry.get("description"), prop_path)
                entry = entry["type"]
            resolved.append(
                ClassProperty(str(json_name), self._resolve(entry, prop_path), description)
            )
        cls.set_properties(resolved)

    def _union_members(self, definition: Mapping[str, Any], path: str) -> Tuple[Type, ...]:
        members = definition.get("members")
        if not isinstance(members, list) or not members:
            raise TypeGraphError("Union members must be a non-empty list", f"{path}.members")
        return tuple(
            self._resolve(member, f"{path}.members[{i}]") for i, member in enumerate(members)
        )

    def _fill_members(self, union: UnionType, key: str, definition: Mapping[str, Any], path: str) -> None:
        # Only a direct self-reference is an error; through an array or map it is recursion
        members = definition.get("members")
        if isinstance(members, list) and key in members:
            raise TypeGraphError(f"Union '{key}' contains itself", path)
        union.set_members(self._union_members(definition, path))

    def _resolve(self, ref: Any, path: str) -> Type:
        if ref is None:
            return PrimitiveType(TypeKind.NULL)

        if isinstance(ref, str):
            if ref in _PRIMITIVES:
                return PrimitiveType(_PRIMITIVES[ref])
            if ref in self._named:
                return self._named[ref]
            raise TypeGraphError(f"Unknown type reference '{ref}'", path)

        if isinstance(ref, Mapping):
            kind = ref.get("kind")
            if kind == "array":
                return ArrayType(self._resolve(ref.get("items"), f"{path}.items"))
            if kind == "map":
                return MapType(self._resolve(ref.get("values"), f"{path}.values"))
            if kind == "union":
                return UnionType(members=self._union_members(ref, path))
            raise TypeGraphError(
                f"Inline type kind must be one of {', '.join(_INLINE_KINDS)}, got {kind!r}", path
            )

        raise TypeGraphError(f"Invalid type reference {ref!r}", path)


def build_type_graph(document: Mapping[str, Any]) -> TypeGraph:
    """Build a type graph from an already-parsed document."""
    return _DocumentBuilder(document).build()


def load_type_graph(path: Union[str, Path]) -> TypeGraph:
    """
    Load a type graph document from a JSON or YAML file.

    Args:
        path: Document path; ``.yaml``/``.yml`` files are read as YAML

    Returns:
        The type graph

    Raises:
        TypeGraphError: If the file cannot be read or parsed, or the
            document is malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except OSError as e:
        raise TypeGraphError(f"Cannot read type graph document: {e}", str(path)) from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise TypeGraphError(f"Cannot parse type graph document: {e}", str(path)) from e

    logger.debug(f"Loaded type graph document {path}")
    return build_type_graph(document)
