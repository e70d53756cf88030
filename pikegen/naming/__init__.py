"""
Naming engine.

- Namer: applies an identifier style to candidate names
- SimpleName / DerivedName: name handles resolved by a namespace
- Namespace / NamingEngine: global and per-type scopes with forbidden words
"""

from .namer import Namer
from .names import Name, SimpleName, DerivedName
from .namespace import ForbiddenWordsInfo, Namespace, NamingEngine

__all__ = [
    "Namer",
    "Name",
    "SimpleName",
    "DerivedName",
    "ForbiddenWordsInfo",
    "Namespace",
    "NamingEngine",
]
