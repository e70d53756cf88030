"""
Syntax Fragments.

Generated text is assembled from composable fragments and only flattened
into strings when a line is emitted. A fragment ("sourcelike") is a
string, a Name (resolved at flattening time), a MultiWord, or a sequence
of fragments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, Union

from ..naming.names import Name

Sourcelike = Union[str, Name, "MultiWord", Sequence["Sourcelike"]]


@dataclass(frozen=True)
class MultiWord:
    """
    A type expression with a flag telling whether it needs parentheses
    when nested inside another operator, like an alternation ``a|b``.
    """

    source: Tuple[Sourcelike, ...]
    needs_parens: bool = False


def single_word(*parts: Sourcelike) -> MultiWord:
    """A fragment that can be nested anywhere without parentheses."""
    return MultiWord(tuple(parts), False)


def multi_word(separator: str, *words: MultiWord) -> MultiWord:
    """Join words with an operator; one word stays as it is."""
    if len(words) == 1:
        return words[0]

    parts = []
    for i, word in enumerate(words):
        if i > 0:
            parts.append(separator)
        parts.append(word)
    return MultiWord(tuple(parts), True)


def paren_if_needed(word: MultiWord) -> MultiWord:
    if word.needs_parens:
        return single_word("(", word, ")")
    return word


def serialize(source: Sourcelike, resolve: Callable[[Name], str]) -> str:
    """
    Flatten a fragment into text.

    Args:
        source: Fragment to flatten
        resolve: Maps a Name to its final string

    Returns:
        The text of the fragment
    """
    if isinstance(source, str):
        return source
    if isinstance(source, Name):
        return resolve(source)
    if isinstance(source, MultiWord):
        return serialize(source.source, resolve)
    return "".join(serialize(part, resolve) for part in source)
