"""Utilities to combine and inspect fragments."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from ._core import Identifier, Literal, Raw
from ._fragment import Fragment, sql

SqlPiece = Fragment | Identifier | Raw | Literal
"""Type alias for all building blocks that can be combined into fragments."""


def _as_fragment(piece: SqlPiece) -> Fragment:
    return sql(["", ""], piece)


def join(fragments: Iterable[SqlPiece], separator: Optional[SqlPiece] = None) -> Fragment:
    """Combines multiple pieces of a query into a single fragment, similar to `str.join`.

    Parameters
    ----------
    fragments : Iterable[SqlPiece]
        The pieces to combine. Markers such as identifiers are converted into fragments automatically. The input is not
        modified.
    separator : Optional[SqlPiece], optional
        The piece to put in between each pair of fragments. Defaults to ``", "``.

    Returns
    -------
    Fragment
        The combined fragment. If there are no pieces, this is an empty fragment.

    Examples
    --------
    >>> columns = [identifier("id"), identifier("name")]
    >>> str(sql(["SELECT ", " FROM users"], join(columns)))
    'SELECT "id", "name" FROM users'
    """
    fragments = list(fragments)
    if not fragments:
        return sql("")
    if len(fragments) == 1:
        return _as_fragment(fragments[0])

    separator = sql(", ") if separator is None else separator
    joined = _as_fragment(fragments[0])
    for fragment in fragments[1:]:
        joined = sql(["", "", "", ""], joined, separator, fragment)
    return joined


def is_empty(fragment: Fragment) -> bool:
    """Checks, whether a fragment contains neither text nor parameters.

    Only fragments without any characters are considered empty, whitespace counts as content.

    Examples
    --------
    >>> is_empty(sql(""))
    True
    >>> is_empty(sql("    "))
    False
    """
    if fragment.params:
        return False
    return all(segment == "" for segment in fragment.segments)
