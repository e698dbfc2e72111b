"""Renders fragments into the final query text with Postgres-style positional parameters."""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from ._fragment import Fragment
from .util.jsonize import jsondict

PlaceholderPrefix = "$"
"""Prefix of the positional parameters in the query text. Postgres refers to parameters as *$1*, *$2*, etc."""


@dataclass(frozen=True)
class SqlQuery:
    """A query that is ready to be sent to the database.

    Queries can be unpacked into their text and values, e.g. ``cursor.execute(*query)``.

    Attributes
    ----------
    text : str
        The query text. Parameters are referenced by placeholders *$1*, *$2*, ...
    values : tuple[Any, ...]
        The parameter values. Value *i* (starting at 0) belongs to placeholder *$(i + 1)*. Other sequences are converted
        to tuples.
    """
    text: str
    values: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def __iter__(self) -> Iterator[str | tuple[Any, ...]]:
        yield self.text
        yield self.values

    def __json__(self) -> jsondict:
        return {"text": self.text, "values": self.values}

    def __str__(self) -> str:
        return self.text


def to_query(fragment: Fragment, params: Optional[Sequence[Any]] = None) -> SqlQuery:
    """Generates the final query for a fragment.

    The query text can already contain some placeholders, e.g. if it was written by hand and inlined using `raw()`. In this
    case, the values for these placeholders have to be supplied as `params`. Numbering of the fragment's own parameters
    starts right after them. Notice that the placeholders in the text are not checked at all. Making sure that the values
    match the placeholders is the responsibility of the caller.

    Parameters
    ----------
    fragment : Fragment
        The fragment to render
    params : Optional[Sequence[Any]], optional
        Values for placeholders that are already contained in the fragment's text. Defaults to no values.

    Returns
    -------
    SqlQuery
        The query text and the values of all parameters. Values from `params` come first, followed by the fragment
        parameters.

    Examples
    --------
    >>> to_query(sql(["SELECT * FROM users WHERE id = $1 AND name = ", ""], "john"), [1])
    SqlQuery(text='SELECT * FROM users WHERE id = $1 AND name = $2', values=(1, 'john'))
    """
    existing_params = tuple(params) if params is not None else ()
    param_idx = len(existing_params) + 1

    text_parts: list[str] = []
    for i, segment in enumerate(fragment.segments):
        text_parts.append(segment)
        if i < len(fragment.params):
            text_parts.append(f"{PlaceholderPrefix}{param_idx}")
            param_idx += 1

    return SqlQuery("".join(text_parts), existing_params + tuple(fragment.params))
