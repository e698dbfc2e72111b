"""Contains the inlineable markers and the classification of interpolated values.

Each value that is interpolated into a query falls into exactly one of the `InterpolationKind` categories. Markers
(identifiers, raw text and literals) as well as nested fragments are inlined into the query text, all other values become
parameters of the final query.
"""
from __future__ import annotations

import abc
import enum
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from .util._errors import InvalidArgumentError
from .util.jsonize import jsondict


class InterpolationKind(enum.Enum):
    """Describes how an interpolated value is treated when a fragment is constructed.

    `Identifier`, `Raw`, `Literal` and `Fragment` values are inlined into the query text, `Opaque` values are bound as
    positional parameters.
    """
    Identifier = "identifier"
    Raw = "raw"
    Literal = "literal"
    Fragment = "fragment"
    Opaque = "opaque"


@runtime_checkable
class FragmentLike(Protocol):
    """Structural type of all objects that are inlined as nested fragments.

    Each object that provides text `segments` along with the `params` in between them is treated as a fragment. The usual
    example is a `Fragment` that was created using `sql()`. Such objects have to satisfy the same invariant as fragments,
    i.e. there has to be exactly one more segment than there are parameters.
    """

    @property
    def segments(self) -> Sequence[str]:
        ...

    @property
    def params(self) -> Sequence[Any]:
        ...


class SqlMarker(abc.ABC):
    """Basic interface of all values that are inlined into the query text rather than being bound as a parameter.

    Markers are immutable. Their `value` is the payload after escaping and `to_sql()` provides the text that ends up in the
    query.

    Parameters
    ----------
    value : str
        The (already escaped) payload
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    @property
    def value(self) -> str:
        """Get the payload of this marker. Any quotes are already escaped.

        Returns
        -------
        str
            The payload
        """
        return self._value

    @abc.abstractmethod
    def to_sql(self) -> str:
        """Provides the text that is inlined into a query for this marker.

        Returns
        -------
        str
            The inlined text, including quotes if necessary
        """
        raise NotImplementedError

    def __json__(self) -> jsondict:
        return {"kind": classify(self), "value": self._value}

    def __hash__(self) -> int:
        return hash((type(self), self._value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, type(self)) and self._value == other._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __str__(self) -> str:
        return self.to_sql()


class Identifier(SqlMarker):
    """An identifier is a name of a database object, e.g. a table or a column.

    Identifiers are always wrapped in double quotes when being inlined. Double quotes that are part of the name are escaped
    by doubling them, i.e. *my"table* becomes *"my""table"*. Keep in mind that Postgres treats quoted identifiers in a
    case-sensitive manner.

    Parameters
    ----------
    name : str
        The name of the database object. Must be a non-empty string.

    Raises
    ------
    InvalidArgumentError
        If the name is not a string or if it is empty
    """

    __slots__ = ()

    def __init__(self, name: str) -> None:
        if not isinstance(name, str):
            raise InvalidArgumentError(f"Identifiers must be strings, not {type(name).__name__}: {name!r}")
        if not name:
            raise InvalidArgumentError("Identifiers cannot be empty")
        super().__init__(name.replace('"', '""'))

    def to_sql(self) -> str:
        return f'"{self._value}"'


class Raw(SqlMarker):
    """Raw text is inlined into the query exactly as-is.

    **This is an escape hatch that is not protected against SQL injection.** Only use raw text for trusted input, e.g.
    keywords or operators that are selected by the application itself.

    Parameters
    ----------
    text : str | int | float
        The text to inline. Numbers are converted to their string representation.
    """

    __slots__ = ()

    def __init__(self, text: str | int | float) -> None:
        super().__init__(str(text))

    def to_sql(self) -> str:
        return self._value


class Literal(SqlMarker):
    """A literal is a string constant that is inlined into the query rather than being bound as a parameter.

    Literals are wrapped in single quotes and single quotes within the text are escaped by doubling them. Inlining is
    necessary for the (few) places where Postgres does not accept parameters, e.g. in some DDL statements.

    Parameters
    ----------
    text : str
        The string constant. Other values are converted to strings first.
    """

    __slots__ = ()

    def __init__(self, text: str) -> None:
        super().__init__(str(text).replace("'", "''"))

    def to_sql(self) -> str:
        return f"'{self._value}'"


def identifier(name: str) -> Identifier:
    """Marks a name of a database object, such that it is inlined as a quoted identifier.

    Parameters
    ----------
    name : str
        The name, e.g. of a table or a column. Double quotes are escaped automatically.

    Returns
    -------
    Identifier
        The marker

    Raises
    ------
    InvalidArgumentError
        If the name is not a string or if it is empty

    Examples
    --------
    >>> identifier("users").to_sql()
    '"users"'
    """
    return Identifier(name)


def raw(text: str | int | float) -> Raw:
    """Marks text that should be inlined into the query without any escaping.

    **Warning:** raw text allows for SQL injection attacks. Never pass user input to this function.
    """
    return Raw(text)


def literal(text: str) -> Literal:
    """Marks a string constant that should be inlined into the query as a quoted literal (with escaped single quotes)."""
    return Literal(text)


def classify(value: Any) -> InterpolationKind:
    """Determines how an interpolated value has to be treated.

    Markers are recognized by their type. Nested fragments are recognized structurally, i.e. each object that provides
    `segments` and `params` is treated as a fragment. All other values (including *None*, plain strings and binary data)
    are opaque and become query parameters.

    Parameters
    ----------
    value : Any
        The interpolated value

    Returns
    -------
    InterpolationKind
        The category of the value
    """
    if isinstance(value, Identifier):
        return InterpolationKind.Identifier
    elif isinstance(value, Raw):
        return InterpolationKind.Raw
    elif isinstance(value, Literal):
        return InterpolationKind.Literal
    elif isinstance(value, FragmentLike):
        return InterpolationKind.Fragment
    return InterpolationKind.Opaque
