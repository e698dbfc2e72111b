"""Contains the fragment abstraction and the flattening logic that creates fragments from templated text.

A fragment is made up of text segments and parameters. Parameters are always placed between two segments, so there is
exactly one more segment than there are parameters::

    segments: [segment0,         segment1,         segment2]
    params:   [          param1,           param2          ]

Fragments are created by `sql()`, which inlines all identifiers, raw text, literals and nested fragments directly into the
text segments. Only the remaining (opaque) values are kept as parameters.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ._core import InterpolationKind, classify
from .util._errors import InvalidArgumentError
from .util.jsonize import jsondict


class Fragment:
    """A fragment is a (possibly incomplete) part of a query with its parameters.

    Fragments are immutable. Operations that combine fragments, such as `join()`, always create new instances. Usually,
    fragments are not created directly, but by using `sql()`.

    Parameters
    ----------
    segments : Iterable[str]
        The text of the fragment, split at the position of each parameter.
    params : Iterable[Any], optional
        The parameters in between the segments. Defaults to no parameters.

    Raises
    ------
    InvalidArgumentError
        If the number of segments is not exactly one more than the number of parameters.
    """

    __slots__ = ("_segments", "_params")

    def __init__(self, segments: Iterable[str], params: Iterable[Any] = ()) -> None:
        self._segments: tuple[str, ...] = tuple(segments)
        self._params: tuple[Any, ...] = tuple(params)
        if len(self._segments) != len(self._params) + 1:
            raise InvalidArgumentError(
                f"Fragment requires exactly one more segment than params, but got {len(self._segments)} segments "
                f"and {len(self._params)} params"
            )

    __match_args__ = ("segments", "params")

    @property
    def segments(self) -> tuple[str, ...]:
        """Get the text segments of this fragment. There is always at least one (possibly empty) segment.

        Returns
        -------
        tuple[str, ...]
            The segments in query order
        """
        return self._segments

    @property
    def params(self) -> tuple[Any, ...]:
        """Get the parameters of this fragment. Parameter *i* is located between segments *i* and *i + 1*.

        Returns
        -------
        tuple[Any, ...]
            The parameters in query order
        """
        return self._params

    def __json__(self) -> jsondict:
        return {"segments": self._segments, "params": self._params}

    def __hash__(self) -> int:
        return hash((self._segments, self._params))

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, type(self))
            and self._segments == other._segments
            and self._params == other._params
        )

    def __repr__(self) -> str:
        return f"Fragment(segments={list(self._segments)!r}, params={list(self._params)!r})"

    def __str__(self) -> str:
        from ._query import to_query

        return to_query(self).text


def inline_interpolations(
    segments: Sequence[str], interpolations: Sequence[Any]
) -> tuple[list[str], list[Any]]:
    """Inlines all interpolations that should not become parameters of the final query.

    Identifiers, raw text, literals and nested fragments are merged into the surrounding text segments. Nested fragments are
    flattened recursively, their parameters are merged into the parameters of the result. All remaining values are kept in
    their original order.

    The input has to follow the basic fragment structure, i.e. there must be exactly one more segment than there are
    interpolations. The output retains this structure.

    Parameters
    ----------
    segments : Sequence[str]
        The literal text. Segment *i* precedes interpolation *i*, which in turn precedes segment *i + 1*.
    interpolations : Sequence[Any]
        The values in between the segments

    Returns
    -------
    tuple[list[str], list[Any]]
        The flattened segments and the remaining opaque values
    """
    if not interpolations:
        return list(segments), list(interpolations)

    final_segments: list[str] = []
    final_params: list[Any] = []

    # each iteration consumes one interpolation along with the segment that follows it. The current segment stays open
    # until we encounter a value that has to become a parameter.
    current_segment = segments[0]
    for interpolation, next_segment in zip(interpolations, segments[1:]):
        match classify(interpolation):
            case InterpolationKind.Identifier | InterpolationKind.Raw | InterpolationKind.Literal:
                current_segment += interpolation.to_sql() + next_segment

            case InterpolationKind.Fragment:
                nested_segments, nested_params = inline_interpolations(interpolation.segments, interpolation.params)
                final_params.extend(nested_params)

                if len(nested_segments) <= 1:
                    current_segment += "".join(nested_segments) + next_segment
                    continue

                # the nested fragment has parameters on its own, so its first segment closes our current segment and its
                # last segment opens the next one
                final_segments.append(current_segment + nested_segments[0])
                final_segments.extend(nested_segments[1:-1])
                current_segment = nested_segments[-1] + next_segment

            case InterpolationKind.Opaque:
                final_segments.append(current_segment)
                final_params.append(interpolation)
                current_segment = next_segment

    final_segments.append(current_segment)
    return final_segments, final_params


def _is_template(obj: Any) -> bool:
    """Checks, whether an object looks like a template string (PEP 750), i.e. a ``t"..."`` literal."""
    return hasattr(obj, "strings") and hasattr(obj, "interpolations")


def _unpack_template(template: Any) -> tuple[Sequence[str], list[Any]]:
    values: list[Any] = []
    for interpolation in template.interpolations:
        if interpolation.conversion or interpolation.format_spec:
            conversion = f"!{interpolation.conversion}" if interpolation.conversion else ""
            format_spec = f":{interpolation.format_spec}" if interpolation.format_spec else ""
            raise InvalidArgumentError(
                f"Conversions and format specs are not supported in queries, got '{conversion}{format_spec}'. "
                "Use identifier(), literal() or raw() to inline values into the query text."
            )
        value = interpolation.value
        values.append(sql(value) if _is_template(value) else value)
    return template.strings, values


def sql(strings: Sequence[str] | str | Any, *interpolations: Any) -> Fragment:
    """Creates a new fragment and automatically parameterizes all interpolated values.

    The fragment text is given by the `strings`, with the `interpolations` placed in between them. Markers created by
    `identifier()`, `raw()` and `literal()` as well as nested fragments are inlined into the text. All other values
    become parameters.

    As a special case, a plain string can be used as the only segment of a fragment without any parameters. Furthermore,
    a template string (``t"..."`` literal, available starting with Python 3.14) can be passed instead of the strings and
    interpolations. Its interpolations must not use conversions or format specs.

    Parameters
    ----------
    strings : Sequence[str] | str | Template
        The literal text of the fragment. Must contain exactly one more segment than there are interpolations.
    *interpolations : Any
        The values in between the segments

    Returns
    -------
    Fragment
        The flattened fragment

    Raises
    ------
    InvalidArgumentError
        If the number of segments and interpolations do not match, or if a template interpolation uses a conversion or a
        format spec.

    Examples
    --------
    >>> sql(["SELECT * FROM users WHERE id = ", ""], 1)
    Fragment(segments=['SELECT * FROM users WHERE id = ', ''], params=[1])
    """
    if isinstance(strings, str):
        strings = [strings]
    elif _is_template(strings):
        if interpolations:
            raise InvalidArgumentError("Template strings already contain their interpolations")
        strings, interpolations = _unpack_template(strings)

    if len(strings) != len(interpolations) + 1:
        raise InvalidArgumentError(
            f"Expected {len(interpolations) + 1} segments for {len(interpolations)} interpolations, "
            f"but got {len(strings)}"
        )

    segments, params = inline_interpolations(strings, interpolations)
    return Fragment(segments, params)
