"""sqltag - Compose parameterized Postgres queries from templated text.

The central building block is the *fragment*: a piece of query text along with the parameters that belong to it. Fragments
are created with `sql()` from literal text and interpolated values. Each value is handled in one of two ways:

- identifiers, raw text, literals and nested fragments are inlined into the query text. Identifiers and literals are
  quoted and escaped, raw text is inserted as-is.
- all other values become parameters. They are never inserted into the query text. Instead, the final query references
  them via positional placeholders (*$1*, *$2*, ...) and the values are handed to the database driver separately.

Therefore, values supplied by the user can never change the structure of the query, as long as they are not passed to
`raw()`.

Fragments can be nested arbitrarily deep. Nested fragments are flattened when the enclosing fragment is created, so each
fragment is just a flat sequence of text segments with the parameters in between. Once a query is complete, `to_query()`
renders it into the final text and the list of values, ready to be executed by a database driver. The `db` module contains
shortcuts to do this using Psycopg.

A typical workflow looks like this:

>>> import sqltag as st
>>> name_filter = st.sql(["LOWER(name) = LOWER(", ")"], "John")
>>> query = st.sql(["SELECT * FROM ", " WHERE ", " AND age > ", ""], st.identifier("users"), name_filter, 18)
>>> st.to_query(query)
SqlQuery(text='SELECT * FROM "users" WHERE LOWER(name) = LOWER($1) AND age > $2', values=('John', 18))

Starting with Python 3.14, template strings can be used as a more convenient way to create fragments, e.g.
``st.sql(t"SELECT * FROM users WHERE id = {user_id}")``.


Fragment combinators
--------------------

Fragments can be combined using `join()`, which works similar to `str.join`. This is mostly useful to generate lists of
columns or predicates. `is_empty()` checks whether a fragment contains any content at all, e.g. to decide whether a
*WHERE* clause is necessary.
"""

from . import db, util
from ._combinators import SqlPiece, is_empty, join
from ._core import (
    FragmentLike,
    Identifier,
    InterpolationKind,
    Literal,
    Raw,
    SqlMarker,
    classify,
    identifier,
    literal,
    raw,
)
from ._fragment import Fragment, inline_interpolations, sql
from ._query import PlaceholderPrefix, SqlQuery, to_query
from .util import InvalidArgumentError

__version__ = "0.2.0"

__all__ = [
    "db",
    "util",
    "sql",
    "to_query",
    "identifier",
    "raw",
    "literal",
    "join",
    "is_empty",
    "classify",
    "inline_interpolations",
    "Fragment",
    "FragmentLike",
    "SqlQuery",
    "SqlMarker",
    "SqlPiece",
    "Identifier",
    "Raw",
    "Literal",
    "InterpolationKind",
    "PlaceholderPrefix",
    "InvalidArgumentError",
]
