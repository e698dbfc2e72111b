"""Contains utilities to run fragments on a Postgres server.

Queries produced by `to_query()` use the native Postgres placeholders (*$1*, *$2*, ...). Psycopg uses a different
placeholder syntax by default, but its `RawCursor` passes the query text to the server as-is. All connections obtained
via `connect()` are therefore configured to use raw cursors. Connections created by other means can be used as well, the
utilities here always create raw cursors on their own.
"""

from __future__ import annotations

import os
import warnings
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import psycopg

from . import util
from ._fragment import Fragment
from ._query import SqlQuery, to_query

DefaultConfigFile = ".psycopg_connection"
"""Name of the file in the current working directory that is used to obtain the connect string if nothing else is given."""

ResultSet = list[tuple[Any, ...]]
"""Type alias for the rows returned by a query."""


class DatabaseServerError(RuntimeError):
    """Indicates an error caused by the database server occured while executing a query.

    The error was **not** due to a mistake in the query (such as an SQL syntax error or access privilege violation), but
    an issue on the server side instead (such as out of memory during query execution or a lost connection).

    Parameters
    ----------
    message : str, optional
        A textual description of the error, e.g. *out of memory*. Can be left empty by default.
    context : Optional[object], optional
        Additional context information for when the error occurred, usually the query that caused the error.
    """

    def __init__(self, message: str = "", context: Optional[object] = None) -> None:
        super().__init__(message)
        self.ctx = context


class DatabaseUserError(RuntimeError):
    """Indicates that a query failed due to an error on the user's end.

    The error could be due to an SQL syntax error, access privilege violation, unsuitable parameter values, etc.

    Parameters
    ----------
    message : str, optional
        A textual description of the error, e.g. *no such table*. Can be left empty by default.
    context : Optional[object], optional
        Additional context information for when the error occurred, usually the query that caused the error.
    """

    def __init__(self, message: str = "", context: Optional[object] = None) -> None:
        super().__init__(message)
        self.ctx = context


def _connect_string_from_env() -> str:
    env_vars = {
        "PGDATABASE": "dbname",
        "PGHOST": "host",
        "PGPORT": "port",
        "PGUSER": "user",
        "PGPASSWORD": "password",
        "PGPASSFILE": "passfile",
    }
    components: list[str] = []
    for var, key in env_vars.items():
        val = os.getenv(var)
        if not val:
            continue
        components.append(f"{key}='{val}'")
    return " ".join(components)


def resolve_connect_string(*, connect_string: str = "", config_file: str | Path = "") -> str:
    """Determines the connect string for a new database connection.

    The following sources are tried in order:

    1. the `connect_string` if it is supplied directly
    2. the first line of the `config_file` if this parameter is supplied. If the file does not exist, an error is raised.
    3. the first line of the default connection file *.psycopg_connection* in the current working directory
    4. the standard Postgres environment variables (e.g. *PGDATABASE*, *PGHOST*, ...). This method is triggered by the
       presence of the *PGDATABASE* variable. Since it is rather implicit, a warning is emitted.

    Parameters
    ----------
    connect_string : str, optional
        A Psycopg-compatible connect string
    config_file : str | Path, optional
        A file whose first line contains a Psycopg-compatible connect string

    Returns
    -------
    str
        The connect string

    Raises
    ------
    ValueError
        If none of the sources is available, or if the config file should be used but does not exist
    """
    if connect_string:
        return connect_string.strip()

    if config_file:
        config_file = Path(config_file)
        if not config_file.is_file():
            wdir = os.getcwd()
            raise ValueError(
                f"Failed to obtain a database connection. Tried to read the config file '{config_file}' from "
                f"your current working directory, but the file was not found. Your working directory is {wdir}. "
                "Please either supply the connect string directly, or ensure that the config file exists."
            )
        with open(config_file, "r") as f:
            return f.readline().strip()

    if Path(DefaultConfigFile).is_file():
        with open(DefaultConfigFile, "r") as f:
            return f.readline().strip()

    if os.getenv("PGDATABASE"):
        warnings.warn("Using environment variables to construct connection string.")
        return _connect_string_from_env()

    raise ValueError(
        "Failed to obtain a database connection. Please either supply the connect string directly, or put a "
        f"'{DefaultConfigFile}' file in your working directory. See the documentation of connect() for more details."
    )


def connect(
    *,
    connect_string: str = "",
    config_file: str | Path = "",
    application_name: str = "sqltag",
    encoding: str = "UTF8",
    autocommit: bool = True,
) -> psycopg.Connection:
    """Opens a new connection to a Postgres server.

    The connect string is determined by `resolve_connect_string()`. The connection uses raw cursors, such that queries
    created by `to_query()` can be executed directly via ``connection.execute(*query)``.

    Parameters
    ----------
    connect_string : str, optional
        A Psycopg-compatible connect string. Supplying this parameter overwrites any other connection information.
    config_file : str | Path, optional
        A file containing a Psycopg-compatible connect string. Defaults to *.psycopg_connection* in the current working
        directory.
    application_name : str, optional
        Identifier for the Postgres server. This is the name that is shown in the server logs and process lists.
    encoding : str, optional
        The client encoding of the connection. Defaults to *UTF8*.
    autocommit : bool, optional
        Whether each query should be committed immediately. Enabled by default.

    Returns
    -------
    psycopg.Connection
        The new connection. It is owned by the caller and should be closed after use.

    Raises
    ------
    ValueError
        If no connect string could be determined

    References
    ----------

    .. Psycopg raw cursors: https://www.psycopg.org/psycopg3/docs/advanced/cursors.html#raw-query-cursors
    .. Postgres environment variables: https://www.postgresql.org/docs/current/libpq-envars.html
    """
    connect_string = resolve_connect_string(connect_string=connect_string, config_file=config_file)
    return psycopg.connect(
        connect_string,
        application_name=application_name,
        client_encoding=encoding,
        autocommit=autocommit,
        cursor_factory=psycopg.RawCursor,
    )


def _error_message(query: SqlQuery, error: psycopg.Error) -> str:
    return "\n".join(
        [
            f"At {util.timestamp()}",
            "For query:",
            query.text,
            "Message:",
            str(error),
        ]
    )


def _run(
    connection: psycopg.Connection,
    fragment: Fragment,
    params: Optional[Sequence[Any]],
    verbose: bool,
) -> tuple[SqlQuery, Optional[ResultSet], list[str]]:
    log = util.make_logger(verbose, prefix=util.timestamp)
    query = to_query(fragment, params)
    log("Running query", repr(query.text), f"with {len(query.values)} parameter(s)")

    try:
        with psycopg.RawCursor(connection) as cursor:
            cursor.execute(query.text, query.values)
            if cursor.description is None:
                log("Query did not produce a result set, rowcount =", cursor.rowcount)
                return query, None, []
            columns = [col.name for col in cursor.description]
            rows = [tuple(row) for row in cursor.fetchall()]
    except (psycopg.InternalError, psycopg.OperationalError) as e:
        raise DatabaseServerError(_error_message(query, e), query) from e
    except psycopg.Error as e:
        raise DatabaseUserError(_error_message(query, e), query) from e

    log("Query produced", len(rows), "row(s)")
    return query, rows, columns


def execute(
    connection: psycopg.Connection,
    fragment: Fragment,
    params: Optional[Sequence[Any]] = None,
    *,
    verbose: bool = False,
) -> Optional[ResultSet]:
    """Renders a fragment and executes the resulting query.

    Parameters
    ----------
    connection : psycopg.Connection
        The connection to run the query on. Its cursor factory does not matter, a raw cursor is created in any case.
    fragment : Fragment
        The query to execute
    params : Optional[Sequence[Any]], optional
        Values for placeholders that are already contained in the fragment text, see `to_query()`
    verbose : bool, optional
        Whether to log the query and the size of its result to stderr. Off by default.

    Returns
    -------
    Optional[ResultSet]
        All rows of the result set, or *None* if the query does not produce a result set (e.g. an *UPDATE* without a
        *RETURNING* clause)

    Raises
    ------
    DatabaseServerError
        If the server failed to execute the query, e.g. due to a lost connection
    DatabaseUserError
        If the query itself is faulty, e.g. due to a syntax error or a constraint violation
    """
    _, rows, _ = _run(connection, fragment, params, verbose)
    return rows


def fetch_df(
    connection: psycopg.Connection,
    fragment: Fragment,
    params: Optional[Sequence[Any]] = None,
    *,
    verbose: bool = False,
) -> pd.DataFrame:
    """Executes a query and provides its result set as a Pandas `DataFrame`.

    The columns of the data frame are named after the columns of the result set. Queries without a result set produce an
    empty data frame. See `execute()` for details on the parameters and errors.
    """
    _, rows, columns = _run(connection, fragment, params, verbose)
    if rows is None:
        return pd.DataFrame()
    return pd.DataFrame(rows, columns=columns)
