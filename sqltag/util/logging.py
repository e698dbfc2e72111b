"""Contains utilities to conveniently log different information."""
from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import datetime
from typing import IO, Optional

Logger = Callable[..., None]
"""Type alias for the print-like functions that are created by `make_logger`."""


def timestamp() -> str:
    """Provides the current time as a nice and normalized string."""
    return datetime.now().strftime("%y-%m-%d %H:%M:%S")


def make_logger(
    enabled: bool = True, *, file: Optional[IO[str]] = None, prefix: str | Callable[[], str] = ""
) -> Logger:
    """Creates a new logging utility.

    The generated function can be used like a regular `print`, but writes to stderr by default. If `enabled` is *False*,
    calling the function does nothing. This allows long functions to log unconditionally, without re-checking whether
    logging is actually requested.

    Parameters
    ----------
    enabled : bool, optional
        Whether logging is enabled, by default *True*
    file : Optional[IO[str]], optional
        Destination to write the log entries to. Defaults to the current ``sys.stderr``
    prefix : str | Callable[[], str], optional
        A common prefix that is put in front of each log entry. Can be either a fixed string, or a callable that produces
        a new string for each entry (e.g. `timestamp`).

    Returns
    -------
    Logger
        The logging function
    """
    def _log(*args, **kwargs) -> None:
        kwargs.pop("file", None)
        if prefix:
            header = prefix() if callable(prefix) else prefix
            args = (header, *args)
        print(*args, file=file if file is not None else sys.stderr, **kwargs)

    def _dummy_log(*args, **kwargs) -> None:
        pass

    return _log if enabled else _dummy_log
