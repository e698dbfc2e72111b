"""Contains the errors that are raised for faulty user input."""
from __future__ import annotations


class InvalidArgumentError(ValueError, TypeError):
    """Indicates that a query building block was constructed from unsuitable input.

    Typical examples are identifiers that are not strings or that are empty, or fragments whose number of text segments
    does not match the number of parameters. The error derives from both `ValueError` and `TypeError`, so callers can
    catch whichever feels more natural for their use case.
    """
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
