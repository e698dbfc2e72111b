"""Contains utilities to export query building blocks to JSON.

More specifically, this module introduces the `JsonizeEncoder`, which can be accessed via the `to_json` utility method.
This encoder transforms instances of any class to JSON if the class provides a `__json__` method. The method does not take
any (required) parameters and returns a JSON-izeable representation of the current instance, e.g. a `dict` or a `list`.
Since query parameters can be of pretty much any type, the encoder also knows how to handle the most common non-JSON
values that end up as parameters: binary data, decimals and temporal values.

The inverse conversion is not supported because JSON does not retain any type information.
"""

from __future__ import annotations

import abc
import datetime
import decimal
import enum
import json
from pathlib import Path
from typing import IO, Any, Protocol, runtime_checkable

jsondict = dict
"""Type alias for a JSON-izeable dictionary."""


@runtime_checkable
class Jsonizable(Protocol):
    """Protocol to indicate that a certain class provides the `__json__` method."""

    @abc.abstractmethod
    def __json__(self) -> jsondict:
        raise NotImplementedError


class JsonizeEncoder(json.JSONEncoder):
    """The JsonizeEncoder transforms query building blocks and typical parameter values to JSON.

    Objects with a `__json__` method are converted by calling that method. Binary data is exported as a hex string,
    decimals as strings (to retain their precision) and temporal values in ISO format.
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, enum.Enum):
            return obj.value
        elif isinstance(obj, (set, frozenset)):
            return list(obj)
        elif isinstance(obj, Path):
            return str(obj)
        elif isinstance(obj, (bytes, bytearray, memoryview)):
            return bytes(obj).hex()
        elif isinstance(obj, decimal.Decimal):
            return str(obj)
        elif isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        elif isinstance(obj, Jsonizable):
            return obj.__json__()
        return json.JSONEncoder.default(self, obj)


def to_json(obj: Any, *args, **kwargs) -> str | None:
    """Utility to transform any object to a JSON string, while making use of the `JsonizeEncoder`.

    All arguments other than the object itself are passed to the default Python `json.dumps` function. *None* objects are
    not exported at all.
    """
    if obj is None:
        return None
    kwargs.pop("cls", None)
    return json.dumps(obj, *args, cls=JsonizeEncoder, **kwargs)


def to_json_dump(obj: Any, file: IO, *args, **kwargs) -> None:
    """Utility to transform any object to JSON and write it to a file, while making use of the `JsonizeEncoder`.

    All arguments other than the object and the file are passed to the default Python `json.dump` function.
    """
    kwargs.pop("cls", None)
    json.dump(obj, file, *args, cls=JsonizeEncoder, **kwargs)
