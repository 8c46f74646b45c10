"""
pydsparql.dataset
=================

Dataset-scoping parameters of the SPARQL 1.1 Protocol
(``default-graph-uri``, ``named-graph-uri`` for queries and
``using-graph-uri``, ``using-named-graph-uri`` for updates).

A :class:`DatasetParameters` instance holds the parameters of exactly
one pending request. The client snapshots and clears it on every
dispatch, so a request never inherits scoping from a previous one.
"""

import enum
from typing import Iterator, List, Union
from urllib.parse import quote_plus

from .exceptions import UnknownParameterError


class DatasetParameter(enum.StrEnum):
    DEFAULT_GRAPH_URI = "default-graph-uri"
    NAMED_GRAPH_URI = "named-graph-uri"
    USING_GRAPH_URI = "using-graph-uri"
    USING_NAMED_GRAPH_URI = "using-named-graph-uri"


class DatasetParameters:
    """Ordered, URL-encoded ``name=graph_uri`` entries for one request."""

    def __init__(self) -> None:
        self._entries: List[str] = []

    def add(self, name: Union[DatasetParameter, str], graph_uri: str) -> None:
        """
        Append ``name=graph_uri``.

        Raises :class:`UnknownParameterError` for any name outside
        :class:`DatasetParameter`; the pending entries are left untouched.
        """
        try:
            param = DatasetParameter(name)
        except ValueError:
            raise UnknownParameterError(
                f"Unknown dataset parameter '{name}'; expected one of "
                f"{[p.value for p in DatasetParameter]}"
            ) from None
        self._entries.append(f"{param.value}={quote_plus(graph_uri)}")

    def serialize(self) -> str:
        return "&".join(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> "DatasetParameters":
        """Return a detached copy of the pending entries."""
        copy = DatasetParameters()
        copy._entries = list(self._entries)
        return copy

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"DatasetParameters({self.serialize()!r})"
