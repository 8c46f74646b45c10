"""
pydsparql.graph_management
==========================

Builders for the SPARQL 1.1 Update graph management operations
(https://www.w3.org/TR/sparql11-update/#graphManagement).

Each operation accepts a fixed set of graph keywords. A value that
matches one of them (case-insensitively) is emitted bare; any other value
is an IRI and is rendered ``GRAPH <iri>``. A graph keyword supplied
where the operation does not accept it is rejected instead of being
wrapped as an IRI.

=========  =======================  ==========================================
Operation  Accepted keywords        Output
=========  =======================  ==========================================
CREATE     –                        ``CREATE [SILENT] GRAPH <iri>``
DROP       DEFAULT, NAMED, ALL      ``DROP [SILENT] <ref>``
CLEAR      DEFAULT, NAMED, ALL      ``CLEAR [SILENT] <ref>``
ADD        DEFAULT                  ``ADD [SILENT] <ref> TO <ref>``
COPY       DEFAULT                  ``COPY [SILENT] <ref> TO <ref>``
MOVE       DEFAULT                  ``MOVE [SILENT] <ref> TO <ref>``
LOAD       –                        ``LOAD [SILENT] <iri> [INTO GRAPH <iri>]``
=========  =======================  ==========================================

``LOAD`` follows the SPARQL 1.1 grammar: the source document is a bare
``<iri>`` and the target is ``INTO GRAPH <iri>``, not the symmetric
``<iri> INTO <iri>`` form some clients emit.
"""

import enum
from typing import Dict, FrozenSet, Optional, Union

from .exceptions import ConfigurationError


class GraphOperation(enum.StrEnum):
    CREATE = "CREATE"
    DROP = "DROP"
    CLEAR = "CLEAR"
    ADD = "ADD"
    COPY = "COPY"
    MOVE = "MOVE"
    LOAD = "LOAD"


class GraphKeyword(enum.StrEnum):
    DEFAULT = "DEFAULT"
    NAMED = "NAMED"
    ALL = "ALL"


PERMITTED_KEYWORDS: Dict[GraphOperation, FrozenSet[GraphKeyword]] = {
    GraphOperation.CREATE: frozenset(),
    GraphOperation.DROP: frozenset(GraphKeyword),
    GraphOperation.CLEAR: frozenset(GraphKeyword),
    GraphOperation.ADD: frozenset({GraphKeyword.DEFAULT}),
    GraphOperation.COPY: frozenset({GraphKeyword.DEFAULT}),
    GraphOperation.MOVE: frozenset({GraphKeyword.DEFAULT}),
    GraphOperation.LOAD: frozenset(),
}

_TWO_REF_OPERATIONS = frozenset(
    {GraphOperation.ADD, GraphOperation.COPY, GraphOperation.MOVE}
)


def _as_keyword(value: str) -> Optional[GraphKeyword]:
    try:
        return GraphKeyword(value.strip().upper())
    except ValueError:
        return None


def _iri(operation: GraphOperation, value: str) -> str:
    if not value:
        raise ConfigurationError(f"{operation} needs a graph IRI")
    if _as_keyword(value) is not None:
        raise ConfigurationError(
            f"{operation} only accepts a graph IRI, got keyword '{value}'"
        )
    return f"<{value}>"


def graph_ref(operation: GraphOperation, value: str) -> str:
    """Render ``value`` as a bare keyword or ``GRAPH <iri>`` for ``operation``."""
    keyword = _as_keyword(value)
    if keyword is not None:
        if keyword not in PERMITTED_KEYWORDS[operation]:
            raise ConfigurationError(
                f"{operation} does not accept the graph keyword '{value}'"
            )
        return keyword.value
    return f"GRAPH {_iri(operation, value)}"


def build_graph_management_query(
    operation: Union[GraphOperation, str],
    silent: bool,
    graph_from: str,
    graph_to: Optional[str] = None,
) -> str:
    """
    Build a graph management statement.

    Parameters
    ----------
    operation:
        One of :class:`GraphOperation`.
    silent:
        Add ``SILENT``: the store reports success even if the operation
        fails.
    graph_from:
        Graph reference (or source document IRI for ``LOAD``).
    graph_to:
        Target for ``ADD`` / ``COPY`` / ``MOVE`` (required) and ``LOAD``
        (optional; the default graph when omitted).
    """
    try:
        op = GraphOperation(str(operation).upper())
    except ValueError:
        raise ConfigurationError(
            f"Unknown graph management operation '{operation}'"
        ) from None

    head = f"{op} SILENT" if silent else op.value

    if op in _TWO_REF_OPERATIONS:
        if graph_to is None:
            raise ConfigurationError(f"{op} needs a target graph")
        return f"{head} {graph_ref(op, graph_from)} TO {graph_ref(op, graph_to)}"
    if op is GraphOperation.LOAD:
        query = f"{head} {_iri(op, graph_from)}"
        if graph_to is not None:
            query += f" INTO GRAPH {_iri(op, graph_to)}"
        return query
    return f"{head} {graph_ref(op, graph_from)}"
