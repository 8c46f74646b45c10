"""
pydsparql.update
================

Builders for ``INSERT`` / ``DELETE`` update statements.

Several widely deployed triple stores predate or diverge from the SPARQL
1.1 Update grammar, so the keyword used for each statement is a
selectable dialect:

* :class:`InsertKeyword` / :class:`DeleteKeyword` – the SPARQL 1.1
  ``DATA`` forms (default), the generic ``INSERT`` / ``DELETE`` template
  form, and graph-first forms such as ``INSERT INTO <g> { ... }``
  (Virtuoso 6/7) that require a graph URI.
* :class:`DeleteWhereKeyword` – ``WITH <g> DELETE WHERE { ... }``
  (default) or ``DELETE FROM <g> { ... } WHERE { ... }``.

The generic ``INSERT`` / ``DELETE`` form does not inline the graph: a
graph URI is returned as :attr:`UpdateStatement.using_graph_uri` and is
sent as the ``using-graph-uri`` dataset parameter instead. The ``DATA``
forms inline the same argument as ``GRAPH <g>``.

Payloads are N-Triples text, or an :class:`rdflib.Graph` serialised with
:func:`format_rdf_payload`.
"""

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel
from rdflib import Graph

from .exceptions import GraphUriRequiredError, SerializationError
from .settings import DEFAULT_PAYLOAD_FORMAT


class InsertKeyword(enum.StrEnum):
    INSERT_DATA = "INSERT DATA"
    INSERT = "INSERT"
    # not SPARQL 1.1 compliant
    INSERT_INTO = "INSERT INTO"
    INSERT_IN = "INSERT IN"
    INSERT_IN_GRAPH = "INSERT IN GRAPH"


class DeleteKeyword(enum.StrEnum):
    DELETE_DATA = "DELETE DATA"
    DELETE = "DELETE"
    # not SPARQL 1.1 compliant
    DELETE_DATA_FROM = "DELETE DATA FROM"
    DELETE_FROM = "DELETE FROM"


class DeleteWhereKeyword(enum.StrEnum):
    WITH = "WITH"
    DELETE_FROM = "DELETE FROM"


_DATA_KEYWORDS = frozenset({InsertKeyword.INSERT_DATA, DeleteKeyword.DELETE_DATA})
_TEMPLATE_KEYWORDS = frozenset({InsertKeyword.INSERT, DeleteKeyword.DELETE})


class UpdateStatement(BaseModel):
    """An update statement plus the graph to send as ``using-graph-uri``, if any."""

    text: str
    using_graph_uri: Optional[str] = None


def format_rdf_payload(data: Any, format: str = DEFAULT_PAYLOAD_FORMAT) -> str:
    """
    Return ``data`` as update payload text.

    Strings are passed through unchanged; an :class:`rdflib.Graph` is
    serialised in ``format``. Serialiser failures are wrapped in
    :class:`SerializationError` with the original error as ``__cause__``.
    """
    if isinstance(data, str):
        return data
    if isinstance(data, Graph):
        try:
            return data.serialize(format=format)
        except Exception as exc:
            raise SerializationError(
                f"Error while serialising graph as '{format}'"
            ) from exc
    raise TypeError(
        f"Cannot serialise {type(data).__name__}; data must be a str or an rdflib Graph"
    )


def _build_quad_data(
    keyword: Union[InsertKeyword, DeleteKeyword],
    payload: str,
    graph_uri: Optional[str],
) -> UpdateStatement:
    if keyword in _DATA_KEYWORDS:
        if graph_uri:
            return UpdateStatement(
                text=f"{keyword} {{ GRAPH <{graph_uri}> {{{payload}}}}}"
            )
        return UpdateStatement(text=f"{keyword} {{{payload}}}")
    if keyword in _TEMPLATE_KEYWORDS:
        return UpdateStatement(
            text=f"{keyword} {{{payload}}} WHERE {{}}",
            using_graph_uri=graph_uri or None,
        )
    if not graph_uri:
        raise GraphUriRequiredError(f"Cannot use {keyword} without a graph URI")
    return UpdateStatement(text=f"{keyword} <{graph_uri}> {{{payload}}}")


def build_insert_data(
    keyword: InsertKeyword, payload: str, graph_uri: Optional[str] = None
) -> UpdateStatement:
    """
    Build an insert statement for ``payload`` in the ``keyword`` dialect.

    >>> build_insert_data(InsertKeyword.INSERT_DATA, "<urn:s> <urn:p> <urn:o> .", "urn:g").text
    'INSERT DATA { GRAPH <urn:g> {<urn:s> <urn:p> <urn:o> .}}'
    """
    return _build_quad_data(InsertKeyword(keyword), payload, graph_uri)


def build_delete_data(
    keyword: DeleteKeyword, payload: str, graph_uri: Optional[str] = None
) -> UpdateStatement:
    """Build a delete statement for ``payload`` in the ``keyword`` dialect."""
    return _build_quad_data(DeleteKeyword(keyword), payload, graph_uri)


def build_delete_where(
    keyword: DeleteWhereKeyword, pattern: str, graph_uri: Optional[str] = None
) -> str:
    """
    Build a statement deleting every triple matching ``pattern``.

    * ``WITH``: ``WITH <g> DELETE WHERE {pattern}``
    * ``DELETE FROM``: ``DELETE FROM <g> {pattern} WHERE {pattern}``

    Without a graph URI both collapse to their default-graph form.
    """
    keyword = DeleteWhereKeyword(keyword)
    if keyword is DeleteWhereKeyword.WITH:
        query = f"DELETE WHERE {{{pattern}}}"
        return f"WITH <{graph_uri}> {query}" if graph_uri else query
    target = f"DELETE FROM <{graph_uri}>" if graph_uri else "DELETE"
    return f"{target} {{{pattern}}} WHERE {{{pattern}}}"
