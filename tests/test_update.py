"""
Tests for pydsparql.update.

Covers:
- INSERT / DELETE statements in every keyword dialect, with and without
  a graph URI.
- DELETE WHERE in both dialects.
- Payload formatting from strings and rdflib graphs, including failures.
"""

import pytest
from rdflib import Graph, Literal, URIRef

from pydsparql import GraphUriRequiredError, SerializationError
from pydsparql.update import (
    DeleteKeyword,
    DeleteWhereKeyword,
    InsertKeyword,
    build_delete_data,
    build_delete_where,
    build_insert_data,
    format_rdf_payload,
)

TRIPLE = "<urn:s> <urn:p> <urn:o> ."


# ----------------------------------------------------------------------
# INSERT
# ----------------------------------------------------------------------


def test_insert_data_with_graph():
    stmt = build_insert_data(InsertKeyword.INSERT_DATA, TRIPLE, "urn:g")
    assert stmt.text == "INSERT DATA { GRAPH <urn:g> {<urn:s> <urn:p> <urn:o> .}}"
    assert stmt.using_graph_uri is None


def test_insert_data_without_graph():
    stmt = build_insert_data(InsertKeyword.INSERT_DATA, TRIPLE)
    assert stmt.text == "INSERT DATA {<urn:s> <urn:p> <urn:o> .}"


@pytest.mark.parametrize(
    "keyword",
    [InsertKeyword.INSERT_INTO, InsertKeyword.INSERT_IN, InsertKeyword.INSERT_IN_GRAPH],
)
def test_graph_first_insert_dialects(keyword):
    stmt = build_insert_data(keyword, TRIPLE, "urn:g")
    assert stmt.text == f"{keyword.value} <urn:g> {{{TRIPLE}}}"


@pytest.mark.parametrize(
    "keyword",
    [InsertKeyword.INSERT_INTO, InsertKeyword.INSERT_IN, InsertKeyword.INSERT_IN_GRAPH],
)
def test_graph_first_insert_dialects_require_graph(keyword):
    with pytest.raises(GraphUriRequiredError):
        build_insert_data(keyword, TRIPLE, None)


def test_generic_insert_carries_graph_as_dataset_parameter():
    stmt = build_insert_data(InsertKeyword.INSERT, TRIPLE, "urn:g")
    assert stmt.text == "INSERT {<urn:s> <urn:p> <urn:o> .} WHERE {}"
    assert stmt.using_graph_uri == "urn:g"

    stmt = build_insert_data(InsertKeyword.INSERT, TRIPLE)
    assert stmt.using_graph_uri is None


# ----------------------------------------------------------------------
# DELETE
# ----------------------------------------------------------------------


def test_delete_data_dialects():
    assert (
        build_delete_data(DeleteKeyword.DELETE_DATA, TRIPLE, "urn:g").text
        == "DELETE DATA { GRAPH <urn:g> {<urn:s> <urn:p> <urn:o> .}}"
    )
    assert (
        build_delete_data(DeleteKeyword.DELETE_DATA, TRIPLE).text
        == "DELETE DATA {<urn:s> <urn:p> <urn:o> .}"
    )
    assert (
        build_delete_data(DeleteKeyword.DELETE_FROM, TRIPLE, "urn:g").text
        == "DELETE FROM <urn:g> {<urn:s> <urn:p> <urn:o> .}"
    )
    assert (
        build_delete_data(DeleteKeyword.DELETE_DATA_FROM, TRIPLE, "urn:g").text
        == "DELETE DATA FROM <urn:g> {<urn:s> <urn:p> <urn:o> .}"
    )


@pytest.mark.parametrize(
    "keyword", [DeleteKeyword.DELETE_FROM, DeleteKeyword.DELETE_DATA_FROM]
)
def test_graph_first_delete_dialects_require_graph(keyword):
    with pytest.raises(GraphUriRequiredError):
        build_delete_data(keyword, TRIPLE)


def test_generic_delete():
    stmt = build_delete_data(DeleteKeyword.DELETE, TRIPLE, "urn:g")
    assert stmt.text == "DELETE {<urn:s> <urn:p> <urn:o> .} WHERE {}"
    assert stmt.using_graph_uri == "urn:g"


# ----------------------------------------------------------------------
# DELETE WHERE
# ----------------------------------------------------------------------


def test_delete_where_with_dialect():
    assert (
        build_delete_where(DeleteWhereKeyword.WITH, "?s ?p ?o", "urn:g")
        == "WITH <urn:g> DELETE WHERE {?s ?p ?o}"
    )
    assert (
        build_delete_where(DeleteWhereKeyword.WITH, "?s ?p ?o")
        == "DELETE WHERE {?s ?p ?o}"
    )


def test_delete_where_delete_from_dialect():
    assert (
        build_delete_where(DeleteWhereKeyword.DELETE_FROM, "?s ?p ?o", "urn:g")
        == "DELETE FROM <urn:g> {?s ?p ?o} WHERE {?s ?p ?o}"
    )
    assert (
        build_delete_where(DeleteWhereKeyword.DELETE_FROM, "?s ?p ?o")
        == "DELETE {?s ?p ?o} WHERE {?s ?p ?o}"
    )


# ----------------------------------------------------------------------
# Payload formatting
# ----------------------------------------------------------------------


def test_string_payload_passes_through():
    assert format_rdf_payload(TRIPLE) == TRIPLE


def test_graph_payload_is_serialised_as_ntriples():
    g = Graph()
    g.add((URIRef("urn:s"), URIRef("urn:p"), Literal("o")))
    assert format_rdf_payload(g).strip() == '<urn:s> <urn:p> "o" .'


def test_serialisation_failure_is_wrapped():
    g = Graph()
    g.add((URIRef("urn:s"), URIRef("urn:p"), URIRef("urn:o")))
    with pytest.raises(SerializationError) as info:
        format_rdf_payload(g, format="no-such-format")
    assert info.value.__cause__ is not None


def test_unsupported_payload_type():
    with pytest.raises(TypeError):
        format_rdf_payload(42)
