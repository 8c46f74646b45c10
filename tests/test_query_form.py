"""
Tests for pydsparql.query_form.

Covers:
- Recognition of the four query forms behind any BASE/PREFIX prologue.
- Degradation to UNKNOWN for updates and anything unrecognisable.
- Update statements produced by the builders never look like queries.
"""

import pytest

from pydsparql.graph_management import GraphOperation, build_graph_management_query
from pydsparql.query_form import QueryForm, classify_query_form
from pydsparql.update import (
    DeleteKeyword,
    DeleteWhereKeyword,
    InsertKeyword,
    build_delete_data,
    build_delete_where,
    build_insert_data,
)


# ----------------------------------------------------------------------
# Recognised forms
# ----------------------------------------------------------------------


@pytest.mark.parametrize(
    "query, expected",
    [
        ("SELECT * WHERE { ?s ?p ?o }", QueryForm.SELECT),
        ("select ?s { ?s ?p ?o }", QueryForm.SELECT),
        ("ASK { ?s ?p ?o }", QueryForm.ASK),
        ("ask{?s ?p ?o}", QueryForm.ASK),
        ("CONSTRUCT WHERE { ?s ?p ?o }", QueryForm.CONSTRUCT),
        ("DESCRIBE <http://example.org/a>", QueryForm.DESCRIBE),
        ("  \n\tSELECT ?s WHERE {}", QueryForm.SELECT),
        ("SELECT*{?s ?p ?o}", QueryForm.SELECT),
    ],
)
def test_bare_query_forms(query, expected):
    assert classify_query_form(query) == expected


def test_prefixes_and_base_are_skipped():
    query = (
        "PREFIX foaf: <http://xmlns.com/foaf/0.1/>\n"
        "prefix ex: <http://example.org/>\n"
        "BASE <http://example.org/base/>\n"
        "CONSTRUCT { ?s foaf:name ?n } WHERE { ?s ex:name ?n }"
    )
    assert classify_query_form(query) == QueryForm.CONSTRUCT


def test_empty_prefix_name_and_comments_are_skipped():
    query = (
        "# list everything\n"
        "PREFIX : <http://example.org/>\n"
        "# the query itself\n"
        "ASK { :a :b :c }"
    )
    assert classify_query_form(query) == QueryForm.ASK


def test_base_without_whitespace_before_iri():
    assert classify_query_form("BASE<http://example.org/> SELECT ?s {}") == (
        QueryForm.SELECT
    )


# ----------------------------------------------------------------------
# UNKNOWN fallbacks
# ----------------------------------------------------------------------


@pytest.mark.parametrize(
    "query",
    [
        "",
        "   ",
        "INSERT DATA { <urn:s> <urn:p> <urn:o> }",
        "CLEAR GRAPH <urn:g>",
        "SELECT",  # keyword with nothing after it
        "SELECTION ?s",
        "SELECT_ ?s",
        "PREFIX ex <http://example.org/> SELECT ?s {}",  # missing colon
        "PREFIX ex: http://example.org/ SELECT ?s {}",  # IRI without brackets
        "BASE <http://example.org/ SELECT ?s {}",  # unterminated IRI
        "{ SELECT ?s {} }",
    ],
)
def test_unknown_forms(query):
    assert classify_query_form(query) == QueryForm.UNKNOWN


def test_form_properties():
    assert QueryForm.SELECT.returns_results and QueryForm.ASK.returns_results
    assert QueryForm.CONSTRUCT.returns_graph and QueryForm.DESCRIBE.returns_graph
    assert not QueryForm.UNKNOWN.returns_results
    assert not QueryForm.UNKNOWN.returns_graph


def test_built_update_statements_are_not_query_forms():
    """
    Every statement built by the update and graph-management builders
    classifies as UNKNOWN.
    """
    payload = "<urn:s> <urn:p> <urn:o> ."
    statements = [
        build_insert_data(kw, payload, "urn:g").text for kw in InsertKeyword
    ]
    statements += [
        build_delete_data(kw, payload, "urn:g").text for kw in DeleteKeyword
    ]
    statements += [
        build_delete_where(kw, "?s ?p ?o", graph)
        for kw in DeleteWhereKeyword
        for graph in ("urn:g", None)
    ]
    statements += [
        build_graph_management_query(GraphOperation.DROP, True, "ALL"),
        build_graph_management_query(GraphOperation.COPY, False, "DEFAULT", "urn:g"),
        build_graph_management_query(GraphOperation.LOAD, False, "urn:doc", "urn:g"),
    ]
    for statement in statements:
        assert classify_query_form(statement) == QueryForm.UNKNOWN, statement
