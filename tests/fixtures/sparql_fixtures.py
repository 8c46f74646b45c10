import os

import pytest

from pydsparql import SparqlClient, SparqlEndpoint
from pydsparql.settings import ENV_SPARQL_QUERY_ENDPOINT_URL

QUERY_URI = "http://localhost:3030/ds/sparql"
UPDATE_URI = "http://localhost:3030/ds/update"

SELECT_JSON = "application/sparql-results+json"
LIVE_TEST_GRAPH = "http://example.org/pydsparql/test-graph"


@pytest.fixture
def client():
    """Client against a fake Fuseki-style endpoint; pair with ``requests_mock``."""
    with SparqlClient(QUERY_URI, UPDATE_URI) as cli:
        yield cli


@pytest.fixture(scope="module")
def sparql_endpoint():
    if not os.getenv(ENV_SPARQL_QUERY_ENDPOINT_URL):
        pytest.skip(f"{ENV_SPARQL_QUERY_ENDPOINT_URL} is not configured")
    return SparqlEndpoint.from_env()


@pytest.fixture
def live_client(sparql_endpoint):
    cli = SparqlClient.from_endpoint(sparql_endpoint)
    cli.clear(LIVE_TEST_GRAPH, silent=True)
    yield cli
    cli.clear(LIVE_TEST_GRAPH, silent=True)
    cli.close()
