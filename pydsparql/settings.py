"""
pydsparql.settings
==================

Module-level constants shared by the protocol engine. Runtime
configuration (endpoint URLs, credentials) is read from the environment
variables named here by :meth:`pydsparql.endpoint.SparqlEndpoint.from_env`.
"""

from typing import Final

# Content types used on the request side of the SPARQL 1.1 Protocol.
CTYPE_SPARQL_QUERY: Final[str] = "application/sparql-query"
CTYPE_SPARQL_UPDATE: Final[str] = "application/sparql-update"
CTYPE_FORM_URLENCODED: Final[str] = "application/x-www-form-urlencoded"

# Prefix shared by every SPARQL results content type.
SPARQL_RESULTS_MIME_PREFIX: Final[str] = "application/sparql-results"

# 2kB minus 1 for '?' and 1 for the NULL terminator on the server.
GET_URI_MAX_LENGTH: Final[int] = 2046

# Form field names for url-encoded POST bodies and GET query strings.
QUERY_FIELD: Final[str] = "query"
UPDATE_FIELD: Final[str] = "update"

# Serialisation format used for RDF payloads in update statements.
DEFAULT_PAYLOAD_FORMAT: Final[str] = "nt"

ENV_SPARQL_QUERY_ENDPOINT_URL: Final[str] = "SPARQL_QUERY_ENDPOINT_URL"
ENV_SPARQL_UPDATE_ENDPOINT_URL: Final[str] = "SPARQL_UPDATE_ENDPOINT_URL"
ENV_SPARQL_ENDPOINT_USER: Final[str] = "SPARQL_ENDPOINT_USER"
ENV_SPARQL_ENDPOINT_PASSWORD: Final[str] = "SPARQL_ENDPOINT_PASSWORD"
ENV_SPARQL_ENDPOINT_TIMEOUT: Final[str] = "SPARQL_ENDPOINT_TIMEOUT"
