"""
Public API for the pydsparql package.

Most users will interact with:

* :class:`SparqlClient` to query and update a SPARQL 1.1 endpoint.
* :class:`SparqlEndpoint` to hold connection settings (optionally read
  from the environment).
* The keyword / protocol enumerations when talking to triple stores that
  need a non-standard dialect.
* :class:`RdfNamespace` to register prefixes injected into queries.
"""

from .client import SparqlClient
from .dataset import DatasetParameter, DatasetParameters
from .endpoint import SparqlEndpoint
from .exceptions import (
    SparqlClientError,
    ConfigurationError,
    UnknownParameterError,
    GraphUriRequiredError,
    ParametersMustBeInBodyError,
    SerializationError,
    HttpRequestFailedError,
)
from .formats import accept_header_for, format_accept_header, get_http_accept_header
from .graph_management import (
    GraphOperation,
    GraphKeyword,
    build_graph_management_query,
)
from .http import HttpClient, HttpResponse
from .namespaces import RdfNamespace, add_missing_prefixes
from .query_form import QueryForm, classify_query_form
from .responses import normalize_legacy_jsonld, route_response
from .transport import PreparedRequest, TransportProtocol, prepare_request
from .update import (
    InsertKeyword,
    DeleteKeyword,
    DeleteWhereKeyword,
    UpdateStatement,
    build_insert_data,
    build_delete_data,
    build_delete_where,
    format_rdf_payload,
)
from .version import __version__ as __version__

__all__ = [
    # client
    "SparqlClient",
    "SparqlEndpoint",
    # dataset
    "DatasetParameter",
    "DatasetParameters",
    # exceptions
    "SparqlClientError",
    "ConfigurationError",
    "UnknownParameterError",
    "GraphUriRequiredError",
    "ParametersMustBeInBodyError",
    "SerializationError",
    "HttpRequestFailedError",
    # content negotiation
    "accept_header_for",
    "format_accept_header",
    "get_http_accept_header",
    # graph management
    "GraphOperation",
    "GraphKeyword",
    "build_graph_management_query",
    # http
    "HttpClient",
    "HttpResponse",
    # namespaces
    "RdfNamespace",
    "add_missing_prefixes",
    # query form
    "QueryForm",
    "classify_query_form",
    # responses
    "normalize_legacy_jsonld",
    "route_response",
    # transport
    "PreparedRequest",
    "TransportProtocol",
    "prepare_request",
    # update
    "InsertKeyword",
    "DeleteKeyword",
    "DeleteWhereKeyword",
    "UpdateStatement",
    "build_insert_data",
    "build_delete_data",
    "build_delete_where",
    "format_rdf_payload",
    # version
    "__version__",
]
