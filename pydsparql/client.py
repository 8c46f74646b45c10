"""
pydsparql.client
================

:class:`SparqlClient` – the request dispatcher of the SPARQL 1.1
Protocol, plus the convenience operations built on top of it.

A dispatch runs the same steps for every operation:

1. prepend ``PREFIX`` declarations the text uses but does not declare;
2. pick the query or update URI and the configured transport protocol;
3. classify the query form (queries only) and derive the Accept header;
4. build the request with the pending dataset parameters and send it;
5. clear the pending dataset parameters, whatever happened;
6. raise :class:`HttpRequestFailedError` on a non-2xx/3xx status, return
   the bare :class:`HttpResponse` for ``204 No Content``, and route any
   other response to the results or graph parser.

Dispatches are serialised per client by a lock, so pending dataset
parameters cannot leak from one call into another. Sharing one client
between threads still means each caller must add its dataset parameters
and dispatch without interleaving; give each logical caller its own
client when that matters.

Example
-------

>>> client = SparqlClient("http://localhost:3030/ds/sparql",
...                       "http://localhost:3030/ds/update")
>>> client.insert_data("<urn:s> <urn:p> <urn:o> .", "urn:g")   # doctest: +SKIP
>>> client.count_triples()                                       # doctest: +SKIP
1
"""

import enum
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Type, TypeVar, Union

from loguru import logger
from rdflib import Graph, URIRef
from rdflib.query import Result

from .dataset import DatasetParameter, DatasetParameters
from .endpoint import SparqlEndpoint
from .exceptions import ConfigurationError, HttpRequestFailedError
from .formats import accept_header_for, parse_mime_type, rdflib_graph_format
from .graph_management import GraphOperation, build_graph_management_query
from .http import HttpClient, HttpResponse
from .namespaces import add_missing_prefixes
from .query_form import classify_query_form
from .responses import route_response
from .settings import SPARQL_RESULTS_MIME_PREFIX
from .transport import (
    UPDATE_PROTOCOLS,
    PreparedRequest,
    TransportProtocol,
    prepare_request,
)
from .update import (
    DeleteKeyword,
    DeleteWhereKeyword,
    InsertKeyword,
    UpdateStatement,
    build_delete_data,
    build_delete_where,
    build_insert_data,
    format_rdf_payload,
)

E = TypeVar("E", bound=enum.Enum)

SparqlResponse = Union[Result, Graph, HttpResponse]


def _coerce(enum_cls: Type[E], value: Any, what: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ConfigurationError(
            f"Unknown {what} '{value}'; expected one of "
            f"{[member.value for member in enum_cls]}"
        ) from None


class SparqlClient:
    """
    Client for one SPARQL endpoint.

    Parameters
    ----------
    query_uri:
        Address of the query service.
    update_uri:
        Address of the update service; defaults to ``query_uri``.
    http_client:
        Transport to send requests with. By default a new
        :class:`HttpClient` is created for this client.
    default_graph_uri:
        Sent as ``default-graph-uri`` with every query.
    using_graph_uri:
        Sent as ``using-graph-uri`` with every update.

    Defaults follow SPARQL 1.1: queries via GET (with POST fallback for
    long queries), updates via POST directly, ``INSERT DATA`` /
    ``DELETE DATA`` and ``WITH <g> DELETE WHERE`` statements.
    """

    def __init__(
        self,
        query_uri: str,
        update_uri: Optional[str] = None,
        *,
        http_client: Optional[HttpClient] = None,
        default_graph_uri: Optional[str] = None,
        using_graph_uri: Optional[str] = None,
    ):
        self.endpoint = SparqlEndpoint(query_uri=query_uri, update_uri=update_uri)
        self.http_client = http_client or HttpClient()

        self.query_protocol = TransportProtocol.GET
        self.update_protocol = TransportProtocol.POST_DIRECT
        self.insert_keyword = InsertKeyword.INSERT_DATA
        self.delete_keyword = DeleteKeyword.DELETE_DATA
        self.delete_where_keyword = DeleteWhereKeyword.WITH
        self.force_query_parameter = False
        self.default_graph_uri = default_graph_uri or None
        self.using_graph_uri = using_graph_uri or None

        self._dataset = DatasetParameters()
        self._lock = threading.Lock()

    @classmethod
    def from_endpoint(cls, endpoint: SparqlEndpoint, **kwargs: Any) -> "SparqlClient":
        """Build a client whose transport uses the endpoint's auth and timeout."""
        kwargs.setdefault(
            "http_client", HttpClient(timeout=endpoint.timeout, auth=endpoint.auth())
        )
        client = cls(endpoint.query_uri, endpoint.update_uri, **kwargs)
        client.endpoint = endpoint
        return client

    @property
    def query_uri(self) -> str:
        return self.endpoint.query_uri

    @property
    def update_uri(self) -> str:
        return self.endpoint.update_uri or self.endpoint.query_uri

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "SparqlClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ── configuration ────────────────────────────────────────────────

    def set_query_protocol(self, protocol: Union[TransportProtocol, str]) -> None:
        self.query_protocol = _coerce(TransportProtocol, protocol, "query protocol")

    def set_update_protocol(self, protocol: Union[TransportProtocol, str]) -> None:
        """Select POST_DIRECT or POST_URLENCODED; GET is rejected."""
        selected = _coerce(TransportProtocol, protocol, "update protocol")
        if selected not in UPDATE_PROTOCOLS:
            raise ConfigurationError(f"{selected} cannot be used for updates")
        self.update_protocol = selected

    def set_insert_keyword(self, keyword: Union[InsertKeyword, str]) -> None:
        self.insert_keyword = _coerce(InsertKeyword, keyword, "insert keyword")

    def set_delete_keyword(self, keyword: Union[DeleteKeyword, str]) -> None:
        self.delete_keyword = _coerce(DeleteKeyword, keyword, "delete keyword")

    def set_delete_where_keyword(self, keyword: Union[DeleteWhereKeyword, str]) -> None:
        self.delete_where_keyword = _coerce(
            DeleteWhereKeyword, keyword, "delete-where keyword"
        )

    def set_default_graph_uri(self, graph_uri: Optional[str]) -> None:
        """Graph sent as ``default-graph-uri`` with every query; empty removes it."""
        self.default_graph_uri = graph_uri or None

    def set_using_graph_uri(self, graph_uri: Optional[str]) -> None:
        """Graph sent as ``using-graph-uri`` with every update; empty removes it."""
        self.using_graph_uri = graph_uri or None

    def set_force_query_parameter(self, force: bool) -> None:
        """Send url-encoded updates as ``query=`` for stores that ignore ``update=``."""
        self.force_query_parameter = bool(force)

    def add_dataset_parameter(
        self, name: Union[DatasetParameter, str], graph_uri: str
    ) -> None:
        """Scope the *next* request only; cleared by every dispatch."""
        self._dataset.add(name, graph_uri)

    # ── dispatch ─────────────────────────────────────────────────────

    @contextmanager
    def _request_scope(self) -> Iterator[None]:
        try:
            yield
        finally:
            self._dataset.clear()

    def _pending_dataset(
        self, is_update: bool, using_graph_uri: Optional[str] = None
    ) -> DatasetParameters:
        dataset = self._dataset.snapshot()
        if is_update and self.using_graph_uri:
            dataset.add(DatasetParameter.USING_GRAPH_URI, self.using_graph_uri)
        elif not is_update and self.default_graph_uri:
            dataset.add(DatasetParameter.DEFAULT_GRAPH_URI, self.default_graph_uri)
        if using_graph_uri:
            dataset.add(DatasetParameter.USING_GRAPH_URI, using_graph_uri)
        return dataset

    def _execute(self, request: PreparedRequest, accept: str) -> HttpResponse:
        client = self.http_client
        client.reset_parameters()
        client.set_header("Accept", accept)
        for name, value in request.headers.items():
            client.set_header(name, value)
        client.set_method(request.method)
        client.set_uri(request.uri)
        client.set_raw_data(request.body)
        return client.execute()

    def _request(
        self, query: str, is_update: bool, using_graph_uri: Optional[str] = None
    ) -> SparqlResponse:
        """
        Dispatch one request. ``using_graph_uri`` is sent with this update
        only and never touches the pending dataset parameters.
        """
        with self._lock, self._request_scope():
            query = add_missing_prefixes(query)
            if is_update:
                uri, protocol, form = self.update_uri, self.update_protocol, None
            else:
                form = classify_query_form(query)
                uri, protocol = self.query_uri, self.query_protocol
            accept = accept_header_for(form)

            request = prepare_request(
                protocol,
                query,
                uri,
                self._pending_dataset(is_update, using_graph_uri),
                is_update=is_update,
                force_query_parameter=self.force_query_parameter,
            )
            logger.debug(
                f"SPARQL {'update' if is_update else form} via {protocol}: "
                f"{request.method} {request.uri} (Accept: {accept})"
            )
            response = self._execute(request, accept)

        if not response.is_successful():
            logger.error(
                f"SPARQL request to {request.uri} failed with HTTP {response.status}"
            )
            raise HttpRequestFailedError(
                "HTTP request for SPARQL query failed", response.status, response.body
            )
        if response.status == 204:
            return response
        if is_update and not self._is_parseable(response):
            return response
        return route_response(response, self.query_uri)

    @staticmethod
    def _is_parseable(response: HttpResponse) -> bool:
        content_type, _ = parse_mime_type(response.get_header("Content-Type"))
        if not response.content:
            return False
        return content_type.startswith(SPARQL_RESULTS_MIME_PREFIX) or (
            rdflib_graph_format(content_type) is not None
        )

    # ── query / update ───────────────────────────────────────────────

    def query(self, query: str) -> Union[Result, Graph]:
        """
        Run a query. ``SELECT`` / ``ASK`` give a :class:`rdflib.query.Result`,
        ``CONSTRUCT`` / ``DESCRIBE`` an :class:`rdflib.Graph`.
        """
        return self._request(query, is_update=False)

    def update(self, query: str) -> SparqlResponse:
        """
        Run an update. Usually returns the :class:`HttpResponse`; a store
        that answers with a results document or a graph gets it parsed.
        """
        return self._request(query, is_update=True)

    def _update_statement(self, statement: UpdateStatement) -> SparqlResponse:
        return self._request(
            statement.text, is_update=True, using_graph_uri=statement.using_graph_uri
        )

    def insert_data(self, data: Any, graph_uri: Optional[str] = None) -> SparqlResponse:
        """
        Insert ground triples (N-Triples text or an :class:`rdflib.Graph`)
        using the selected insert keyword.
        """
        with self._request_scope():
            statement = build_insert_data(
                self.insert_keyword, format_rdf_payload(data), graph_uri
            )
            return self._update_statement(statement)

    def delete_data(self, data: Any, graph_uri: Optional[str] = None) -> SparqlResponse:
        """Delete ground triples using the selected delete keyword."""
        with self._request_scope():
            statement = build_delete_data(
                self.delete_keyword, format_rdf_payload(data), graph_uri
            )
            return self._update_statement(statement)

    def delete_where(
        self, pattern: str = "?s ?p ?o", graph_uri: Optional[str] = None
    ) -> SparqlResponse:
        """Delete every triple matching ``pattern``, optionally within one graph."""
        with self._request_scope():
            return self.update(
                build_delete_where(self.delete_where_keyword, pattern, graph_uri)
            )

    # ── graph management ─────────────────────────────────────────────

    def _graph_management(
        self,
        operation: GraphOperation,
        silent: bool,
        graph_from: str,
        graph_to: Optional[str] = None,
    ) -> SparqlResponse:
        with self._request_scope():
            return self.update(
                build_graph_management_query(operation, silent, graph_from, graph_to)
            )

    def create(self, graph_uri: str, silent: bool = False) -> SparqlResponse:
        """``CREATE GRAPH <graph_uri>``."""
        return self._graph_management(GraphOperation.CREATE, silent, graph_uri)

    def drop(self, graph_uri: str, silent: bool = False) -> SparqlResponse:
        """Remove a graph; ``graph_uri`` may also be DEFAULT, NAMED or ALL."""
        return self._graph_management(GraphOperation.DROP, silent, graph_uri)

    def clear(self, graph_uri: str, silent: bool = False) -> SparqlResponse:
        """Remove all triples of a graph; accepts DEFAULT, NAMED or ALL too."""
        return self._graph_management(GraphOperation.CLEAR, silent, graph_uri)

    def copy(self, graph_from: str, graph_to: str, silent: bool = False) -> SparqlResponse:
        return self._graph_management(GraphOperation.COPY, silent, graph_from, graph_to)

    def move(self, graph_from: str, graph_to: str, silent: bool = False) -> SparqlResponse:
        return self._graph_management(GraphOperation.MOVE, silent, graph_from, graph_to)

    def add(self, graph_from: str, graph_to: str, silent: bool = False) -> SparqlResponse:
        return self._graph_management(GraphOperation.ADD, silent, graph_from, graph_to)

    def load(
        self, document_uri: str, graph_uri: Optional[str] = None, silent: bool = False
    ) -> SparqlResponse:
        """Load a remote RDF document into ``graph_uri`` (or the default graph)."""
        return self._graph_management(
            GraphOperation.LOAD, silent, document_uri, graph_uri
        )

    # ── convenience queries ──────────────────────────────────────────

    def count_triples(self, condition: str = "?s ?p ?o") -> int:
        """
        Count the triples matching ``condition`` (all triples of the
        default graph by default).
        """
        result = self.query(f"SELECT (COUNT(*) AS ?count) {{{condition}}}")
        rows = list(result)
        if not rows:
            return 0
        return int(rows[0]["count"])

    def list_named_graphs(self, limit: Optional[int] = None) -> List[URIRef]:
        """Return the IRIs of the named graphs holding at least one triple."""
        query = "SELECT DISTINCT ?g WHERE {GRAPH ?g {?s ?p ?o}}"
        if limit is not None:
            query += f" LIMIT {int(limit)}"
        result = self.query(query)
        return [row["g"] for row in result]
