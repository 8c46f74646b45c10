"""
pydsparql.responses
===================

Turn a successful SPARQL response into a domain object, based on its
Content-Type:

* ``application/sparql-results+*`` → :class:`rdflib.query.Result`
  (``SELECT`` bindings or an ``ASK`` boolean);
* anything else → :class:`rdflib.Graph`, using the query URI as base.

Some older stores answer ``CONSTRUCT`` with a pre-1.0 JSON-LD shape
(nodes under ``"@"``, ``"a"`` for the type, ``"@literal"`` values);
:func:`normalize_legacy_jsonld` rewrites those into a ``@graph``
document before handing them to rdflib.
"""

import io
import json
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from rdflib import Graph, URIRef
from rdflib.query import Result

from .formats import parse_mime_type, rdflib_graph_format, rdflib_results_format
from .http import HttpResponse
from .settings import SPARQL_RESULTS_MIME_PREFIX

JSONLD_MIME = "application/ld+json"
DEFAULT_GRAPH_HEADER = "X-sparql-default-graph"


def parse_results(content: Union[bytes, str], content_type: str) -> Result:
    """Parse a SPARQL results document with rdflib's result parsers."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    fmt = rdflib_results_format(content_type)
    if fmt is None:
        return Result.parse(io.BytesIO(content), content_type=content_type)
    return Result.parse(io.BytesIO(content), format=fmt)


def _legacy_value(value: Any) -> Any:
    if isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return {"@id": value}
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        if "@literal" in value:
            out["@value"] = value["@literal"]
        if "@language" in value:
            out["@language"] = value["@language"]
        if "@datatype" in value:
            out["@type"] = value["@datatype"]
        return out
    return value


def normalize_legacy_jsonld(data: Any) -> Optional[Dict[str, Any]]:
    """
    Rewrite a legacy ``{"@": [...]}`` JSON-LD payload as ``{"@graph": [...]}``.

    Documents that already have ``@graph`` are returned unchanged; anything
    that is neither shape gives ``None``. A single node object under ``"@"``
    is treated as a one-node list and entries that are not objects are
    skipped.
    """
    if not isinstance(data, dict) or not data:
        return None
    if "@graph" in data:
        return data
    if "@" not in data:
        return None

    legacy_nodes = data["@"]
    if isinstance(legacy_nodes, dict):
        legacy_nodes = [legacy_nodes]
    elif not isinstance(legacy_nodes, list):
        return None

    nodes: List[Dict[str, Any]] = []
    for legacy in legacy_nodes:
        if not isinstance(legacy, dict):
            logger.debug(f"Skipping legacy JSON-LD entry {legacy!r}")
            continue
        node: Dict[str, Any] = {}
        for key, value in legacy.items():
            if key == "@":
                node["@id"] = value
            elif key == "a":
                node["@type"] = value
            else:
                values = value if isinstance(value, list) else [value]
                converted = [_legacy_value(v) for v in values]
                node[key] = converted[0] if len(converted) == 1 else converted
        nodes.append(node)
    return {"@graph": nodes}


def _jsonld_payload(content: bytes) -> bytes:
    try:
        data = json.loads(content)
    except ValueError:
        return content
    if isinstance(data, dict) and "@" in data and "@graph" not in data:
        normalized = normalize_legacy_jsonld(data)
        if normalized is None:
            return content
        logger.debug("Normalising legacy JSON-LD response")
        return json.dumps(normalized).encode("utf-8")
    return content


def parse_graph(
    base_uri: str,
    content: Union[bytes, str],
    content_type: str,
    graph_uri: Optional[str] = None,
) -> Graph:
    """
    Parse an RDF graph response, resolving relative IRIs against ``base_uri``.

    ``graph_uri``, when given, becomes the identifier of the returned graph.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    if content_type == JSONLD_MIME:
        content = _jsonld_payload(content)
    fmt = rdflib_graph_format(content_type) or content_type or None
    graph = Graph(identifier=URIRef(graph_uri)) if graph_uri else Graph()
    graph.parse(data=content, format=fmt, publicID=base_uri)
    return graph


def route_response(response: HttpResponse, base_uri: str) -> Union[Result, Graph]:
    """
    Dispatch ``response`` to the results or the graph parser.

    A graph response names its graph through the ``X-sparql-default-graph``
    header on some stores; that IRI is kept as the graph's identifier.
    """
    content_type, _ = parse_mime_type(response.get_header("Content-Type"))
    if content_type.startswith(SPARQL_RESULTS_MIME_PREFIX):
        return parse_results(response.content, content_type)
    return parse_graph(
        base_uri,
        response.content,
        content_type,
        graph_uri=response.get_header(DEFAULT_GRAPH_HEADER),
    )
