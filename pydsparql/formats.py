"""
pydsparql.formats
=================

Content-type registry and HTTP content negotiation.

Two families of formats are known:

* **graph** formats, returned for ``CONSTRUCT`` / ``DESCRIBE`` and parsed
  with :meth:`rdflib.Graph.parse`;
* **results** formats (``application/sparql-results+*``), returned for
  ``SELECT`` / ``ASK`` and parsed with :meth:`rdflib.query.Result.parse`.

Each MIME type carries a quality value used to rank the Accept header,
and the rdflib plugin name used to parse a response of that type.

See https://www.w3.org/TR/sparql11-protocol/#conneg
"""

from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .query_form import QueryForm


class RdfFormat(BaseModel):
    """A serialisation format: rdflib plugin name plus ranked MIME types."""

    model_config = ConfigDict(frozen=True)

    name: str
    rdflib_format: str
    mime_types: Dict[str, float]


GRAPH_FORMATS: List[RdfFormat] = [
    RdfFormat(
        name="jsonld",
        rdflib_format="json-ld",
        mime_types={"application/ld+json": 1.0},
    ),
    RdfFormat(
        name="ntriples",
        rdflib_format="nt",
        mime_types={"application/n-triples": 1.0, "text/ntriples": 0.9},
    ),
    RdfFormat(
        name="turtle",
        rdflib_format="turtle",
        mime_types={
            "text/turtle": 0.8,
            "application/turtle": 0.7,
            "application/x-turtle": 0.7,
        },
    ),
    RdfFormat(
        name="rdfxml",
        rdflib_format="xml",
        mime_types={"application/rdf+xml": 0.8},
    ),
    RdfFormat(
        name="n3",
        rdflib_format="n3",
        mime_types={"text/n3": 0.5, "text/rdf+n3": 0.5},
    ),
]

RESULTS_FORMATS: List[RdfFormat] = [
    RdfFormat(
        name="sparql-json",
        rdflib_format="json",
        mime_types={"application/sparql-results+json": 1.0},
    ),
    RdfFormat(
        name="sparql-xml",
        rdflib_format="xml",
        mime_types={"application/sparql-results+xml": 0.8},
    ),
]


def _collect(formats: List[RdfFormat]) -> Dict[str, float]:
    accept: Dict[str, float] = {}
    for fmt in formats:
        accept.update(fmt.mime_types)
    return accept


def _lookup(formats: List[RdfFormat], mime: str) -> Optional[str]:
    for fmt in formats:
        if mime in fmt.mime_types:
            return fmt.rdflib_format
    return None


def results_types() -> Dict[str, float]:
    """Ranked SPARQL results MIME types."""
    return _collect(RESULTS_FORMATS)


def format_accept_header(types: Mapping[str, float]) -> str:
    """
    Render ``{mime: q}`` as an Accept header, highest quality first.

    ``;q=`` is omitted for a quality of 1.0; ties keep insertion order.
    """
    ranked = sorted(types.items(), key=lambda item: -item[1])
    parts = []
    for mime, q in ranked:
        parts.append(mime if q == 1.0 else f"{mime};q={q:.1f}")
    return ",".join(parts)


def get_http_accept_header(extra: Optional[Mapping[str, float]] = None) -> str:
    """Accept header listing every graph format, plus ``extra`` types."""
    accept = _collect(GRAPH_FORMATS)
    if extra:
        accept.update(extra)
    return format_accept_header(accept)


def accept_header_for(form: Optional[QueryForm]) -> str:
    """
    Accept header for a query form.

    * ``SELECT`` / ``ASK`` – results types only.
    * ``CONSTRUCT`` / ``DESCRIBE`` – graph types only.
    * ``UNKNOWN`` or ``None`` (updates, whose response body is
      implementation defined) – both.
    """
    if form is not None and form.returns_results:
        return format_accept_header(results_types())
    if form is not None and form.returns_graph:
        return get_http_accept_header()
    return get_http_accept_header(results_types())


def parse_mime_type(value: Optional[str]) -> Tuple[str, Dict[str, str]]:
    """
    Split a Content-Type header into a lower-cased MIME type and its
    parameters, e.g. ``"text/turtle; charset=utf-8"`` →
    ``("text/turtle", {"charset": "utf-8"})``.
    """
    if not value:
        return "", {}
    head, *rest = value.split(";")
    params: Dict[str, str] = {}
    for part in rest:
        key, sep, val = part.partition("=")
        if sep:
            params[key.strip().lower()] = val.strip().strip('"')
    return head.strip().lower(), params


def rdflib_graph_format(mime: str) -> Optional[str]:
    return _lookup(GRAPH_FORMATS, mime)


def rdflib_results_format(mime: str) -> Optional[str]:
    return _lookup(RESULTS_FORMATS, mime)
