"""
pydsparql.transport
===================

Wire strategies of the SPARQL 1.1 Protocol.

Each strategy is a pure function that turns a query/update string, the
target URI and the pending dataset parameters into a
:class:`PreparedRequest`; nothing is sent here. :data:`STRATEGIES` maps
a :class:`TransportProtocol` to its strategy.

* ``GET`` – cacheable, queries only, limited by
  :data:`pydsparql.settings.GET_URI_MAX_LENGTH`; falls back to a POST
  strategy when the URI would be too long.
* ``POST_DIRECT`` – raw text in the body, dataset parameters on the URI.
* ``POST_URLENCODED`` – ``query=`` / ``update=`` form body, dataset
  parameters appended to the body.

See https://www.w3.org/TR/sparql11-protocol/#query-operation and
https://www.w3.org/TR/sparql11-protocol/#update-operation
"""

import enum
from typing import Callable, Dict, Optional
from urllib.parse import quote_plus, urlsplit

from loguru import logger
from pydantic import BaseModel, Field

from .dataset import DatasetParameters
from .exceptions import ConfigurationError, ParametersMustBeInBodyError
from .settings import (
    CTYPE_FORM_URLENCODED,
    CTYPE_SPARQL_QUERY,
    CTYPE_SPARQL_UPDATE,
    GET_URI_MAX_LENGTH,
    QUERY_FIELD,
    UPDATE_FIELD,
)


class TransportProtocol(enum.StrEnum):
    GET = "GET"
    POST_DIRECT = "POST_DIRECT"
    POST_URLENCODED = "POST_URLENCODED"


UPDATE_PROTOCOLS = frozenset(
    {TransportProtocol.POST_DIRECT, TransportProtocol.POST_URLENCODED}
)


class PreparedRequest(BaseModel):
    """A ready-to-send HTTP request."""

    method: str
    uri: str
    body: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)


Strategy = Callable[..., PreparedRequest]


def uri_has_query(uri: str) -> bool:
    """True if ``uri`` already carries a query-string component."""
    return bool(urlsplit(uri).query)


def _delimiter(uri: str) -> str:
    return "&" if uri_has_query(uri) else "?"


def _with_dataset(dataset: Optional[DatasetParameters], tail: str) -> str:
    if dataset:
        return f"{dataset.serialize()}&{tail}"
    return tail


def sparql_get(
    query: str,
    uri: str,
    dataset: Optional[DatasetParameters] = None,
    is_update: bool = False,
    force_query_parameter: bool = False,
) -> PreparedRequest:
    """
    Query via GET.

    ``uri + delimiter + [dataset&]query=<urlencoded>``. When that would
    exceed :data:`GET_URI_MAX_LENGTH`, fall back to ``POST_DIRECT`` if
    ``uri`` already has a query string, otherwise to ``POST_URLENCODED``.
    """
    if is_update:
        raise ConfigurationError("SPARQL updates cannot be sent via GET")

    query_string = _with_dataset(dataset, f"{QUERY_FIELD}={quote_plus(query)}")
    if len(query_string) + len(uri) <= GET_URI_MAX_LENGTH:
        return PreparedRequest(method="GET", uri=uri + _delimiter(uri) + query_string)

    if uri_has_query(uri):
        logger.warning(
            f"Query too long for GET ({len(query_string) + len(uri)} bytes); "
            "falling back to POST_DIRECT"
        )
        return sparql_post_directly(
            query, uri, dataset, is_update, force_query_parameter
        )
    logger.warning(
        f"Query too long for GET ({len(query_string) + len(uri)} bytes); "
        "falling back to POST_URLENCODED"
    )
    return sparql_post_urlencoded(query, uri, dataset, is_update, force_query_parameter)


def sparql_post_directly(
    query: str,
    uri: str,
    dataset: Optional[DatasetParameters] = None,
    is_update: bool = False,
    force_query_parameter: bool = False,
) -> PreparedRequest:
    """
    Query or update via POST directly: the unencoded text is the body and
    any dataset parameters go on the URI.
    """
    if dataset:
        uri = uri + _delimiter(uri) + dataset.serialize()
    content_type = CTYPE_SPARQL_UPDATE if is_update else CTYPE_SPARQL_QUERY
    return PreparedRequest(
        method="POST",
        uri=uri,
        body=query,
        headers={"Content-Type": content_type},
    )


def sparql_post_urlencoded(
    query: str,
    uri: str,
    dataset: Optional[DatasetParameters] = None,
    is_update: bool = False,
    force_query_parameter: bool = False,
) -> PreparedRequest:
    """
    Query or update via url-encoded POST.

    The form field is ``update`` for updates and ``query`` otherwise;
    ``force_query_parameter`` keeps ``query`` for updates too, for stores
    that only read that field.
    """
    if uri_has_query(uri):
        raise ParametersMustBeInBodyError(
            f"Cannot POST url-encoded parameters to '{uri}': "
            "the URI already has a query string"
        )
    field = UPDATE_FIELD if is_update and not force_query_parameter else QUERY_FIELD
    body = f"{field}={quote_plus(query)}"
    if dataset:
        body = f"{body}&{dataset.serialize()}"
    return PreparedRequest(
        method="POST",
        uri=uri,
        body=body,
        headers={"Content-Type": CTYPE_FORM_URLENCODED},
    )


STRATEGIES: Dict[TransportProtocol, Strategy] = {
    TransportProtocol.GET: sparql_get,
    TransportProtocol.POST_DIRECT: sparql_post_directly,
    TransportProtocol.POST_URLENCODED: sparql_post_urlencoded,
}


def prepare_request(
    protocol: TransportProtocol,
    query: str,
    uri: str,
    dataset: Optional[DatasetParameters] = None,
    is_update: bool = False,
    force_query_parameter: bool = False,
) -> PreparedRequest:
    """Look up the strategy for ``protocol`` and build the request."""
    if is_update and protocol not in UPDATE_PROTOCOLS:
        raise ConfigurationError(f"Protocol {protocol} is not valid for updates")
    strategy = STRATEGIES[TransportProtocol(protocol)]
    return strategy(query, uri, dataset, is_update, force_query_parameter)
