"""
pydsparql.exceptions
====================

Error taxonomy for the protocol client. Everything raised on purpose by
pydsparql derives from :class:`SparqlClientError`; transport-level
failures from :mod:`requests` are left to propagate unchanged.

An unrecognised query form is *not* an error: the classifier degrades to
:attr:`pydsparql.query_form.QueryForm.UNKNOWN`.
"""

from typing import Optional


class SparqlClientError(Exception):
    """Base class for pydsparql errors."""


class ConfigurationError(SparqlClientError, ValueError):
    """Raised at setter/build time for an unsupported keyword, protocol or graph reference."""


class UnknownParameterError(ConfigurationError):
    """Raised when a dataset parameter name is not one of the four protocol names."""


class GraphUriRequiredError(SparqlClientError):
    """Raised when a keyword dialect needs an explicit graph URI and none was given."""


class ParametersMustBeInBodyError(SparqlClientError):
    """
    Raised when a url-encoded POST is requested against a URI that already
    carries a query string; the two cannot be combined safely.
    """


class SerializationError(SparqlClientError):
    """Raised when an RDF graph cannot be serialised into an update payload."""


class HttpRequestFailedError(SparqlClientError):
    """
    Raised for a non-successful HTTP status.

    ``status`` and the raw response ``body`` are kept for diagnostics.
    """

    def __init__(self, message: str, status: int, body: Optional[str] = None):
        super().__init__(f"{message} (HTTP {status})")
        self.status = status
        self.body = body
