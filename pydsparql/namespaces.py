"""
pydsparql.namespaces
====================

Process-wide prefix → namespace IRI registry, and the helper that
prepends the ``PREFIX`` declarations a query uses but does not declare.

The registry is seeded with the common vocabularies shipped by
:mod:`rdflib.namespace`. Iteration order is insertion order, which is
also the order in which missing prefixes are injected.
"""

import re
import threading
from typing import Dict, Optional

from loguru import logger
from rdflib.namespace import (
    DC,
    DCAT,
    DCTERMS,
    FOAF,
    OWL,
    PROV,
    RDF,
    RDFS,
    SKOS,
    VOID,
    XSD,
)

from .exceptions import ConfigurationError

_DEFAULT_NAMESPACES: Dict[str, str] = {
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "owl": str(OWL),
    "xsd": str(XSD),
    "foaf": str(FOAF),
    "dc": str(DC),
    "dcterms": str(DCTERMS),
    "skos": str(SKOS),
    "dcat": str(DCAT),
    "prov": str(PROV),
    "void": str(VOID),
}

_PREFIX_RE = re.compile(r"^[A-Za-z][\w.-]*$")


class RdfNamespace:
    """
    Global prefix registry.

    Read-only from the point of view of the protocol client; callers may
    register their own vocabularies with :meth:`set` before issuing
    queries.
    """

    _lock = threading.Lock()
    _namespaces: Dict[str, str] = dict(_DEFAULT_NAMESPACES)

    @classmethod
    def namespaces(cls) -> Dict[str, str]:
        """Return a copy of the registry, in registration order."""
        with cls._lock:
            return dict(cls._namespaces)

    @classmethod
    def get(cls, prefix: str) -> Optional[str]:
        with cls._lock:
            return cls._namespaces.get(prefix.lower())

    @classmethod
    def set(cls, prefix: str, iri: str) -> None:
        """
        Register ``prefix`` for ``iri``; prefixes are stored lower-case.

        Raises :class:`ConfigurationError` for a prefix that is not a
        valid SPARQL prefix name.
        """
        if not _PREFIX_RE.match(prefix):
            raise ConfigurationError(f"Invalid namespace prefix '{prefix}'")
        with cls._lock:
            cls._namespaces[prefix.lower()] = iri

    @classmethod
    def delete(cls, prefix: str) -> None:
        with cls._lock:
            cls._namespaces.pop(prefix.lower(), None)

    @classmethod
    def reset(cls) -> None:
        """Restore the default registry. Intended mainly for tests."""
        with cls._lock:
            cls._namespaces = dict(_DEFAULT_NAMESPACES)


def add_missing_prefixes(query: str) -> str:
    """
    Prepend ``PREFIX p: <iri>`` lines for registered prefixes used in
    ``query`` but not declared there.

    Matching is textual: a ``p:`` inside a literal or a comment counts as
    a use, and only the exact ``PREFIX p:`` spelling counts as a
    declaration.
    """
    missing = {
        prefix: iri
        for prefix, iri in RdfNamespace.namespaces().items()
        if f"{prefix}:" in query and f"PREFIX {prefix}:" not in query
    }
    if not missing:
        return query
    logger.debug(f"Injecting missing prefix declarations: {list(missing)}")
    declarations = "".join(
        f"PREFIX {prefix}: <{iri}>\n" for prefix, iri in missing.items()
    )
    return declarations + query
