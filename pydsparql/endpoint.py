import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from requests.auth import HTTPBasicAuth, HTTPDigestAuth

from .settings import (
    ENV_SPARQL_ENDPOINT_PASSWORD,
    ENV_SPARQL_ENDPOINT_TIMEOUT,
    ENV_SPARQL_ENDPOINT_USER,
    ENV_SPARQL_QUERY_ENDPOINT_URL,
    ENV_SPARQL_UPDATE_ENDPOINT_URL,
)
from .transport import uri_has_query


class SparqlEndpoint(BaseModel):
    """
    Connection settings for one SPARQL service.

    * ``update_uri`` defaults to ``query_uri`` when the store serves both
      operations at the same address.
    * ``username`` / ``password`` enable HTTP auth, digest by default
      (Virtuoso's ``/sparql-auth``), basic with ``digest_auth=False``.
    * ``timeout`` is handed to :mod:`requests` unchanged.

    Instances are frozen; build a new one to point elsewhere.
    """

    model_config = ConfigDict(frozen=True)

    query_uri: str
    update_uri: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    digest_auth: bool = True
    timeout: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _default_update_uri(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("update_uri"):
            data = {**data, "update_uri": data.get("query_uri")}
        return data

    @property
    def query_uri_has_param(self) -> bool:
        """True if the query URI already has a query string (``?a=b``)."""
        return uri_has_query(self.query_uri)

    def auth(self) -> Any:
        """Return a :mod:`requests` auth object, or ``None`` without credentials."""
        if not self.username:
            return None
        if self.digest_auth:
            return HTTPDigestAuth(self.username, self.password or "")
        return HTTPBasicAuth(self.username, self.password or "")

    @classmethod
    def from_env(cls) -> "SparqlEndpoint":
        """
        Build settings from ``SPARQL_QUERY_ENDPOINT_URL`` and friends (see
        :mod:`pydsparql.settings`).
        """
        query_uri = os.getenv(ENV_SPARQL_QUERY_ENDPOINT_URL)
        if not query_uri:
            raise RuntimeError(f"{ENV_SPARQL_QUERY_ENDPOINT_URL} is not set")
        timeout = os.getenv(ENV_SPARQL_ENDPOINT_TIMEOUT)
        return cls(
            query_uri=query_uri,
            update_uri=os.getenv(ENV_SPARQL_UPDATE_ENDPOINT_URL),
            username=os.getenv(ENV_SPARQL_ENDPOINT_USER),
            password=os.getenv(ENV_SPARQL_ENDPOINT_PASSWORD),
            timeout=float(timeout) if timeout else None,
        )
