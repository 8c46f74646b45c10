"""
pydsparql.http
==============

HTTP transport used by the protocol client.

:class:`HttpClient` is a small stateful request builder over a
:class:`requests.Session`: the dispatcher resets it, sets method, URI,
headers and raw body, then calls :meth:`HttpClient.execute`. Timeouts
and authentication belong to the caller, who configures them when
constructing the client. Redirects, retries and TLS are whatever
:mod:`requests` does by default.
"""

from typing import Any, Dict, Optional

import requests
from loguru import logger
from requests.structures import CaseInsensitiveDict


class HttpResponse:
    """Read-only view over a completed HTTP exchange."""

    def __init__(
        self,
        status: int,
        headers: Optional[Dict[str, str]] = None,
        content: bytes = b"",
        encoding: Optional[str] = None,
    ):
        self.status = status
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(headers or {})
        self.content = content
        self._encoding = encoding or "utf-8"

    @classmethod
    def from_requests(cls, response: requests.Response) -> "HttpResponse":
        return cls(
            status=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            encoding=response.encoding,
        )

    @property
    def body(self) -> str:
        return self.content.decode(self._encoding, errors="replace")

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def is_successful(self) -> bool:
        """True for 2xx and 3xx statuses."""
        return 200 <= self.status < 400

    def is_redirect(self) -> bool:
        return 300 <= self.status < 400

    def __repr__(self) -> str:
        return (
            f"HttpResponse(status={self.status}, "
            f"content_type={self.get_header('Content-Type')!r})"
        )


class HttpClient:
    """
    Stateful request builder over :class:`requests.Session`.

    Parameters
    ----------
    session:
        Session to send requests with; a new one is created if omitted.
    timeout:
        Passed through to :meth:`requests.Session.request`.
    auth:
        Any :mod:`requests` auth object (e.g. ``HTTPDigestAuth``).
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        auth: Any = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.auth = auth
        self.reset_parameters()

    def reset_parameters(self) -> None:
        self.method = "GET"
        self.uri: Optional[str] = None
        self.raw_data: Optional[str] = None
        self.headers: Dict[str, str] = {}

    def set_method(self, method: str) -> None:
        self.method = method.upper()

    def set_uri(self, uri: str) -> None:
        self.uri = uri

    def set_raw_data(self, data: Optional[str]) -> None:
        self.raw_data = data

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def execute(self) -> HttpResponse:
        """Send the configured request and wrap the result."""
        if not self.uri:
            raise ValueError("No URI set on HTTP client")
        logger.debug(f"{self.method} {self.uri}")
        data = self.raw_data.encode("utf-8") if self.raw_data is not None else None
        response = self.session.request(
            self.method,
            self.uri,
            data=data,
            headers=self.headers,
            timeout=self.timeout,
            auth=self.auth,
        )
        return HttpResponse.from_requests(response)

    def close(self) -> None:
        self.session.close()

