"""Minimal HTTP request and response models.

Binders and adapters only ever talk to these types. Sending them over the
network is the job of an :class:`~cloudops.core.transport.HttpTransport`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


class HttpHeaders:
    """Header names used by cloudops."""

    ACCEPT = "Accept"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_TYPE = "Content-Type"


class MediaType:
    """Media types used by cloudops."""

    APPLICATION_JSON = "application/json"
    TEXT_XML = "text/xml"


class HttpResponseError(RuntimeError):
    """Raised when a provider answers with an error status."""

    def __init__(self, status_code: int, payload: str | bytes | None = None):
        super().__init__(f"HTTP {status_code}: {_as_text(payload)}")
        self.status_code = status_code
        self.payload = payload


def _as_text(payload: str | bytes | None) -> str:
    if payload is None:
        return ""
    if isinstance(payload, bytes):
        return payload.decode("utf-8")
    return payload


@dataclass
class HttpRequest:
    """
    An outgoing request.

    Headers are multi-valued and keyed by their exact name. The request is
    mutable so binders can attach a body and its headers in place.
    """

    method: str
    endpoint: str
    headers: dict[str, list[str]] = field(default_factory=dict)
    payload: str | bytes | None = None

    def add_header(self, name: str, value: str) -> None:
        """Append a value to a header."""
        self.headers.setdefault(name, []).append(value)

    def replace_header(self, name: str, value: str) -> None:
        """Set a header to a single value, dropping previous ones."""
        self.headers[name] = [value]

    def first_header(self, name: str) -> str | None:
        """Return the first value of a header, or None if it is absent."""
        values = self.headers.get(name)
        return values[0] if values else None

    def set_payload(self, payload: str | bytes | None) -> None:
        self.payload = payload


@dataclass(frozen=True)
class HttpResponse:
    """A response received from a provider."""

    status_code: int
    payload: str | bytes | None = None
    headers: Mapping[str, list[str]] = field(default_factory=dict)

    def text(self) -> str:
        """Return the payload decoded as UTF-8 (empty when there is none)."""
        return _as_text(self.payload)

    def raise_for_status(self) -> None:
        """Raise HttpResponseError for 4xx and 5xx responses."""
        if self.status_code >= 400:
            raise HttpResponseError(self.status_code, self.payload)
