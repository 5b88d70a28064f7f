"""Transport interface and an in-memory expectation transport.

cloudops does not ship a network client: retries, pooling and request
signing belong to whatever transport the caller plugs in. The
:class:`ExpectTransport` answers a fixed set of requests and is what the
adapters are tested against.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, Protocol

from cloudops.core.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpTransport(Protocol):
    """Interface for sending requests to a provider."""

    def send(self, request: HttpRequest) -> HttpResponse:
        """Send a request and return the provider's response."""
        ...


class UnexpectedRequestError(RuntimeError):
    """Raised by ExpectTransport for a request nobody expected."""

    def __init__(self, request: HttpRequest):
        super().__init__(
            f"Unexpected request: {request.method} {request.endpoint}"
        )
        self.request = request


class ExpectTransport:
    """
    Transport that maps expected requests to canned responses.

    Requests are compared field by field (method, endpoint, headers and
    payload). Every request sent is recorded in ``sent``.
    """

    def __init__(
        self,
        expectations: Iterable[tuple[HttpRequest, HttpResponse]] = (),
    ) -> None:
        self._expectations: list[tuple[HttpRequest, HttpResponse]] = list(
            expectations
        )
        self.sent: list[HttpRequest] = []

    def expect(self, request: HttpRequest, response: HttpResponse) -> "ExpectTransport":
        """Register one more request/response pair."""
        self._expectations.append((request, response))
        return self

    def send(self, request: HttpRequest) -> HttpResponse:
        self.sent.append(copy.deepcopy(request))
        for expected, response in self._expectations:
            if expected == request:
                logger.debug(
                    f"{request.method} {request.endpoint} -> {response.status_code}"
                )
                return response
        raise UnexpectedRequestError(request)
