from __future__ import annotations

from cloudops.core.binders import (
    BindBucketLoggingToXmlPayload,
    BindNoBucketLoggingToXmlPayload,
)
from cloudops.core.http import HttpRequest
from cloudops.core.s3 import BucketLogging, parse_bucket_logging
from cloudops.core.transport import HttpTransport


class S3LoggingAdapter:
    """Adapter around the S3 bucket logging sub-resource."""

    def __init__(
        self,
        transport: HttpTransport,
        endpoint: str = "https://s3.amazonaws.com",
    ) -> None:
        self.transport = transport
        self.endpoint = endpoint.rstrip("/")
        self._enable_binder = BindBucketLoggingToXmlPayload()
        self._disable_binder = BindNoBucketLoggingToXmlPayload()

    def _logging_url(self, bucket: str) -> str:
        return f"{self.endpoint}/{bucket}?logging"

    def enable_bucket_logging(self, bucket: str, logging: BucketLogging) -> None:
        """Turn on access logging for a bucket."""
        request = HttpRequest(method="PUT", endpoint=self._logging_url(bucket))
        self._enable_binder.bind_to_request(request, logging)
        self.transport.send(request).raise_for_status()

    def disable_bucket_logging(self, bucket: str) -> None:
        """Turn off access logging for a bucket."""
        request = HttpRequest(method="PUT", endpoint=self._logging_url(bucket))
        self._disable_binder.bind_to_request(request)
        self.transport.send(request).raise_for_status()

    def get_bucket_logging(self, bucket: str) -> BucketLogging | None:
        """Return the logging configuration of a bucket, or None if disabled."""
        request = HttpRequest(method="GET", endpoint=self._logging_url(bucket))
        response = self.transport.send(request)
        response.raise_for_status()
        return parse_bucket_logging(response.text())
