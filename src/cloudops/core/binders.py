"""Binders that turn typed payloads into request bodies.

A binder takes an outgoing :class:`HttpRequest` and a payload, serializes the
payload and attaches the body together with ``Content-Type`` and
``Content-Length``. Binders hold no state and can be shared freely.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Protocol

from cloudops.core.http import HttpHeaders, HttpRequest, MediaType
from cloudops.core.s3 import (
    S3_XML_NAMESPACE,
    XSI_NAMESPACE,
    BucketLogging,
    CanonicalUserGrantee,
    EmailAddressGrantee,
    GroupGrantee,
)

logger = logging.getLogger(__name__)


class BindingError(RuntimeError):
    """Raised when a payload cannot be serialized into a request body."""

    def __init__(self, payload: Any, cause: Exception):
        super().__init__(f"error transforming {payload!r}: {cause}")
        self.payload = payload
        self.cause = cause


class Binder(Protocol):
    """Interface for attaching a serialized payload to a request."""

    def bind_to_request(self, request: HttpRequest, payload: Any) -> HttpRequest:
        """Serialize the payload into the request and return the request."""
        ...


def attach_xml_payload(request: HttpRequest, body: str) -> HttpRequest:
    """Set an XML body plus its content type and UTF-8 byte length."""
    length = len(body.encode("utf-8"))
    request.replace_header(HttpHeaders.CONTENT_TYPE, MediaType.TEXT_XML)
    request.replace_header(HttpHeaders.CONTENT_LENGTH, str(length))
    request.set_payload(body)
    logger.debug(f"Bound {length} byte XML body to {request.method} {request.endpoint}")
    return request


def _text_element(parent: ET.Element, tag: str, text: Any) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def _serialize(root: ET.Element) -> str:
    # ElementTree writes empty elements as "<Tag />"; S3 documents here use "<Tag/>".
    # Text and attribute values have ">" escaped, so only element ends match.
    return ET.tostring(root, encoding="unicode").replace(" />", "/>")


class BindBucketLoggingToXmlPayload:
    """Serialize a :class:`BucketLogging` into a ``BucketLoggingStatus`` document."""

    def bind_to_request(self, request: HttpRequest, payload: BucketLogging) -> HttpRequest:
        try:
            body = _serialize(self.generate_document(payload))
        except RuntimeError:
            raise
        except Exception as exc:
            raise BindingError(payload, exc) from exc
        return attach_xml_payload(request, body)

    def generate_document(self, bucket_logging: BucketLogging) -> ET.Element:
        """
        Build the XML tree for a logging configuration.

        Grants are emitted in input order, one ``Grant`` element each.

        Raises:
            TypeError: If a grant holds a grantee of an unknown type.
        """
        root = ET.Element("BucketLoggingStatus", {"xmlns": S3_XML_NAMESPACE})
        enabled = ET.SubElement(root, "LoggingEnabled")
        _text_element(enabled, "TargetBucket", bucket_logging.target_bucket)
        _text_element(enabled, "TargetPrefix", bucket_logging.target_prefix)

        grants = ET.SubElement(enabled, "TargetGrants")
        for grant in bucket_logging.target_grants:
            grant_element = ET.SubElement(grants, "Grant")
            grantee_element = ET.SubElement(
                grant_element, "Grantee", {"xmlns:xsi": XSI_NAMESPACE}
            )
            self._bind_grantee(grantee_element, grant.grantee)
            _text_element(grant_element, "Permission", grant.permission.value)
        return root

    @staticmethod
    def _bind_grantee(element: ET.Element, grantee: Any) -> None:
        match grantee:
            case GroupGrantee(identifier=uri):
                element.set("xsi:type", "Group")
                _text_element(element, "URI", uri)
            case CanonicalUserGrantee(identifier=user_id, display_name=display_name):
                element.set("xsi:type", "CanonicalUser")
                _text_element(element, "ID", user_id)
                if display_name is not None:
                    _text_element(element, "DisplayName", display_name)
            case EmailAddressGrantee(identifier=email):
                element.set("xsi:type", "AmazonCustomerByEmail")
                _text_element(element, "EmailAddress", email)
            case _:
                raise TypeError(f"Unsupported grantee type: {type(grantee).__name__}")


NO_BUCKET_LOGGING_XML = f'<BucketLoggingStatus xmlns="{S3_XML_NAMESPACE}"/>'


class BindNoBucketLoggingToXmlPayload:
    """Attach the fixed document that disables bucket logging; the payload is ignored."""

    def bind_to_request(self, request: HttpRequest, payload: Any = None) -> HttpRequest:
        return attach_xml_payload(request, NO_BUCKET_LOGGING_XML)
