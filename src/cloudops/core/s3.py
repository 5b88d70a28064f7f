"""Amazon S3 access control and bucket logging models.

A grant pairs a grantee with a permission. Grantees form a closed set of
variants (group, canonical user, e-mail address); code that serializes them
matches on the variant and treats anything else as an error.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

S3_XML_NAMESPACE = "http://s3.amazonaws.com/doc/2006-03-01/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"


class GroupURI:
    """Well-known S3 grantee groups."""

    ALL_USERS = "http://acs.amazonaws.com/groups/global/AllUsers"
    AUTHENTICATED_USERS = "http://acs.amazonaws.com/groups/global/AuthenticatedUsers"
    LOG_DELIVERY = "http://acs.amazonaws.com/groups/s3/LogDelivery"


class Permission(str, Enum):
    """Permissions that can be granted on a bucket or object."""

    FULL_CONTROL = "FULL_CONTROL"
    READ = "READ"
    WRITE = "WRITE"
    READ_ACP = "READ_ACP"
    WRITE_ACP = "WRITE_ACP"


@dataclass(frozen=True)
class GroupGrantee:
    """A predefined group of users, identified by its URI."""

    identifier: str


@dataclass(frozen=True)
class CanonicalUserGrantee:
    """An AWS account identified by its canonical user id."""

    identifier: str
    display_name: str | None = None


@dataclass(frozen=True)
class EmailAddressGrantee:
    """An AWS account identified by the e-mail address it was registered with."""

    identifier: str


Grantee = Union[GroupGrantee, CanonicalUserGrantee, EmailAddressGrantee]


@dataclass(frozen=True)
class Grant:
    """A single permission given to a grantee."""

    grantee: Grantee
    permission: Permission


@dataclass(frozen=True)
class BucketLogging:
    """
    Server access logging configuration of a bucket.

    Attributes:
        target_bucket: Bucket that receives the log files.
        target_prefix: Key prefix for the log files.
        target_grants: Grants applied to every delivered log object,
                       kept in the order they were given.
    """

    target_bucket: str
    target_prefix: str = ""
    target_grants: tuple[Grant, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "target_grants", tuple(self.target_grants))


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> Iterable[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> str | None:
    child = _child(element, name)
    if child is None:
        return None
    return child.text or ""


def _parse_grantee(element: ET.Element) -> Grantee:
    kind = element.get(f"{{{XSI_NAMESPACE}}}type")
    if kind == "Group":
        return GroupGrantee(_child_text(element, "URI") or "")
    if kind == "CanonicalUser":
        return CanonicalUserGrantee(
            _child_text(element, "ID") or "",
            display_name=_child_text(element, "DisplayName"),
        )
    if kind == "AmazonCustomerByEmail":
        return EmailAddressGrantee(_child_text(element, "EmailAddress") or "")
    raise ValueError(f"Unsupported grantee type: {kind!r}")


def parse_bucket_logging(xml_text: str | bytes) -> BucketLogging | None:
    """
    Parse a ``BucketLoggingStatus`` document as returned by GET ``?logging``.

    Returns:
        The logging configuration, or None when logging is disabled
        (the document has no ``LoggingEnabled`` element).

    Raises:
        ValueError: If the document is not well-formed or holds an unknown
                    grantee type.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise ValueError(f"Invalid BucketLoggingStatus document: {exc}") from exc

    enabled = _child(root, "LoggingEnabled")
    if enabled is None:
        return None

    grants: list[Grant] = []
    target_grants = _child(enabled, "TargetGrants")
    if target_grants is not None:
        for grant in _children(target_grants, "Grant"):
            grantee = _child(grant, "Grantee")
            if grantee is None:
                raise ValueError("Grant without Grantee element")
            grants.append(
                Grant(
                    grantee=_parse_grantee(grantee),
                    permission=Permission(_child_text(grant, "Permission")),
                )
            )

    return BucketLogging(
        target_bucket=_child_text(enabled, "TargetBucket") or "",
        target_prefix=_child_text(enabled, "TargetPrefix") or "",
        target_grants=tuple(grants),
    )
