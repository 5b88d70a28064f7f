"""Grant construction utilities.

Translates ``--grant`` strings from the command line into typed
:class:`~cloudops.core.s3.Grant` objects. Accepted forms:

- ``group:<uri>=<PERMISSION>``
- ``user:<canonical id>[:<display name>]=<PERMISSION>``
- ``email:<address>=<PERMISSION>``
"""

from typing import Iterable

from cloudops.core.s3 import (
    CanonicalUserGrantee,
    EmailAddressGrantee,
    Grant,
    Grantee,
    GroupGrantee,
    Permission,
)


def _parse_permission(raw: str) -> Permission:
    try:
        return Permission[raw.strip().upper()]
    except KeyError as exc:
        allowed = ", ".join(p.value for p in Permission)
        raise ValueError(f"Invalid permission '{raw}' (expected one of {allowed})") from exc


def _parse_grantee(raw: str) -> Grantee:
    if ":" not in raw:
        raise ValueError(f"Invalid grantee '{raw}' (expected kind:identifier)")

    kind, identifier = raw.split(":", 1)
    kind = kind.strip().lower()
    if not identifier:
        raise ValueError(f"Missing identifier in grantee '{raw}'")

    if kind == "group":
        return GroupGrantee(identifier)
    if kind == "user":
        user_id, _, display_name = identifier.partition(":")
        return CanonicalUserGrantee(user_id, display_name=display_name or None)
    if kind == "email":
        return EmailAddressGrantee(identifier)
    raise ValueError(f"Unknown grantee kind '{kind}' (expected group, user or email)")


def build_grants(specs: Iterable[str]) -> list[Grant]:
    """
    Build grants from command line strings, keeping their order.

    Raises:
        ValueError: If a string does not follow ``kind:identifier=PERMISSION``.
    """
    grants: list[Grant] = []

    for spec in specs:
        if "=" not in spec:
            raise ValueError(f"Invalid grant '{spec}' (expected kind:identifier=PERMISSION)")

        grantee, permission = spec.rsplit("=", 1)
        grants.append(
            Grant(grantee=_parse_grantee(grantee), permission=_parse_permission(permission))
        )

    return grants
