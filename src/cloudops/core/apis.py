"""Provider metadata descriptors and the registry that discovers them.

Each supported API publishes one :class:`ApiMetadata` describing what it is,
what users supply as identity and credential, and where it is documented.
Descriptors are registered under their short id, either directly or through
the ``cloudops.apis`` entry point group so third-party packages can add
providers without touching this code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from importlib.metadata import entry_points

from cloudops.core.records import RecordBuilder

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "cloudops.apis"


class ApiType(str, Enum):
    """Category of service an API exposes."""

    COMPUTE = "compute"
    BLOBSTORE = "blobstore"
    LOADBALANCER = "loadbalancer"
    TABLE = "table"
    QUEUE = "queue"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def _missing_(cls, value: object) -> "ApiType":
        return cls.UNRECOGNIZED


@dataclass(frozen=True)
class ApiMetadata:
    """
    Static description of a provider API.

    Attributes:
        id: Short identifier the API is registered under (e.g. ``vcloud``).
        type: Category of the API.
        name: Human-readable name.
        identity_name: What the user supplies as identity.
        credential_name: What the user supplies as credential, if anything.
        documentation: Link to the API documentation.
        version: API version the client targets.
        default_endpoint: Endpoint used when none is configured.
    """

    id: str | None = None
    type: ApiType | None = None
    name: str | None = None
    identity_name: str | None = None
    credential_name: str | None = None
    documentation: str | None = None
    version: str | None = None
    default_endpoint: str | None = None

    @classmethod
    def builder(cls) -> "ApiMetadataBuilder":
        return ApiMetadataBuilder()

    def to_builder(self) -> "ApiMetadataBuilder":
        """Return a builder seeded with this descriptor, for derived metadata."""
        return ApiMetadataBuilder().from_record(self)


class ApiMetadataBuilder(RecordBuilder[ApiMetadata]):
    """Fluent builder for :class:`ApiMetadata`."""

    record_type = ApiMetadata

    def id(self, id: str) -> "ApiMetadataBuilder":
        return self._set("id", id)

    def type(self, type: ApiType) -> "ApiMetadataBuilder":
        return self._set("type", type)

    def name(self, name: str) -> "ApiMetadataBuilder":
        return self._set("name", name)

    def identity_name(self, identity_name: str) -> "ApiMetadataBuilder":
        return self._set("identity_name", identity_name)

    def credential_name(self, credential_name: str | None) -> "ApiMetadataBuilder":
        return self._set("credential_name", credential_name)

    def documentation(self, documentation: str) -> "ApiMetadataBuilder":
        return self._set("documentation", documentation)

    def version(self, version: str) -> "ApiMetadataBuilder":
        return self._set("version", version)

    def default_endpoint(self, default_endpoint: str) -> "ApiMetadataBuilder":
        return self._set("default_endpoint", default_endpoint)


class UnknownApiError(KeyError):
    """Raised when no API is registered under the requested id."""

    def __str__(self) -> str:
        return f"No API registered with id '{self.args[0]}'"


class ApiRegistry:
    """
    Lookup table of API descriptors keyed by id.

    Usage:
        registry = ApiRegistry()
        registry.register(VCLOUD)
        registry.load_entry_points()
        registry.get("vcloud")
    """

    def __init__(self) -> None:
        self._apis: dict[str, ApiMetadata] = {}

    def register(self, metadata: ApiMetadata) -> None:
        """Register a descriptor, replacing any other one with the same id."""
        if not metadata.id:
            raise ValueError(f"Cannot register API metadata without an id: {metadata!r}")

        existing = self._apis.get(metadata.id)
        if existing == metadata:
            return
        if existing is not None:
            logger.warning(f"API '{metadata.id}' already registered, replacing")

        self._apis[metadata.id] = metadata
        logger.info(f"Registered API '{metadata.id}' ({metadata.name})")

    def unregister(self, api_id: str) -> ApiMetadata | None:
        """Remove and return a descriptor, or None if it was not registered."""
        metadata = self._apis.pop(api_id, None)
        if metadata is not None:
            logger.info(f"Unregistered API '{api_id}'")
        return metadata

    def find(self, api_id: str) -> ApiMetadata | None:
        return self._apis.get(api_id)

    def get(self, api_id: str) -> ApiMetadata:
        """
        Return the descriptor registered under ``api_id``.

        Raises:
            UnknownApiError: If nothing is registered under that id.
        """
        try:
            return self._apis[api_id]
        except KeyError as exc:
            raise UnknownApiError(api_id) from exc

    def all(self) -> list[ApiMetadata]:
        """Return every registered descriptor, sorted by id."""
        return [self._apis[key] for key in sorted(self._apis)]

    def of_type(self, api_type: ApiType) -> list[ApiMetadata]:
        return [m for m in self.all() if m.type == api_type]

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> int:
        """
        Register descriptors published by installed distributions.

        Each entry point must resolve to an ApiMetadata instance or to a
        callable returning one. Entry points that fail to load are logged
        and skipped.

        Returns:
            Number of entry points registered.
        """
        loaded = 0
        for ep in entry_points(group=group):
            try:
                target = ep.load()
            except (ImportError, AttributeError) as exc:
                logger.warning(f"Could not load API entry point '{ep.name}': {exc}")
                continue

            metadata = target() if callable(target) else target
            if not isinstance(metadata, ApiMetadata):
                logger.warning(
                    f"Entry point '{ep.name}' did not provide ApiMetadata, skipping"
                )
                continue

            self.register(metadata)
            loaded += 1
        return loaded

    def __contains__(self, api_id: object) -> bool:
        return api_id in self._apis

    def __len__(self) -> int:
        return len(self._apis)
