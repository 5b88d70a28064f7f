"""CloudStack domain records.

CloudStack reports template and volume extraction as an asynchronous job
whose result is a :class:`TemplateExtraction`. The record mirrors the JSON
object returned by the API; lowercase wire names such as ``accountid`` are
mapped onto snake_case attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from cloudops.core.records import (
    IdentifierOrdering,
    RecordBuilder,
    decode_record,
    encode_record,
    wire_field,
)

CLOUDSTACK_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def normalize_cloudstack_date(value: datetime) -> datetime:
    """Truncate to whole seconds and read naive timestamps as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.replace(microsecond=0)


def parse_cloudstack_date(value: Any) -> datetime:
    """
    Parse a CloudStack timestamp such as ``2012-03-06T14:52:24-0800``.

    A timestamp without an offset is taken as UTC.
    """
    if isinstance(value, datetime):
        return normalize_cloudstack_date(value)
    text = str(value)
    try:
        parsed = datetime.strptime(text, CLOUDSTACK_DATE_FORMAT)
    except ValueError:
        parsed = datetime.strptime(text, CLOUDSTACK_DATE_FORMAT.removesuffix("%z"))
    return normalize_cloudstack_date(parsed)


def format_cloudstack_date(value: datetime) -> str:
    """Render a timestamp in the CloudStack wire format, always with an offset."""
    return normalize_cloudstack_date(value).strftime(CLOUDSTACK_DATE_FORMAT)


class ExtractMode(str, Enum):
    """
    How an extracted template is made available.

    Values:
        HTTP_DOWNLOAD: The template can be downloaded from ``url``.
        FTP_UPLOAD: The template is uploaded to the FTP location in ``url``.
        UNRECOGNIZED: The API returned a mode this client does not know.
    """

    HTTP_DOWNLOAD = "HTTP_DOWNLOAD"
    FTP_UPLOAD = "FTP_UPLOAD"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def _missing_(cls, value: object) -> "ExtractMode":
        return cls.UNRECOGNIZED


def _enum_value(member: Enum) -> str:
    return member.value


@dataclass(frozen=True)
class TemplateExtraction(IdentifierOrdering):
    """
    Represents one CloudStack template extraction.

    Attributes:
        id: Identifier of the extracted object.
        account_id: Account the extracted object belongs to.
        created: Time the object was created. Stored at whole-second
            precision; a naive value is taken as UTC.
        extract_id: Upload id of the extracted object.
        extract_mode: Upload or download.
        name: Name of the extracted object.
        state: State of the extracted object.
        status: Status of the extraction.
        storage_type: Type of the storage.
        upload_percentage: Percentage of the entity uploaded so far.
        url: Upload target in upload mode, download source in download mode.
        zone_id: Zone the object was extracted from.
        zone_name: Display name of that zone.

    Records sort by ``id`` only.
    """

    id: int = wire_field(default=0, decode=int)
    account_id: int = wire_field("accountid", default=0, decode=int)
    created: datetime | None = wire_field(
        decode=parse_cloudstack_date, encode=format_cloudstack_date
    )
    extract_id: int = wire_field("extractId", default=0, decode=int)
    extract_mode: ExtractMode | None = wire_field(
        "extractMode", decode=ExtractMode, encode=_enum_value
    )
    name: str | None = wire_field()
    state: str | None = wire_field()
    status: str | None = wire_field()
    storage_type: str | None = wire_field("storagetype")
    upload_percentage: int = wire_field("uploadpercentage", default=0, decode=int)
    url: str | None = wire_field()
    zone_id: int = wire_field("zoneid", default=0, decode=int)
    zone_name: str | None = wire_field("zonename")

    def __post_init__(self) -> None:
        if isinstance(self.created, datetime):
            object.__setattr__(self, "created", normalize_cloudstack_date(self.created))

    @classmethod
    def builder(cls) -> "TemplateExtractionBuilder":
        return TemplateExtractionBuilder()

    def to_builder(self) -> "TemplateExtractionBuilder":
        return TemplateExtractionBuilder().from_record(self)

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "TemplateExtraction":
        """Decode a CloudStack JSON object into a record."""
        return decode_record(cls, data)

    def to_wire(self) -> dict[str, Any]:
        """Encode this record using CloudStack field names."""
        return encode_record(self)


class TemplateExtractionBuilder(RecordBuilder[TemplateExtraction]):
    """Fluent builder for :class:`TemplateExtraction`."""

    record_type = TemplateExtraction

    def id(self, id: int) -> "TemplateExtractionBuilder":
        return self._set("id", id)

    def account_id(self, account_id: int) -> "TemplateExtractionBuilder":
        return self._set("account_id", account_id)

    def created(self, created: datetime) -> "TemplateExtractionBuilder":
        return self._set("created", created)

    def extract_id(self, extract_id: int) -> "TemplateExtractionBuilder":
        return self._set("extract_id", extract_id)

    def extract_mode(self, extract_mode: ExtractMode) -> "TemplateExtractionBuilder":
        return self._set("extract_mode", extract_mode)

    def name(self, name: str) -> "TemplateExtractionBuilder":
        return self._set("name", name)

    def state(self, state: str) -> "TemplateExtractionBuilder":
        return self._set("state", state)

    def status(self, status: str) -> "TemplateExtractionBuilder":
        return self._set("status", status)

    def storage_type(self, storage_type: str) -> "TemplateExtractionBuilder":
        return self._set("storage_type", storage_type)

    def upload_percentage(self, upload_percentage: int) -> "TemplateExtractionBuilder":
        return self._set("upload_percentage", upload_percentage)

    def url(self, url: str) -> "TemplateExtractionBuilder":
        return self._set("url", url)

    def zone_id(self, zone_id: int) -> "TemplateExtractionBuilder":
        return self._set("zone_id", zone_id)

    def zone_name(self, zone_name: str) -> "TemplateExtractionBuilder":
        return self._set("zone_name", zone_name)
