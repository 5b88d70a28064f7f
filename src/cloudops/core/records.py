"""Building blocks for immutable domain records.

Every provider record in cloudops is a frozen dataclass paired with a
fluent builder. Fields may be exposed on the wire under a different name
than the Python attribute (for example ``account_id`` travels as
``accountid``); that mapping is declared once per field with
:func:`wire_field` and applied symmetrically by :func:`encode_record` and
:func:`decode_record`.
"""

from __future__ import annotations

from dataclasses import Field, field, fields
from typing import Any, Callable, Generic, Mapping, TypeVar

WIRE_NAME = "wire_name"
DECODE = "decode"
ENCODE = "encode"

R = TypeVar("R")
B = TypeVar("B", bound="RecordBuilder")


def wire_field(
    wire_name: str | None = None,
    *,
    default: Any = None,
    decode: Callable[[Any], Any] | None = None,
    encode: Callable[[Any], Any] | None = None,
) -> Any:
    """
    Declare a record field together with its wire representation.

    Args:
        wire_name: Name used in serialized documents. Defaults to the
                   attribute name.
        default: Zero value used when the field is never set.
        decode: Optional converter applied to raw wire values.
        encode: Optional converter applied before serialization.
    """
    metadata: dict[str, Any] = {}
    if wire_name:
        metadata[WIRE_NAME] = wire_name
    if decode:
        metadata[DECODE] = decode
    if encode:
        metadata[ENCODE] = encode
    return field(default=default, metadata=metadata)


def wire_name_of(f: Field) -> str:
    """Return the serialized name of a dataclass field."""
    return f.metadata.get(WIRE_NAME, f.name)


def encode_record(record: Any) -> dict[str, Any]:
    """
    Serialize a record into a plain mapping keyed by wire names.

    Fields holding None are left out, mirroring what the provider APIs send.
    """
    document: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if value is None:
            continue
        encode = f.metadata.get(ENCODE)
        document[wire_name_of(f)] = encode(value) if encode else value
    return document


def decode_record(record_type: type[R], data: Mapping[str, Any]) -> R:
    """
    Build a record from a wire mapping.

    Unknown keys are ignored and missing keys keep the field's zero value,
    so partial documents decode without error.

    Args:
        record_type: Dataclass type to instantiate.
        data: Decoded JSON object (or any mapping) keyed by wire names.

    Returns:
        A new instance of ``record_type``.
    """
    values: dict[str, Any] = {}
    for f in fields(record_type):
        key = wire_name_of(f)
        raw = data.get(key)
        if raw is None:
            continue
        decode = f.metadata.get(DECODE)
        values[f.name] = decode(raw) if decode else raw
    return record_type(**values)


class IdentifierOrdering:
    """
    Mixin that orders records solely by their ``id`` attribute.

    Records with the same id compare neither less nor greater than each
    other, whatever their remaining fields hold.
    """

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id < other.id  # type: ignore[attr-defined]

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id <= other.id  # type: ignore[attr-defined]

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id > other.id  # type: ignore[attr-defined]

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id >= other.id  # type: ignore[attr-defined]


class RecordBuilder(Generic[R]):
    """
    Mutable accumulator that produces immutable records.

    Subclasses set ``record_type`` and expose one chaining method per field.
    Setters never validate; unset fields fall back to the record defaults.
    A builder is meant to stay with the code that fills it.
    """

    record_type: type[R]

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def _set(self: B, name: str, value: Any) -> B:
        self._values[name] = value
        return self

    def from_record(self: B, record: R) -> B:
        """Seed the builder with every field of an existing record."""
        for f in fields(record):  # type: ignore[arg-type]
            self._values[f.name] = getattr(record, f.name)
        return self

    def build(self) -> R:
        """Snapshot the accumulated values into a new record."""
        return self.record_type(**self._values)
