"""
Shared record codec for both roster backends.

Each health record variant maps to a type tag, an ordered tuple of numeric
payload values and an epoch-seconds capture timestamp. The flat-file store
writes that triple as one text line; the SQLite store writes it as one
health_records row (value1, value2, timestamp). Keeping the mapping in one
table stops the two backends from drifting apart.
"""
from typing import Callable, Dict, NamedTuple, Sequence, Tuple, Type, Union

from meditrack.core.datetime_utils import from_epoch, to_epoch
from meditrack.models.health_record import (
    BloodPressure,
    BloodSugar,
    HealthRecord,
    RecordType,
    Weight,
)

Number = Union[int, float]


class RecordCodec(NamedTuple):
    """How one variant maps to its stored numeric fields."""

    model: Type
    fields: Tuple[str, ...]
    parsers: Tuple[Callable[[Union[str, Number]], Number], ...]


RECORD_CODECS: Dict[RecordType, RecordCodec] = {
    RecordType.BLOOD_PRESSURE: RecordCodec(BloodPressure, ("systolic", "diastolic"), (int, int)),
    RecordType.WEIGHT: RecordCodec(Weight, ("kilograms",), (float,)),
    RecordType.BLOOD_SUGAR: RecordCodec(BloodSugar, ("mg_per_dl",), (float,)),
}


class EncodedRecord(NamedTuple):
    kind: RecordType
    values: Tuple[Number, ...]
    timestamp: int


def get_codec(tag: Union[str, RecordType]) -> RecordCodec:
    """
    Look up the codec for a stored type tag.

    Raises:
        ValueError: If the tag is not one of BP, Weight, Sugar.
    """
    try:
        return RECORD_CODECS[RecordType(tag)]
    except ValueError:
        raise ValueError(f"Unknown record type: '{tag}'") from None


def encode_record(record: HealthRecord) -> EncodedRecord:
    """Split a record into its tag, payload values and epoch timestamp."""
    codec = RECORD_CODECS[record.kind]
    values = tuple(
        parse(getattr(record, name))
        for name, parse in zip(codec.fields, codec.parsers)
    )
    return EncodedRecord(record.kind, values, to_epoch(record.captured_at))


def decode_record(
    tag: Union[str, RecordType],
    values: Sequence[Union[str, Number]],
    timestamp: Union[str, int],
) -> HealthRecord:
    """
    Rebuild a record from stored fields, restoring its timestamp verbatim.

    Args:
        tag: Stored type tag.
        values: Payload values, exactly as many as the variant has fields.
            Text or numbers are accepted.
        timestamp: Unix epoch seconds.

    Raises:
        ValueError: On an unknown tag, a wrong value count, an unparsable value
            or a timestamp outside the platform range.
    """
    codec = get_codec(tag)
    if len(values) != len(codec.fields):
        raise ValueError(
            f"Record type '{RecordType(tag).value}' expects {len(codec.fields)} "
            f"value(s), got {len(values)}"
        )
    try:
        payload = {
            name: parse(value)
            for name, parse, value in zip(codec.fields, codec.parsers, values)
        }
    except OverflowError as e:
        raise ValueError(f"Value out of range in {values!r}") from e
    try:
        captured_at = from_epoch(int(timestamp))
    except (OverflowError, OSError) as e:
        raise ValueError(f"Timestamp out of range: {timestamp}") from e
    return codec.model(captured_at=captured_at, **payload)
