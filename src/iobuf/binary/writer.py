from __future__ import annotations
from typing import Mapping, Sequence

from iobuf.binary.iobuffer import IOBuffer
from iobuf.binary.reader import layout_size
from iobuf.models.config import BufferConfig, DEFAULT_CONFIG
from iobuf.models.layout import FieldKind, FieldSpec


def write_field(buf: IOBuffer, field: FieldSpec, value) -> None:
    if field.kind is FieldKind.STRING:
        if len(value) != field.count:
            raise ValueError(f"field {field.name!r}: expected {field.count} chars, got {len(value)}")
        buf.write_string(value)
    elif field.kind is FieldKind.ARRAY:
        value = list(value)
        if len(value) != field.count:
            raise ValueError(f"field {field.name!r}: expected {field.count} items, got {len(value)}")
        buf.write_array(value)
    else:
        getattr(buf, f"write_{field.kind.value}")(value)


def write_record(buf: IOBuffer, fields: Sequence[FieldSpec], values: Mapping[str, object]) -> None:
    """Write each field in order at the buffer's current position."""
    for f in fields:
        write_field(buf, f, values[f.name])


def pack_record(
    fields: Sequence[FieldSpec],
    values: Mapping[str, object],
    config: BufferConfig = DEFAULT_CONFIG,
) -> bytes:
    """Serialize a record into a freshly allocated buffer and return its bytes."""
    buf = IOBuffer.allocate(layout_size(fields), config)
    write_record(buf, fields, values)
    return buf.close().to_bytes()
