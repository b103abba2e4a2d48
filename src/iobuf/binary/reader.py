from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

from iobuf.binary.iobuffer import IOBuffer
from iobuf.binary.storage import ByteStorage
from iobuf.models.config import BufferConfig, DEFAULT_CONFIG
from iobuf.models.layout import FieldKind, FieldSpec


class LayoutError(ValueError):
    pass


# -----------------------------
# Loading and layouts
# -----------------------------

def load_buffer(
    source: Union[str, Path, bytes, bytearray, memoryview],
    config: BufferConfig = DEFAULT_CONFIG,
) -> IOBuffer:
    """Root IOBuffer over a copy of in-memory bytes, or of a file's contents when given a path."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        storage = ByteStorage.from_bytes(source)
    else:
        storage = ByteStorage.from_bytes(Path(source).read_bytes())
    return IOBuffer.wrap(storage, config)


def parse_field(text: str) -> FieldSpec:
    """
    Parse one "name:kind[:count]" field spec, e.g. "magic:string:4" or "size:u32be".
    """
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise LayoutError(f"bad field spec {text!r}: expected name:kind[:count]")
    name, kind = parts[0], parts[1].lower()
    try:
        fk = FieldKind(kind)
    except ValueError as e:
        raise LayoutError(f"bad field spec {text!r}: unknown kind {kind!r}") from e
    count = None
    if len(parts) == 3:
        try:
            count = int(parts[2], 0)
        except ValueError as e:
            raise LayoutError(f"bad field spec {text!r}: count {parts[2]!r} is not an integer") from e
    try:
        return FieldSpec(name=name, kind=fk, count=count)
    except ValueError as e:
        raise LayoutError(f"bad field spec {text!r}: {e}") from e


def parse_layout(specs: Iterable[str]) -> List[FieldSpec]:
    fields = [parse_field(s) for s in specs]
    seen = set()
    for f in fields:
        if f.name in seen:
            raise LayoutError(f"duplicate field name {f.name!r}")
        seen.add(f.name)
    return fields


def layout_size(fields: Sequence[FieldSpec]) -> int:
    return sum(f.width for f in fields)


# -----------------------------
# Record read
# -----------------------------

def read_field(buf: IOBuffer, field: FieldSpec) -> object:
    if field.kind is FieldKind.STRING:
        return buf.read_string(field.count)
    if field.kind is FieldKind.ARRAY:
        return buf.read_array(field.count)
    return getattr(buf, f"read_{field.kind.value}")()


def read_record(buf: IOBuffer, fields: Sequence[FieldSpec]) -> Dict[str, object]:
    """Read each field in order from the buffer's current position."""
    return {f.name: read_field(buf, f) for f in fields}
