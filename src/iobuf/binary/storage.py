from __future__ import annotations
import struct

from iobuf.log import log

_U16LE = struct.Struct("<H")
_U32LE = struct.Struct("<I")


class OutOfBoundsAccess(IndexError):
    """Raised when an offset falls outside the accessible range."""

    def __init__(self, offset: int, width: int, floor: int, ceil: int):
        self.offset = offset
        self.width = width
        self.floor = floor
        self.ceil = ceil
        super().__init__(f"access of {width} byte(s) at {offset} outside [{floor}, {ceil})")


class ByteStorage:
    """
    Fixed-capacity mutable byte allocation addressed by absolute offset.
    Every accessor faults with OutOfBoundsAccess when [offset, offset+width)
    leaves [0, capacity).
    """
    __slots__ = ("_data",)

    def __init__(self, data: bytearray):
        self._data = data

    @classmethod
    def allocate(cls, size: int) -> "ByteStorage":
        if size < 0:
            raise ValueError(f"storage size must be >= 0, got {size}")
        log.debug("allocating %d byte storage", size)
        return cls(bytearray(size))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "ByteStorage":
        return cls(bytearray(data))

    @classmethod
    def from_text(cls, text: str, encoding: str = "latin-1", errors: str = "strict") -> "ByteStorage":
        return cls(bytearray(text.encode(encoding, errors)))

    def capacity(self) -> int: return len(self._data)
    def to_bytes(self) -> bytes: return bytes(self._data)
    def __len__(self) -> int: return len(self._data)

    def _check(self, offset: int, width: int) -> None:
        if offset < 0 or offset + width > len(self._data):
            raise OutOfBoundsAccess(offset, width, 0, len(self._data))

    # single bytes
    def get_u8(self, offset: int) -> int:
        self._check(offset, 1)
        return self._data[offset]

    def set_u8(self, offset: int, value: int) -> None:
        self._check(offset, 1)
        self._data[offset] = value

    # little-endian words
    def get_u16le(self, offset: int) -> int:
        self._check(offset, 2)
        return _U16LE.unpack_from(self._data, offset)[0]

    def set_u16le(self, offset: int, value: int) -> None:
        self._check(offset, 2)
        _U16LE.pack_into(self._data, offset, value)

    def get_u32le(self, offset: int) -> int:
        self._check(offset, 4)
        return _U32LE.unpack_from(self._data, offset)[0]

    def set_u32le(self, offset: int, value: int) -> None:
        self._check(offset, 4)
        _U32LE.pack_into(self._data, offset, value)

    # bulk text copies
    def read_text(self, offset: int, count: int, encoding: str = "latin-1", errors: str = "strict") -> str:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        self._check(offset, count)
        return self._data[offset:offset + count].decode(encoding, errors)

    def write_text(self, offset: int, text: str, encoding: str = "latin-1", errors: str = "strict") -> int:
        """Copy the encoded text in at offset; returns the number of bytes written."""
        raw = text.encode(encoding, errors)
        self._check(offset, len(raw))
        self._data[offset:offset + len(raw)] = raw
        return len(raw)
