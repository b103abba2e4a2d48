from __future__ import annotations
from typing import Iterable, List, Optional

from iobuf.binary.endian import swap_bytes, to_signed
from iobuf.binary.storage import ByteStorage, OutOfBoundsAccess
from iobuf.log import log
from iobuf.models.config import BufferConfig, DEFAULT_CONFIG
from iobuf.models.state import BufferState


class BufferClosedError(RuntimeError):
    pass


def _check_range(value: int, lo: int, hi: int, what: str) -> int:
    if not (lo <= value <= hi):
        raise ValueError(f"{what} value {value} outside [{lo}, {hi}]")
    return value


class IOBuffer:
    """
    Cursor over a window [floor, ceil) of a shared ByteStorage.

    seek/skip/derive are bounds-checked against the window. The typed
    accessors are not: they act at pos and rely on the storage to fault,
    so they may touch bytes past ceil as long as the storage holds them.
    """
    __slots__ = ("_storage", "_pos", "_floor", "_ceil", "_mark", "_len", "_config")

    def __init__(self, storage: ByteStorage, floor: int, ceil: int, config: BufferConfig = DEFAULT_CONFIG):
        cap = storage.capacity()
        # limits below are exclusive, so cap + 1 admits floor == ceil == cap
        if not (0 <= floor <= cap):
            raise OutOfBoundsAccess(floor, 0, 0, cap + 1)
        if not (floor <= ceil <= cap):
            raise OutOfBoundsAccess(ceil, 0, floor, cap + 1)
        self._storage: Optional[ByteStorage] = storage
        self._floor = floor
        self._ceil = ceil
        self._pos = floor
        self._mark = floor
        self._len = ceil - floor
        self._config = config

    # -----------------------------
    # Lifecycle
    # -----------------------------

    @classmethod
    def allocate(cls, size: int, config: BufferConfig = DEFAULT_CONFIG) -> "IOBuffer":
        return cls(ByteStorage.allocate(size), 0, size, config)

    @classmethod
    def wrap(cls, storage: ByteStorage, config: BufferConfig = DEFAULT_CONFIG) -> "IOBuffer":
        log.debug("wrapping %d byte storage", storage.capacity())
        return cls(storage, 0, storage.capacity(), config)

    @classmethod
    def from_text(cls, text: str, config: BufferConfig = DEFAULT_CONFIG) -> "IOBuffer":
        storage = ByteStorage.from_text(text, config.text_encoding, config.text_errors)
        log.debug("built %d byte storage from text", storage.capacity())
        return cls(storage, 0, storage.capacity(), config)

    def derive(self, lower: Optional[int] = None, upper: Optional[int] = None) -> "IOBuffer":
        """New view over [lower, upper) of the same storage, defaulting to [pos, ceil)."""
        storage = self._live()
        lower = self._pos if lower is None else lower
        upper = self._ceil if upper is None else upper
        self.assert_within_bounds(lower)
        if not (lower <= upper <= self._ceil):
            # upper may equal ceil
            raise OutOfBoundsAccess(upper, 0, lower, self._ceil + 1)
        log.debug("deriving view [%d, %d) from [%d, %d)", lower, upper, self._floor, self._ceil)
        return IOBuffer(storage, lower, upper, self._config)

    def close(self) -> ByteStorage:
        """Detach and return the storage; the buffer is unusable afterwards."""
        storage = self._live()
        log.debug("closing view [%d, %d)", self._floor, self._ceil)
        self._storage = None
        self._pos = self._floor = self._ceil = self._mark = self._len = 0
        self._config = None
        return storage

    def _live(self) -> ByteStorage:
        if self._storage is None:
            raise BufferClosedError("buffer has been closed")
        return self._storage

    @property
    def closed(self) -> bool: return self._storage is None

    # -----------------------------
    # Bounds model
    # -----------------------------

    @property
    def storage(self) -> ByteStorage: return self._live()
    @property
    def config(self) -> BufferConfig: self._live(); return self._config
    @property
    def pos(self) -> int: self._live(); return self._pos
    @property
    def floor(self) -> int: self._live(); return self._floor
    @property
    def ceil(self) -> int: self._live(); return self._ceil
    @property
    def saved_mark(self) -> int: self._live(); return self._mark

    def __len__(self) -> int:
        self._live()
        return self._len

    def tell(self) -> int: return self.pos

    def assert_within_bounds(self, offset: int) -> None:
        self._live()
        # offset == ceil is rejected too
        if not (self._floor <= offset < self._ceil):
            raise OutOfBoundsAccess(offset, 0, self._floor, self._ceil)

    def available_bytes(self, count: int) -> bool:
        self._live()
        return self._floor <= self._pos + count < self._ceil

    def state(self) -> BufferState:
        storage = self._live()
        return BufferState(
            floor=self._floor, ceil=self._ceil, pos=self._pos, mark=self._mark,
            len=self._len, capacity=storage.capacity(),
        )

    # -----------------------------
    # Cursor ops
    # -----------------------------

    def seek(self, offset: int) -> None:
        self.assert_within_bounds(offset)
        self._pos = offset

    def skip(self, n: int) -> None:
        self.assert_within_bounds(self._pos + n)
        self._pos += n

    def mark(self) -> None:
        self._live()
        self._mark = self._pos

    def rewind(self) -> None:
        self._live()
        self._pos = self._mark

    # -----------------------------
    # Bytes, strings, arrays
    # -----------------------------

    def read_u8(self) -> int:
        v = self._live().get_u8(self._pos)
        self._pos += 1
        return v

    def write_u8(self, value: int) -> None:
        self._live().set_u8(self._pos, _check_range(value, 0, 0xFF, "u8"))
        self._pos += 1

    def read_string(self, count: int) -> str:
        storage, cfg = self._live(), self._config
        s = storage.read_text(self._pos, count, cfg.text_encoding, cfg.text_errors)
        self._pos += count
        return s

    def write_string(self, text: str) -> None:
        storage, cfg = self._live(), self._config
        self._pos += storage.write_text(self._pos, text, cfg.text_encoding, cfg.text_errors)

    def read_array(self, count: int) -> List[int]:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self.read_u8() for _ in range(count)]

    def write_array(self, values: Iterable[int]) -> None:
        # element by element: a fault partway leaves the earlier bytes written
        for v in values:
            self.write_u8(v)

    # -----------------------------
    # 16-bit
    # -----------------------------

    def read_u16le(self) -> int:
        v = self._live().get_u16le(self._pos)
        self._pos += 2
        return v

    def write_u16le(self, value: int) -> None:
        self._live().set_u16le(self._pos, _check_range(value, 0, 0xFFFF, "u16"))
        self._pos += 2

    def read_i16le(self) -> int: return to_signed(self.read_u16le(), 16)

    def write_i16le(self, value: int) -> None:
        self.write_u16le(_check_range(value, -0x8000, 0x7FFF, "i16") & 0xFFFF)

    def read_u16be(self) -> int: return swap_bytes(self.read_u16le(), 2)

    def write_u16be(self, value: int) -> None:
        self.write_u16le(swap_bytes(_check_range(value, 0, 0xFFFF, "u16"), 2))

    def read_i16be(self) -> int: return to_signed(self.read_u16be(), 16)

    def write_i16be(self, value: int) -> None:
        self.write_u16le(swap_bytes(_check_range(value, -0x8000, 0x7FFF, "i16"), 2))

    # -----------------------------
    # 32-bit
    # -----------------------------

    def read_u32le(self) -> int:
        v = self._live().get_u32le(self._pos)
        self._pos += 4
        return v

    def write_u32le(self, value: int) -> None:
        self._live().set_u32le(self._pos, _check_range(value, 0, 0xFFFFFFFF, "u32"))
        self._pos += 4

    def read_i32le(self) -> int: return to_signed(self.read_u32le(), 32)

    def write_i32le(self, value: int) -> None:
        self.write_u32le(_check_range(value, -0x80000000, 0x7FFFFFFF, "i32") & 0xFFFFFFFF)

    def read_u32be(self) -> int: return swap_bytes(self.read_u32le(), 4)

    def write_u32be(self, value: int) -> None:
        self.write_u32le(swap_bytes(_check_range(value, 0, 0xFFFFFFFF, "u32"), 4))

    def read_i32be(self) -> int: return to_signed(self.read_u32be(), 32)

    def write_i32be(self, value: int) -> None:
        self.write_u32le(swap_bytes(_check_range(value, -0x80000000, 0x7FFFFFFF, "i32"), 4))

    def __repr__(self) -> str:
        if self._storage is None:
            return "IOBuffer(closed)"
        return f"IOBuffer(floor={self._floor}, ceil={self._ceil}, pos={self._pos}, mark={self._mark})"
