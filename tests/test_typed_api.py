import pytest

from iobuf.binary.iobuffer import IOBuffer


def test_u32be_scenario():
    buf = IOBuffer.allocate(16)
    buf.write_u32be(0x0A0B0C0D)
    buf.seek(0)
    assert buf.read_u32be() == 0x0A0B0C0D
    assert buf.pos == 4


def test_u32_byte_order_on_the_wire():
    be = IOBuffer.allocate(4)
    be.write_u32be(0x01020304)
    assert be.storage.to_bytes() == bytes([0x01, 0x02, 0x03, 0x04])

    le = IOBuffer.allocate(4)
    le.write_u32le(0x01020304)
    assert le.storage.to_bytes() == bytes([0x04, 0x03, 0x02, 0x01])


def test_u16_byte_order_on_the_wire():
    buf = IOBuffer.allocate(4)
    buf.write_u16be(0x0102)
    buf.write_u16le(0x0102)
    assert buf.storage.to_bytes() == bytes([0x01, 0x02, 0x02, 0x01])


def test_signed_big_endian_bytes():
    buf = IOBuffer.allocate(6)
    buf.write_i16be(-2)
    buf.write_i32be(-2)
    assert buf.storage.to_bytes() == bytes([0xFF, 0xFE, 0xFF, 0xFF, 0xFF, 0xFE])


@pytest.mark.parametrize("write,read,values", [
    ("write_u16le", "read_u16le", [0, 1, 0x1234, 0x8000, 0xFFFF]),
    ("write_u16be", "read_u16be", [0, 1, 0x1234, 0x8000, 0xFFFF]),
    ("write_i16le", "read_i16le", [-0x8000, -1, 0, 1, 0x7FFF]),
    ("write_i16be", "read_i16be", [-0x8000, -1, 0, 1, 0x7FFF]),
    ("write_u32le", "read_u32le", [0, 1, 0xDEADBEEF, 0x80000000, 0xFFFFFFFF]),
    ("write_u32be", "read_u32be", [0, 1, 0xDEADBEEF, 0x80000000, 0xFFFFFFFF]),
    ("write_i32le", "read_i32le", [-0x80000000, -1, 0, 1, 0x7FFFFFFF]),
    ("write_i32be", "read_i32be", [-0x80000000, -1, 0, 1, 0x7FFFFFFF]),
])
def test_integer_round_trip_at_offset(write, read, values):
    buf = IOBuffer.allocate(16)
    for v in values:
        buf.seek(5)
        getattr(buf, write)(v)
        buf.seek(5)
        assert getattr(buf, read)() == v


def test_cursor_advances_by_width():
    buf = IOBuffer.allocate(16)
    buf.write_u8(1)
    assert buf.pos == 1
    buf.write_i16be(-1)
    assert buf.pos == 3
    buf.write_u32le(7)
    assert buf.pos == 7
    buf.write_string("abc")
    assert buf.pos == 10
    buf.write_array([1, 2])
    assert buf.pos == 12


def test_sequential_mixed_read():
    buf = IOBuffer.from_text("\x01\x00\x02\x00\x00\x00\x03abc")
    assert buf.read_u16le() == 1
    assert buf.read_u32be() == 0x02000000
    assert buf.read_u8() == 3
    assert buf.read_string(3) == "abc"


def test_string_scenario():
    buf = IOBuffer.from_text("AB")
    assert buf.read_string(2) == "AB"
    assert buf.pos == 2


def test_array_scenario():
    buf = IOBuffer.allocate(8)
    buf.write_array([1, 2, 3])
    buf.seek(0)
    assert buf.read_array(3) == [1, 2, 3]


def test_write_array_accepts_any_sequence():
    buf = IOBuffer.allocate(4)
    buf.write_array(bytes([9, 8]))
    buf.write_array(range(2))
    buf.seek(0)
    assert buf.read_array(4) == [9, 8, 0, 1]


def test_read_empty_runs():
    buf = IOBuffer.allocate(2)
    assert buf.read_string(0) == ""
    assert buf.read_array(0) == []
    assert buf.pos == 0


@pytest.mark.parametrize("method,value", [
    ("write_u8", 256),
    ("write_u8", -1),
    ("write_u16le", 0x10000),
    ("write_u16be", -1),
    ("write_i16le", 0x8000),
    ("write_i16be", -0x8001),
    ("write_u32le", 1 << 32),
    ("write_i32be", 1 << 31),
])
def test_write_rejects_out_of_range_values(method, value):
    buf = IOBuffer.allocate(8)
    with pytest.raises(ValueError):
        getattr(buf, method)(value)
    assert buf.pos == 0
    assert buf.storage.to_bytes() == b"\x00" * 8


def test_no_float_accessors():
    assert not any("float" in name or "f32" in name for name in dir(IOBuffer))
