from __future__ import annotations


def swap_bytes(value: int, width: int) -> int:
    """
    Reverse the byte order of a 16- or 32-bit value.

    The value is laid out as a 4-byte little-endian word, reversed, then
    shifted right by (4 - width) * 8 to drop the padding a 2-byte value picks up.
    Negative inputs are taken as their 32-bit two's complement.
    """
    if width not in (2, 4):
        raise ValueError(f"swap width must be 2 or 4, got {width}")
    word = (value & 0xFFFFFFFF).to_bytes(4, "little")
    return int.from_bytes(word, "big") >> ((4 - width) * 8)


def to_signed(value: int, bits: int) -> int:
    """Interpret an unsigned value as two's complement."""
    sign = 1 << (bits - 1)
    return value - (1 << bits) if value & sign else value
