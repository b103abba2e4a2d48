from __future__ import annotations
import codecs
from pydantic import BaseModel, ConfigDict, field_validator

ONE_PER_CHAR_HANDLERS = ("strict", "replace", "surrogateescape")


class BufferConfig(BaseModel):
    model_config = ConfigDict(frozen=True, validate_default=True)

    text_encoding: str = "latin-1"
    text_errors: str = "strict"

    @field_validator("text_encoding")
    @classmethod
    def _single_byte_encoding(cls, v: str) -> str:
        try:
            info = codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown text encoding {v!r}") from e
        # string accessors move one byte per character
        one_per_byte = len(bytes(range(256)).decode(info.name, "replace")) == 256
        if not one_per_byte or len("A\xe9".encode(info.name, "replace")) != 2:
            raise ValueError(f"text encoding {v!r} is not a single-byte encoding")
        return info.name

    @field_validator("text_errors")
    @classmethod
    def _length_preserving_handler(cls, v: str) -> str:
        try:
            codecs.lookup_error(v)
        except LookupError as e:
            raise ValueError(f"unknown error handler {v!r}") from e
        # ignore, xmlcharrefreplace and friends change the encoded length
        if v not in ONE_PER_CHAR_HANDLERS:
            raise ValueError(f"error handler {v!r} does not keep one byte per character")
        return v


DEFAULT_CONFIG = BufferConfig()
