from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldKind(str, Enum):
    U8 = "u8"
    U16LE = "u16le"
    U16BE = "u16be"
    I16LE = "i16le"
    I16BE = "i16be"
    U32LE = "u32le"
    U32BE = "u32be"
    I32LE = "i32le"
    I32BE = "i32be"
    STRING = "string"
    ARRAY = "array"

    @property
    def counted(self) -> bool:
        return self in (FieldKind.STRING, FieldKind.ARRAY)


# fixed byte width of each non-counted kind
KIND_WIDTH = {
    FieldKind.U8: 1,
    FieldKind.U16LE: 2, FieldKind.U16BE: 2, FieldKind.I16LE: 2, FieldKind.I16BE: 2,
    FieldKind.U32LE: 4, FieldKind.U32BE: 4, FieldKind.I32LE: 4, FieldKind.I32BE: 4,
}


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: FieldKind
    count: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _count_matches_kind(self) -> "FieldSpec":
        if self.kind.counted and self.count is None:
            raise ValueError(f"field {self.name!r}: {self.kind.value} needs a count")
        if not self.kind.counted and self.count is not None:
            raise ValueError(f"field {self.name!r}: {self.kind.value} takes no count")
        return self

    @property
    def width(self) -> int:
        return self.count if self.kind.counted else KIND_WIDTH[self.kind]
