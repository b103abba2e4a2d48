from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, model_validator


class BufferState(BaseModel):
    """Point-in-time snapshot of an IOBuffer's cursor and bounds."""
    model_config = ConfigDict(frozen=True)

    floor: int = Field(..., ge=0)
    ceil: int = Field(..., ge=0)
    pos: int = Field(..., ge=0)
    mark: int = Field(..., ge=0)
    len: int = Field(..., ge=0)
    capacity: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "BufferState":
        if not (self.floor <= self.ceil <= self.capacity):
            raise ValueError(f"bounds [{self.floor}, {self.ceil}) not within capacity {self.capacity}")
        return self

    @property
    def remaining(self) -> int:
        return max(self.ceil - self.pos, 0)
