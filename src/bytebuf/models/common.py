from __future__ import annotations
import math
from enum import Enum
from typing import Any, Sequence
from pydantic import BaseModel, field_serializer, field_validator

# JSON has no NaN/Infinity; these spellings stand in for them
_SPECIAL_FLOATS = {"nan": math.nan, "inf": math.inf, "+inf": math.inf, "-inf": -math.inf}


def float_to_json(v: float) -> float | str:
    if math.isnan(v):
        return "nan"
    if math.isinf(v):
        return "inf" if v > 0 else "-inf"
    return v


def float_from_json(v: Any) -> Any:
    if isinstance(v, str) and v.strip().lower() in _SPECIAL_FLOATS:
        return _SPECIAL_FLOATS[v.strip().lower()]
    return v


class FieldKind(str, Enum):
    INT32 = "int32"
    UINT32 = "uint32"
    FLOAT = "float"
    BYTE = "byte"
    BOOL = "bool"
    STRING = "string"
    VECTOR = "vector"
    ROTATOR = "rotator"


class _Triple(BaseModel):
    x: float
    y: float
    z: float

    @field_validator("x", "y", "z", mode="before")
    @classmethod
    def _special_in(cls, v):
        return float_from_json(v)

    @field_serializer("x", "y", "z", when_used="json")
    def _special_out(self, v: float):
        return float_to_json(v)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_tuple(cls, xyz: Sequence[float]):
        if len(xyz) != 3:
            raise ValueError(f"expected 3 components, got {len(xyz)}")
        x, y, z = xyz
        return cls(x=x, y=y, z=z)


class Vector(_Triple):
    """Position / direction in world units."""


class Rotator(_Triple):
    """Orientation; same wire layout as Vector."""
