from __future__ import annotations
import struct
from typing import Any, Optional
from pydantic import BaseModel, Field, field_serializer, model_validator
from .common import FieldKind, Vector, Rotator, float_from_json, float_to_json

_INT_RANGES = {
    FieldKind.INT32: (-(2**31), 2**31 - 1),
    FieldKind.UINT32: (0, 2**32 - 1),
    FieldKind.BYTE: (0, 0xFF),
}


def _coerce_triple(cls, value: Any):
    if isinstance(value, cls):
        return value
    if isinstance(value, (list, tuple)):
        return cls.from_tuple(value)
    if isinstance(value, BaseModel):
        value = value.model_dump()
    return cls.model_validate(value)


class PayloadField(BaseModel):
    kind: FieldKind
    value: Any
    offset: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_value(self) -> "PayloadField":
        k, v = self.kind, self.value
        if k in _INT_RANGES:
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"{k.value} expects an integer, got {v!r}")
            lo, hi = _INT_RANGES[k]
            if not (lo <= v <= hi):
                raise ValueError(f"{k.value} out of range [{lo}, {hi}]: {v}")
        elif k is FieldKind.FLOAT:
            v = float_from_json(v)
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise ValueError(f"float expects a number, got {v!r}")
            try:
                struct.pack("<f", v)
            except OverflowError:
                raise ValueError(f"float out of single-precision range: {v!r}") from None
            self.value = float(v)
        elif k is FieldKind.BOOL:
            if not isinstance(v, bool):
                raise ValueError(f"bool expects true/false, got {v!r}")
        elif k is FieldKind.STRING:
            if not isinstance(v, str):
                raise ValueError(f"string expects text, got {v!r}")
        elif k is FieldKind.VECTOR:
            self.value = _coerce_triple(Vector, v)
        elif k is FieldKind.ROTATOR:
            self.value = _coerce_triple(Rotator, v)
        return self

    @field_serializer("value", when_used="json")
    def _value_out(self, v: Any):
        if isinstance(v, float):
            return float_to_json(v)
        if isinstance(v, BaseModel):
            return v.model_dump(mode="json")
        return v
