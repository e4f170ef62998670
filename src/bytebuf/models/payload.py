from __future__ import annotations
from pathlib import Path
from typing import List, Sequence, Union
from pydantic import BaseModel, Field
from .common import FieldKind
from .field import PayloadField


class Payload(BaseModel):
    fields: List[PayloadField] = Field(default_factory=list)

    # Convenience constructors delegating to the binary layer
    @classmethod
    def from_binary(
        cls,
        data: bytes | bytearray | str | Path,
        layout: Union[str, Sequence[FieldKind | str]],
        *,
        strict: bool = False,
    ) -> "Payload":
        from ..binary.reader import decode_payload
        payload = decode_payload(data, layout, strict=strict)
        return payload if type(payload) is cls else cls(fields=payload.fields)

    @classmethod
    def from_hex(cls, text: str, layout: Union[str, Sequence[FieldKind | str]], *, strict: bool = False) -> "Payload":
        return cls.from_binary(bytes.fromhex(text), layout, strict=strict)

    def to_binary(self) -> bytes:
        from ..binary.writer import encode_payload
        return encode_payload(self)

    def to_hex(self) -> str:
        return self.to_binary().hex()

    def layout(self) -> List[FieldKind]:
        return [f.kind for f in self.fields]
