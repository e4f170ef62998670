from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Sequence, Union

from .codecs.bytebuffer import ByteBuffer
from bytebuf.models.common import FieldKind, Vector, Rotator
from bytebuf.models.field import PayloadField
from bytebuf.models.payload import Payload

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]
Layout = Union[str, Sequence[Union[FieldKind, str]]]


class ParseError(ValueError):
    pass


# -----------------------------
# Helpers
# -----------------------------

def _load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def parse_layout(layout: Layout) -> List[FieldKind]:
    """
    Turn "int32, string,VECTOR" (or a sequence of names / FieldKind) into a
    list of FieldKind. Unknown names raise ParseError.
    """
    items = layout.split(",") if isinstance(layout, str) else list(layout)
    kinds: List[FieldKind] = []
    for item in items:
        if isinstance(item, FieldKind):
            kinds.append(item)
            continue
        name = str(item).strip().lower()
        if not name:
            continue
        try:
            kinds.append(FieldKind(name))
        except ValueError:
            raise ParseError(f"unknown field kind {item!r}") from None
    return kinds


_READERS: Dict[FieldKind, Callable[[ByteBuffer], object]] = {
    FieldKind.INT32: ByteBuffer.get_int32,
    FieldKind.UINT32: ByteBuffer.get_uint32,
    FieldKind.FLOAT: ByteBuffer.get_float,
    FieldKind.BYTE: ByteBuffer.get_byte,
    FieldKind.BOOL: ByteBuffer.get_bool,
    FieldKind.STRING: ByteBuffer.get_string,
    FieldKind.VECTOR: lambda buf: Vector.from_tuple(buf.get_vector()),
    FieldKind.ROTATOR: lambda buf: Rotator.from_tuple(buf.get_rotator()),
}


def read_field(buf: ByteBuffer, kind: FieldKind) -> PayloadField:
    offset = buf.tell()
    value = _READERS[kind](buf)
    return PayloadField(kind=kind, value=value, offset=offset)


# -----------------------------
# Streaming iterator
# -----------------------------

def iter_fields(data: BytesLike, layout: Layout) -> Iterator[PayloadField]:
    """
    Decode fields one at a time in layout order.
    BufferUnderflow / InvalidEncoding propagate from the failing field.
    """
    kinds = parse_layout(layout)
    buf = ByteBuffer(_load_bytes(data))
    for kind in kinds:
        yield read_field(buf, kind)


# -----------------------------
# Full decode
# -----------------------------

def decode_payload(data: BytesLike, layout: Layout, *, strict: bool = False) -> Payload:
    """
    Decode a whole payload. With strict=True any bytes left after the last
    field are an error; otherwise they are reported and ignored.
    """
    kinds = parse_layout(layout)
    buf = ByteBuffer(_load_bytes(data))
    fields = [read_field(buf, kind) for kind in kinds]

    left = buf.remaining()
    if left:
        if strict:
            raise ParseError(f"{left} trailing bytes after last field at {buf.tell()}")
        logger.warning("ignoring %d trailing bytes at offset %d", left, buf.tell())
    logger.debug("decoded %d fields from %d bytes", len(fields), len(buf))
    return Payload(fields=fields)
