from __future__ import annotations

import logging

from .codecs.bytebuffer import ByteBuffer
from ..models.common import FieldKind
from ..models.field import PayloadField
from ..models.payload import Payload

logger = logging.getLogger(__name__)


def write_field(buf: ByteBuffer, field: PayloadField) -> ByteBuffer:
    k, v = field.kind, field.value
    if k is FieldKind.INT32:
        return buf.put_int32(v)
    if k is FieldKind.UINT32:
        return buf.put_uint32(v)
    if k is FieldKind.FLOAT:
        return buf.put_float(v)
    if k is FieldKind.BYTE:
        return buf.put_byte(v)
    if k is FieldKind.BOOL:
        return buf.put_bool(v)
    if k is FieldKind.STRING:
        return buf.put_string(v)
    if k is FieldKind.VECTOR:
        return buf.put_vector(*v.as_tuple())
    if k is FieldKind.ROTATOR:
        return buf.put_rotator(*v.as_tuple())
    raise ValueError(f"unsupported field kind {k!r}")


def encode_payload(payload: Payload) -> bytes:
    """Write every field in order; offsets on the input fields are ignored."""
    buf = ByteBuffer()
    for field in payload.fields:
        write_field(buf, field)
    logger.debug("encoded %d fields into %d bytes", len(payload.fields), len(buf))
    return buf.get_buffer()
