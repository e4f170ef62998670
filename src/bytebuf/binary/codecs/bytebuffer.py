from __future__ import annotations
import struct

BytesLike = bytes | bytearray | memoryview

# all multi-byte fields are little-endian
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_F32 = struct.Struct("<f")


class ByteBufferError(ValueError):
    pass


class BufferUnderflow(ByteBufferError):
    pass


class InvalidEncoding(ByteBufferError):
    pass


class ByteBuffer:
    """
    Growable byte buffer with a single read/write cursor.

    Writes grow storage to fit and advance the cursor; reads are bounds-checked
    and leave the cursor untouched when they fail. Every put_* returns the
    buffer so writes can be chained:

        ByteBuffer().put_int32(7).put_string("hi").to_hex()
    """
    __slots__ = ("_buf", "_pos")

    def __init__(self, data: BytesLike | None = None):
        self._buf = bytearray(data) if data is not None else bytearray()
        self._pos = 0

    def __len__(self) -> int: return len(self._buf)
    def __bytes__(self) -> bytes: return bytes(self._buf)
    def __repr__(self) -> str: return f"ByteBuffer(len={len(self._buf)}, pos={self._pos})"

    def copy(self) -> "ByteBuffer":
        out = ByteBuffer(self._buf)
        out._pos = self._pos
        return out

    __copy__ = copy

    # cursor
    def tell(self) -> int: return self._pos
    def remaining(self) -> int: return len(self._buf) - self._pos

    def seek(self, pos: int) -> "ByteBuffer":
        if not (0 <= pos <= len(self._buf)): raise ValueError(f"seek out of bounds: {pos}")
        self._pos = pos
        return self

    def rewind(self) -> "ByteBuffer": return self.seek(0)

    def ensure_capacity(self, n: int) -> None:
        """Grow storage to exactly cursor + n bytes (zero-filled) if it is shorter."""
        need = self._pos + n
        if need > len(self._buf):
            self._buf.extend(bytes(need - len(self._buf)))

    # raw access
    def _write(self, raw: bytes) -> "ByteBuffer":
        n = len(raw)
        self.ensure_capacity(n)
        self._buf[self._pos:self._pos + n] = raw
        self._pos += n
        return self

    def _check(self, n: int) -> None:
        if n < 0 or self._pos + n > len(self._buf):
            raise BufferUnderflow(f"underflow: need {n} at {self._pos}, have {self.remaining()}")

    def _take(self, n: int) -> bytes:
        self._check(n)
        out = bytes(self._buf[self._pos:self._pos + n])
        self._pos += n
        return out

    def peek(self, n: int) -> bytes:
        self._check(n)
        return bytes(self._buf[self._pos:self._pos + n])

    def _pack(self, st: struct.Struct, value, kind: str, types=(int,)) -> "ByteBuffer":
        # pack before touching storage so a bad value changes nothing
        if not isinstance(value, types):
            raise TypeError(f"{kind} expects {' or '.join(t.__name__ for t in types)}, got {value!r}")
        try:
            raw = st.pack(value)
        except (struct.error, OverflowError) as e:
            raise ValueError(f"{kind} out of range: {value!r}") from e
        return self._write(raw)

    # scalars
    def put_int32(self, value: int) -> "ByteBuffer": return self._pack(_I32, value, "int32")
    def put_uint32(self, value: int) -> "ByteBuffer": return self._pack(_U32, value, "uint32")
    def put_float(self, value: float) -> "ByteBuffer": return self._pack(_F32, value, "float", (int, float))

    def put_byte(self, value: int) -> "ByteBuffer":
        if not isinstance(value, int): raise TypeError(f"byte expects int, got {value!r}")
        if not (0 <= value <= 0xFF): raise ValueError(f"byte out of range: {value!r}")
        return self._write(bytes((value,)))

    def put_bool(self, value: bool) -> "ByteBuffer": return self.put_byte(1 if value else 0)

    def get_int32(self) -> int: return _I32.unpack(self._take(4))[0]
    def get_uint32(self) -> int: return _U32.unpack(self._take(4))[0]
    def get_float(self) -> float: return _F32.unpack(self._take(4))[0]
    def get_byte(self) -> int: return self._take(1)[0]
    def get_bool(self) -> bool: return self.get_byte() != 0

    # strings: i32 byte count + raw UTF-8
    def put_string(self, value: str) -> "ByteBuffer":
        raw = value.encode("utf-8")
        return self._pack(_I32, len(raw), "string length")._write(raw)

    def get_string(self) -> str:
        start = self._pos
        try:
            n = self.get_int32()
            raw = self._take(n)
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            self._pos = start
            raise InvalidEncoding(f"invalid UTF-8 string at {start}: {e.reason}") from e
        except BufferUnderflow:
            self._pos = start
            raise

    # composites: three f32 in x, y, z order
    def _put_triple(self, x: float, y: float, z: float) -> "ByteBuffer":
        for c in (x, y, z):
            if not isinstance(c, (int, float)): raise TypeError(f"float expects int or float, got {c!r}")
        try:
            raw = _F32.pack(x) + _F32.pack(y) + _F32.pack(z)
        except (struct.error, OverflowError) as e:
            raise ValueError(f"float triple out of range: {(x, y, z)!r}") from e
        return self._write(raw)

    def _get_triple(self) -> tuple[float, float, float]:
        start = self._pos
        try:
            return (self.get_float(), self.get_float(), self.get_float())
        except BufferUnderflow:
            self._pos = start
            raise

    def put_vector(self, x: float, y: float, z: float) -> "ByteBuffer": return self._put_triple(x, y, z)
    def get_vector(self) -> tuple[float, float, float]: return self._get_triple()

    def put_rotator(self, x: float, y: float, z: float) -> "ByteBuffer": return self._put_triple(x, y, z)
    def get_rotator(self) -> tuple[float, float, float]: return self._get_triple()

    # inspection
    def get_buffer(self) -> bytes:
        """Whole storage from offset 0, regardless of the cursor."""
        return bytes(self._buf)

    def to_hex(self) -> str: return self._buf.hex()
