from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path
from pydantic import ValidationError
from .binary.codecs.bytebuffer import ByteBuffer
from .models.field import PayloadField
from .models.payload import Payload

logger = logging.getLogger(__name__)


def cmd_hex(args):
    buf = ByteBuffer(Path(args.input).read_bytes())
    print(buf.to_hex())
    return 0


def cmd_decode(args):
    if args.hex_string:
        payload = Payload.from_hex(args.input, args.layout, strict=args.strict)
    else:
        payload = Payload.from_binary(args.input, args.layout, strict=args.strict)
    print(json.dumps(payload.model_dump(mode="json")["fields"], indent=2, allow_nan=False))
    return 0


def cmd_encode(args):
    with open(args.input, "r", encoding="utf-8") as src:
        raw = json.load(src)
    if not isinstance(raw, list):
        raise ValueError("encode input must be a JSON list of {kind, value} objects")
    payload = Payload(fields=[PayloadField.model_validate(item) for item in raw])
    if args.hex:
        with open(args.output, "w", encoding="utf-8") as out:
            out.write(payload.to_hex() + "\n")
    else:
        with open(args.output, "wb") as out:
            out.write(payload.to_binary())
    logger.info("wrote %d fields to %s", len(payload.fields), args.output)
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="bytebuf", description="Little-endian byte buffer utilities")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("hex", help="print a file as lowercase hex")
    sp.add_argument("input")
    sp.set_defaults(func=cmd_hex)

    sp = sub.add_parser("decode", help="decode a payload with a field layout and print JSON")
    sp.add_argument("input", help="Path to binary payload (or hex text with --hex-string)")
    sp.add_argument("--layout", required=True, help="Comma-separated kinds, e.g. int32,string,vector")
    sp.add_argument("--strict", action="store_true", help="Fail on trailing bytes")
    sp.add_argument("--hex-string", action="store_true", help="Treat INPUT as a hex string")
    sp.set_defaults(func=cmd_decode)

    sp = sub.add_parser("encode", help="encode a JSON field list to binary")
    sp.add_argument("input", help="JSON file: [{\"kind\": \"int32\", \"value\": 1}, ...]")
    sp.add_argument("output")
    sp.add_argument("--hex", action="store_true", help="Write hex text instead of raw bytes")
    sp.set_defaults(func=cmd_encode)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(ns, "func"):
        p.print_help()
        return 2
    try:
        return ns.func(ns)
    except (ValueError, OSError) as e:
        # ValidationError, ByteBufferError and ParseError are all ValueErrors
        logger.debug("command %s failed", ns.cmd, exc_info=True)
        msg = str(e) if not isinstance(e, ValidationError) else e.errors()[0]["msg"]
        print(f"error: {msg}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
