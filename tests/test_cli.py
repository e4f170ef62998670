import json
import math

from bytebuf.binary.codecs.bytebuffer import ByteBuffer
from bytebuf.cli import main


def test_hex_command(tmp_path, capsys):
    f = tmp_path / "p.bin"
    f.write_bytes(ByteBuffer().put_int32(12345).get_buffer())
    assert main(["hex", str(f)]) == 0
    assert capsys.readouterr().out.strip() == "39300000"


def test_decode_hex_string(capsys):
    data = ByteBuffer().put_string("hi").put_vector(1.0, 2.0, 3.0).to_hex()
    assert main(["decode", data, "--hex-string", "--layout", "string,vector", "--strict"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out[0] == {"kind": "string", "value": "hi", "offset": 0}
    assert out[1]["value"] == {"x": 1.0, "y": 2.0, "z": 3.0}


def test_decode_underflow_reports_error(tmp_path, capsys):
    f = tmp_path / "short.bin"
    f.write_bytes(b"\x01\x02")
    assert main(["decode", str(f), "--layout", "int32"]) == 1
    assert "underflow" in capsys.readouterr().err


def test_encode_command(tmp_path):
    src = tmp_path / "fields.json"
    src.write_text(json.dumps([
        {"kind": "int32", "value": 12345},
        {"kind": "bool", "value": False},
    ]))
    out = tmp_path / "out.bin"
    assert main(["encode", str(src), str(out)]) == 0
    assert out.read_bytes() == bytes.fromhex("3930000000")

    hex_out = tmp_path / "out.hex"
    assert main(["encode", str(src), str(hex_out), "--hex"]) == 0
    assert hex_out.read_text().strip() == "3930000000"


def test_encode_rejects_bad_value(tmp_path, capsys):
    src = tmp_path / "bad.json"
    src.write_text(json.dumps([{"kind": "byte", "value": 999}]))
    assert main(["encode", str(src), str(tmp_path / "x.bin")]) == 1
    assert "error:" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "bytebuf" in capsys.readouterr().out


def _strict_json(text):
    def reject(name):
        raise ValueError(f"non-standard constant {name}")
    return json.loads(text, parse_constant=reject)


def test_special_floats_survive_decode_then_encode(tmp_path, capsys):
    data = ByteBuffer().put_float(float("nan")).put_vector(float("inf"), 0.0, 1.0).to_hex()
    assert main(["decode", data, "--hex-string", "--layout", "float,vector"]) == 0
    fields = _strict_json(capsys.readouterr().out)
    assert fields[0]["value"] == "nan"
    assert fields[1]["value"] == {"x": "inf", "y": 0.0, "z": 1.0}

    src = tmp_path / "fields.json"
    src.write_text(json.dumps(fields))
    out = tmp_path / "out.bin"
    assert main(["encode", str(src), str(out)]) == 0
    buf = ByteBuffer(out.read_bytes())
    assert math.isnan(buf.get_float())
    assert buf.get_vector() == (float("inf"), 0.0, 1.0)
