"""
Typed IR listing parser and printer.
"""

from __future__ import annotations

import pytest

from minijit.errors import IRSyntaxError, MalformedIR, UnsupportedType
from minijit.parser import parse_file, parse_ir
from minijit.printer import format_ir
from minijit.scalar_types import INT32, INT64
from minijit.tir import BinaryOp, Call, ConstantInt, ParameterRef, Return, SSARef

SCALE_ADD = """\
fn scale_add(Int64, Int64) -> Int64:
    %0 = mul _0, 3:i64
    %1 = add %0, _1
    return %1
"""


def test_parse_listing(scale_add_ir):
    assert parse_ir(SCALE_ADD) == scale_add_ir


def test_printer_produces_the_listing(scale_add_ir):
    assert format_ir(scale_add_ir) == SCALE_ADD


def test_printed_listing_parses_back(add_ir):
    assert parse_ir(format_ir(add_ir)) == add_ir


def test_comments_and_blank_lines():
    src = """
# scale then offset
fn f(Int64) -> Int64:   # one param

    %0 = add _0, -1:i64  # decrement
    # nothing here

    return %0
# trailing"""
    code = parse_ir(src)
    assert code.name == "f"
    assert code.param_types == [INT64]
    assert code.statements == [
        Call(BinaryOp.ADD, (ParameterRef(0), ConstantInt(-1, 64))),
        Return(SSARef(0)),
    ]


def test_no_parameters():
    code = parse_ir("fn k() -> Int64:\n    %0 = mul 6:i64, 7:i64\n    return %0\n")
    assert code.param_types == []
    assert code.statements[0] == Call(BinaryOp.MUL, (ConstantInt(6, 64), ConstantInt(7, 64)))


def test_unsupported_constructs_still_parse():
    """Operators and widths outside the supported set are rejected later, not here."""
    code = parse_ir("fn g(Int32) -> Int64:\n    %0 = sub _0, 1:i32\n    return %0\n")
    assert code.param_types == [INT32]
    assert code.statements[0] == Call("sub", (ParameterRef(0), ConstantInt(1, 32)))


def test_unknown_type_name():
    with pytest.raises(UnsupportedType, match="unknown type 'Int128'"):
        parse_ir("fn g(Int128) -> Int64:\n    return %0\n")


def test_label_must_match_position():
    src = "fn g(Int64) -> Int64:\n    %0 = add _0, _0\n    %5 = add %0, _0\n    return %5\n"
    with pytest.raises(MalformedIR, match="%5 defined at position 1"):
        parse_ir(src)


def test_syntax_error_location():
    src = "fn g(Int64) -> Int64:\n    %0 = add _0 _0\n    return %0\n"
    with pytest.raises(IRSyntaxError) as exc:
        parse_ir(src)
    assert exc.value.line == 2


def test_missing_body():
    with pytest.raises(IRSyntaxError, match="unexpected end of input"):
        parse_ir("fn g(Int64) -> Int64:\n")


def test_parse_file(tmp_path):
    path = tmp_path / "scale_add.tir"
    path.write_text(SCALE_ADD)
    assert parse_file(path).name == "scale_add"
