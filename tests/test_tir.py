"""
Shape validation of the typed IR (no LLVM involved).
"""

from __future__ import annotations

import pytest

from minijit.errors import UnsupportedConstruct
from minijit.scalar_types import INT64
from minijit.tir import BinaryOp, Call, CompiledIR, ConstantInt, ParameterRef, Return, SSARef, validate


def _ir(*statements) -> CompiledIR:
    return CompiledIR(statements=list(statements), param_types=[INT64, INT64], return_type=INT64)


def test_well_formed_ir_validates(scale_add_ir):
    validate(scale_add_ir)


def test_operator_given_as_string_is_accepted():
    validate(_ir(Call("mul", (ParameterRef(0), ParameterRef(1))), Return(SSARef(0))))


def test_unsupported_operator_rejected():
    code = _ir(Call("sub", (ParameterRef(0), ParameterRef(1))), Return(SSARef(0)))
    with pytest.raises(UnsupportedConstruct, match="unsupported operator 'sub'") as exc:
        validate(code)
    assert exc.value.index == 0


def test_unknown_statement_rejected():
    code = _ir(Call(BinaryOp.ADD, (ParameterRef(0), ParameterRef(1))), "goto 0", Return(SSARef(0)))
    with pytest.raises(UnsupportedConstruct, match="statement 1: unsupported statement"):
        validate(code)


def test_raw_value_is_not_an_operand():
    """No implicit coercion of a plain int into a constant operand."""
    code = _ir(Call(BinaryOp.ADD, (ParameterRef(0), 3)), Return(SSARef(0)))
    with pytest.raises(UnsupportedConstruct, match="unsupported operand 3"):
        validate(code)


def test_return_operand_shape_checked():
    with pytest.raises(UnsupportedConstruct):
        validate(_ir(Return(None)))


def test_call_needs_exactly_two_operands():
    code = _ir(Call(BinaryOp.ADD, (ParameterRef(0), ParameterRef(1), ParameterRef(0))), Return(SSARef(0)))
    with pytest.raises(UnsupportedConstruct, match="add takes 2 operands, got 3"):
        validate(code)


def test_bool_constant_rejected():
    code = _ir(Call(BinaryOp.ADD, (ParameterRef(0), ConstantInt(True, 64))), Return(SSARef(0)))
    with pytest.raises(UnsupportedConstruct, match="non-integer constant True"):
        validate(code)


def test_float_constant_rejected():
    code = _ir(Call(BinaryOp.MUL, (ParameterRef(0), ConstantInt(1.5, 64))), Return(SSARef(0)))
    with pytest.raises(UnsupportedConstruct):
        validate(code)


def test_ordering_is_left_to_lowering():
    """Forward references and misplaced returns have valid shapes."""
    validate(_ir(Return(SSARef(0)), Call(BinaryOp.ADD, (SSARef(3), ParameterRef(9)))))


def test_multiply_is_a_spelling_of_mul():
    assert BinaryOp("multiply") is BinaryOp.MUL
    validate(_ir(Call("multiply", (ParameterRef(0), ParameterRef(1))), Return(SSARef(0))))
