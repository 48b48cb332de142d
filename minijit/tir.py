"""Typed IR accepted by the code generator.

A CompiledIR is the output of type inference for a single straight-line
function: a list of statements whose SSA id is their position in the list.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Union

from .errors import UnsupportedConstruct
from .scalar_types import INT64, ScalarType


class BinaryOp(str, enum.Enum):
    MUL = "mul"
    ADD = "add"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _OP_ALIASES.get(value)
        return None


_OP_ALIASES = {"multiply": BinaryOp.MUL}


class Operand:
    pass


@dataclass(frozen=True)
class ParameterRef(Operand):
    index: int


@dataclass(frozen=True)
class SSARef(Operand):
    index: int


@dataclass(frozen=True)
class ConstantInt(Operand):
    value: int
    width: int = 64


class Statement:
    pass


@dataclass(frozen=True)
class Call(Statement):
    # Any string is representable so front-ends can hand us operators we
    # reject during validation.
    op: Union[BinaryOp, str]
    operands: tuple = ()


@dataclass(frozen=True)
class Return(Statement):
    operand: Operand


@dataclass
class CompiledIR:
    statements: List[Statement]
    param_types: List[ScalarType] = field(default_factory=list)
    return_type: ScalarType = INT64
    name: str = "jitted"


_OPERAND_TYPES = (ParameterRef, SSARef, ConstantInt)


def validate(code: CompiledIR) -> None:
    """Reject statements and operands outside the closed set the engine lowers.

    Ordering rules (SSA def-before-use, Return placement) are enforced by the
    lowering engine while it walks the statements.
    """
    validate_statements(code.statements)


def validate_statements(statements) -> None:
    for idx, stmt in enumerate(statements):
        if isinstance(stmt, Call):
            _validate_call(stmt, idx)
        elif isinstance(stmt, Return):
            _validate_operand(stmt.operand, idx)
        else:
            raise UnsupportedConstruct(f"unsupported statement {stmt!r}", index=idx)


def _validate_call(stmt: Call, idx: int) -> None:
    if not _is_supported_op(stmt.op):
        raise UnsupportedConstruct(f"unsupported operator {stmt.op!r}", index=idx)
    if not isinstance(stmt.operands, (tuple, list)):
        raise UnsupportedConstruct(f"unsupported operand list {stmt.operands!r}", index=idx)
    if len(stmt.operands) != 2:
        raise UnsupportedConstruct(
            f"{BinaryOp(stmt.op).value} takes 2 operands, got {len(stmt.operands)}", index=idx
        )
    for operand in stmt.operands:
        _validate_operand(operand, idx)


def _is_supported_op(op: object) -> bool:
    try:
        BinaryOp(op)
    except ValueError:
        return False
    return True


def _validate_operand(operand: object, idx: int) -> None:
    if not isinstance(operand, _OPERAND_TYPES):
        raise UnsupportedConstruct(f"unsupported operand {operand!r}", index=idx)
    if isinstance(operand, ConstantInt):
        # bool is an int subclass; reject it rather than coerce.
        if isinstance(operand.value, bool) or not isinstance(operand.value, int):
            raise UnsupportedConstruct(f"non-integer constant {operand.value!r}", index=idx)
        if isinstance(operand.width, bool) or not isinstance(operand.width, int):
            raise UnsupportedConstruct(f"invalid constant width {operand.width!r}", index=idx)
    elif isinstance(operand.index, bool) or not isinstance(operand.index, int):
        raise UnsupportedConstruct(f"invalid operand index {operand.index!r}", index=idx)
