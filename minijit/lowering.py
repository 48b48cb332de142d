"""Typed IR → LLVM lowering for straight-line functions."""

from __future__ import annotations

import logging
from typing import Sequence

from llvmlite import ir  # type: ignore

from . import tir
from .errors import MalformedIR, UnsupportedConstruct, UnsupportedType
from .type_mapper import TypeMapper
from .value_table import ValueTable

logger = logging.getLogger(__name__)


class LoweringEngine:
    """Emit one LLVM instruction per statement at the builder's insertion point.

    The builder must already be positioned inside the function being built;
    `params` are that function's arguments in declaration order.
    """

    def __init__(self, builder: ir.IRBuilder, params: Sequence[ir.Argument], type_mapper: TypeMapper) -> None:
        self.builder = builder
        self.params = list(params)
        self.type_mapper = type_mapper
        self.values = ValueTable()

    def lower(self, statements: Sequence[tir.Statement]) -> ir.Instruction:
        """Lower `statements` in order and return the emitted `ret`.

        Shapes are validated up front, so nothing is emitted for a list that
        contains an unsupported statement or operand.
        """
        tir.validate_statements(statements)
        self.values = ValueTable()
        last = len(statements) - 1
        for idx, stmt in enumerate(statements):
            if isinstance(stmt, tir.Call):
                value = self._lower_call(stmt, idx)
                self.values.append(value)
                logger.debug("lowered statement %d: %s", idx, value)
            elif isinstance(stmt, tir.Return):
                if idx != last:
                    raise MalformedIR(f"return is followed by {last - idx} more statement(s)", index=idx)
                return self._lower_return(stmt, idx)
            else:
                raise UnsupportedConstruct(f"unsupported statement {stmt!r}", index=idx)
        raise MalformedIR("function has no return")

    def _lower_call(self, stmt: tir.Call, idx: int) -> ir.Value:
        try:
            op = tir.BinaryOp(stmt.op)
        except ValueError:
            raise UnsupportedConstruct(f"unsupported operator {stmt.op!r}", index=idx) from None
        if len(stmt.operands) != 2:
            raise UnsupportedConstruct(f"{op.value} takes 2 operands, got {len(stmt.operands)}", index=idx)
        lhs, rhs = (self._resolve(operand, idx) for operand in stmt.operands)
        name = f"ssa{idx}"
        # No nsw/nuw flags: overflow wraps.
        if op is tir.BinaryOp.MUL:
            return self.builder.mul(lhs, rhs, name=name)
        return self.builder.add(lhs, rhs, name=name)

    def _lower_return(self, stmt: tir.Return, idx: int) -> ir.Instruction:
        if not isinstance(stmt.operand, tir.SSARef):
            raise MalformedIR(f"return operand must be an SSA value, got {stmt.operand!r}", index=idx)
        return self.builder.ret(self.values.lookup(stmt.operand.index, at=idx))

    def _resolve(self, operand: tir.Operand, idx: int) -> ir.Value:
        if isinstance(operand, tir.ParameterRef):
            if not 0 <= operand.index < len(self.params):
                raise MalformedIR(
                    f"parameter _{operand.index} out of range for {len(self.params)} parameter(s)", index=idx
                )
            return self.params[operand.index]
        if isinstance(operand, tir.SSARef):
            return self.values.lookup(operand.index, at=idx)
        if isinstance(operand, tir.ConstantInt):
            try:
                return self.type_mapper.constant(operand.value, operand.width)
            except (MalformedIR, UnsupportedType) as exc:
                raise type(exc)(str(exc), index=idx) from None
        raise UnsupportedConstruct(f"unsupported operand {operand!r}", index=idx)
