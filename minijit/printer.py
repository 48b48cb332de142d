from __future__ import annotations

from . import tir


def format_operand(operand: tir.Operand) -> str:
    if isinstance(operand, tir.ParameterRef):
        return f"_{operand.index}"
    if isinstance(operand, tir.SSARef):
        return f"%{operand.index}"
    if isinstance(operand, tir.ConstantInt):
        return f"{operand.value}:i{operand.width}"
    return "<invalid operand>"


def format_stmt(idx: int, stmt: tir.Statement) -> str:
    if isinstance(stmt, tir.Call):
        op = stmt.op.value if isinstance(stmt.op, tir.BinaryOp) else stmt.op
        args = ", ".join(format_operand(o) for o in stmt.operands)
        return f"    %{idx} = {op} {args}".rstrip()
    if isinstance(stmt, tir.Return):
        return f"    return {format_operand(stmt.operand)}"
    return "    <invalid statement>"


def format_ir(code: tir.CompiledIR) -> str:
    params = ", ".join(str(ty) for ty in code.param_types)
    lines = [f"fn {code.name}({params}) -> {code.return_type}:"]
    lines.extend(format_stmt(idx, stmt) for idx, stmt in enumerate(code.statements))
    return "\n".join(lines) + "\n"
