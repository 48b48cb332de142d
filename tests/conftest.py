"""Shared typed IR programs for the minijit tests."""

from __future__ import annotations

import pytest

from minijit.scalar_types import INT64
from minijit.tir import BinaryOp, Call, CompiledIR, ConstantInt, ParameterRef, Return, SSARef


@pytest.fixture
def add_ir() -> CompiledIR:
    """add(x, y) = x + y"""
    return CompiledIR(
        statements=[
            Call(BinaryOp.ADD, (ParameterRef(0), ParameterRef(1))),
            Return(SSARef(0)),
        ],
        param_types=[INT64, INT64],
        return_type=INT64,
        name="add2",
    )


@pytest.fixture
def scale_add_ir() -> CompiledIR:
    """scale_add(x, y) = x * 3 + y"""
    return CompiledIR(
        statements=[
            Call(BinaryOp.MUL, (ParameterRef(0), ConstantInt(3, 64))),
            Call(BinaryOp.ADD, (SSARef(0), ParameterRef(1))),
            Return(SSARef(1)),
        ],
        param_types=[INT64, INT64],
        return_type=INT64,
        name="scale_add",
    )
