"""Straight-line typed IR → native code via llvmlite."""

from .compiler import compile_ir
from .config import JitOptions
from .errors import (
    BackendError,
    CodegenError,
    IRSyntaxError,
    MalformedIR,
    UnsupportedConstruct,
    UnsupportedType,
    UseBeforeDef,
)
from .invoker import NativeFunction
from .parser import parse_ir
from .printer import format_ir
from .scalar_types import INT64, ScalarType
from .tir import BinaryOp, Call, CompiledIR, ConstantInt, ParameterRef, Return, SSARef

__all__ = [
    "BackendError",
    "BinaryOp",
    "Call",
    "CodegenError",
    "CompiledIR",
    "ConstantInt",
    "INT64",
    "IRSyntaxError",
    "JitOptions",
    "MalformedIR",
    "NativeFunction",
    "ParameterRef",
    "Return",
    "SSARef",
    "ScalarType",
    "UnsupportedConstruct",
    "UnsupportedType",
    "UseBeforeDef",
    "compile_ir",
    "format_ir",
    "parse_ir",
]
