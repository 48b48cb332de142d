"""The ctypes boundary.

This is the only module that turns a raw native address into something
Python can call. The ctypes prototype is built from the same type tags that
produced the LLVM signature, which is what keeps the call well-typed.
"""

from __future__ import annotations

import ctypes
from typing import Dict, Sequence

from llvmlite import binding as llvm  # type: ignore

from .errors import UnsupportedType
from .function_builder import FinalizedFunction
from .scalar_types import BOOL, FLOAT32, FLOAT64, INT8, INT16, INT32, INT64, ScalarType

_CTYPES: Dict[ScalarType, type] = {
    INT8: ctypes.c_int8,
    INT16: ctypes.c_int16,
    INT32: ctypes.c_int32,
    INT64: ctypes.c_int64,
    FLOAT32: ctypes.c_float,
    FLOAT64: ctypes.c_double,
    BOOL: ctypes.c_bool,
}


def ctype_for(tag: ScalarType) -> type:
    try:
        return _CTYPES[tag]
    except KeyError:
        raise UnsupportedType(f"no native calling convention for {tag}") from None


class NativeFunction:
    """Directly callable wrapper around JIT-compiled code."""

    def __init__(self, finalized: FinalizedFunction, param_types: Sequence[ScalarType], return_type: ScalarType) -> None:
        self._finalized = finalized
        self.param_types = tuple(param_types)
        self.return_type = return_type
        prototype = ctypes.CFUNCTYPE(ctype_for(return_type), *(ctype_for(ty) for ty in self.param_types))
        self._cfunc = prototype(finalized.address)

    @property
    def name(self) -> str:
        return self._finalized.name

    @property
    def address(self) -> int:
        return self._finalized.address

    @property
    def llvm_ir(self) -> str:
        return self._finalized.llvm_ir

    @property
    def signature(self) -> str:
        params = ", ".join(str(ty) for ty in self.param_types)
        return f"{self.name}({params}) -> {self.return_type}"

    def assembly(self) -> str:
        """Native assembly for the compiled function, regenerated from its LLVM IR."""
        return self._finalized.target_machine.emit_assembly(llvm.parse_assembly(self.llvm_ir))

    def __call__(self, *args):
        if len(args) != len(self.param_types):
            raise TypeError(f"{self.signature} takes {len(self.param_types)} argument(s), got {len(args)}")
        return self._cfunc(*args)

    def __repr__(self) -> str:
        return f"<NativeFunction {self.signature} at 0x{self.address:x}>"
