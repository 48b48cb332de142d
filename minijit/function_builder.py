from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from llvmlite import binding as llvm  # type: ignore
from llvmlite import ir  # type: ignore

from . import tir
from .backend import BackendContext
from .errors import BackendError, MalformedIR
from .lowering import LoweringEngine
from .scalar_types import ScalarType
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalizedFunction:
    """A JIT-compiled function.

    `engine` owns the machine code at `address`; it must outlive any callable
    built from the address.
    """

    name: str
    llvm_ir: str
    address: int
    engine: llvm.ExecutionEngine
    target_machine: llvm.TargetMachine


class FunctionBuilder:
    """Scoped construction of a single LLVM function.

    Used as a context manager: entering allocates the backend context, the
    function and its entry block and positions an IRBuilder at the start of
    that block. Leaving always detaches the builder; leaving with an
    exception also drops the partially built module.
    """

    def __init__(
        self,
        name: str,
        param_types: Sequence[ScalarType],
        return_type: ScalarType,
        type_mapper: Optional[TypeMapper] = None,
        opt_level: int = 2,
    ) -> None:
        self.name = name
        self.param_types = list(param_types)
        self.return_type = return_type
        self.type_mapper = type_mapper or TypeMapper()
        self.opt_level = opt_level
        self.backend: Optional[BackendContext] = None
        self.function: Optional[ir.Function] = None
        self.builder: Optional[ir.IRBuilder] = None

    def __enter__(self) -> "FunctionBuilder":
        # Resolve the signature before allocating anything in the backend.
        ret_ty = self.type_mapper.resolve(self.return_type)
        arg_tys = [self.type_mapper.resolve(ty) for ty in self.param_types]
        self.backend = BackendContext.create(self.name, self.opt_level)
        fn_ty = ir.FunctionType(ret_ty, arg_tys)
        self.function = ir.Function(self.backend.module, fn_ty, name=self.name)
        for idx, arg in enumerate(self.function.args):
            arg.name = f"arg{idx}"
        entry = self.function.append_basic_block(name="entry")
        self.builder = ir.IRBuilder(entry)
        self.builder.position_at_start(entry)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.builder = None
        if exc_type is not None:
            logger.debug("discarding partially built function %s: %s", self.name, exc)
            self.function = None
            self.backend = None
        return False

    def lower(self, statements: Sequence[tir.Statement]) -> ir.Instruction:
        if self.builder is None or self.function is None:
            raise RuntimeError("FunctionBuilder.lower called outside its with-block")
        return LoweringEngine(self.builder, self.function.args, self.type_mapper).lower(statements)

    def finalize(self) -> FinalizedFunction:
        """Mark the function always-inline, verify it and JIT it to native code."""
        if self.function is None or self.backend is None:
            raise RuntimeError("FunctionBuilder.finalize called outside its with-block")
        if not self.function.blocks[0].is_terminated:
            raise MalformedIR(f"function {self.name} has no return")
        self.function.attributes.add("alwaysinline")
        text = str(self.backend.module)
        try:
            llvm_mod = llvm.parse_assembly(text)
            llvm_mod.verify()
        except RuntimeError as exc:
            raise BackendError(f"LLVM rejected {self.name}: {exc}") from exc
        tm = self.backend.target_machine
        engine = llvm.create_mcjit_compiler(llvm_mod, tm)
        engine.finalize_object()
        address = engine.get_function_address(self.name)
        if not address:
            raise BackendError(f"no native code for {self.name}")
        logger.debug("jitted %s at 0x%x", self.name, address)
        return FinalizedFunction(name=self.name, llvm_ir=text, address=address, engine=engine, target_machine=tm)
