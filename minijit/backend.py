"""Per-compilation LLVM state.

Nothing here is cached across compilations: each BackendContext carries its
own `ir.Context`, `ir.Module` and target machine.
"""

from __future__ import annotations

from dataclasses import dataclass

from llvmlite import binding as llvm  # type: ignore
from llvmlite import ir  # type: ignore


def initialize_native() -> None:
    llvm.initialize_native_target()
    llvm.initialize_native_asmprinter()


def create_target_machine(opt_level: int = 2) -> llvm.TargetMachine:
    """Target machine for the host; `opt_level` is the backend codegen level (0-3)."""
    initialize_native()
    target = llvm.Target.from_triple(llvm.get_process_triple())
    return target.create_target_machine(opt=opt_level, codemodel="jitdefault", jit=True)


@dataclass
class BackendContext:
    target_machine: llvm.TargetMachine
    ir_context: ir.Context
    module: ir.Module

    @classmethod
    def create(cls, module_name: str, opt_level: int = 2) -> "BackendContext":
        tm = create_target_machine(opt_level)
        ctx = ir.Context()
        module = ir.Module(name=f"{module_name}_module", context=ctx)
        module.triple = llvm.get_process_triple()
        module.data_layout = str(tm.target_data)
        return cls(target_machine=tm, ir_context=ctx, module=module)
