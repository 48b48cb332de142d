from __future__ import annotations

import logging
from typing import Optional

from . import tir
from .config import JitOptions
from .function_builder import FunctionBuilder
from .invoker import NativeFunction
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)


def compile_ir(
    code: tir.CompiledIR,
    options: Optional[JitOptions] = None,
    type_mapper: Optional[TypeMapper] = None,
) -> NativeFunction:
    """Compile `code` to native code and return it as a Python callable.

    Raises a CodegenError subclass on any failure; nothing is returned or
    retained from a failed compilation.
    """
    options = options or JitOptions()
    logger.debug("compiling %s: %d statement(s), opt=%d", code.name, len(code.statements), options.opt_level)
    tir.validate(code)
    with FunctionBuilder(
        code.name,
        code.param_types,
        code.return_type,
        type_mapper=type_mapper,
        opt_level=options.opt_level,
    ) as fb:
        fb.lower(code.statements)
        finalized = fb.finalize()
    return NativeFunction(finalized, code.param_types, code.return_type)
