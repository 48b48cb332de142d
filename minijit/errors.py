from __future__ import annotations

from typing import Optional


class CodegenError(Exception):
    """Base class for every failure raised while compiling a CompiledIR."""

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        self.index = index
        if index is not None:
            message = f"statement {index}: {message}"
        super().__init__(message)


class UnsupportedType(CodegenError):
    pass


class UnsupportedConstruct(CodegenError):
    pass


class MalformedIR(CodegenError):
    pass


class UseBeforeDef(CodegenError):
    pass


class IRSyntaxError(CodegenError):
    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        self.line = line
        self.column = column
        super().__init__(f"{line}:{column}: {message}")


class BackendError(CodegenError):
    pass
