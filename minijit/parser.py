"""Parser for typed IR listings (see grammar.lark)."""

from __future__ import annotations

from pathlib import Path
from typing import List

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from . import tir
from .errors import IRSyntaxError, MalformedIR
from .scalar_types import lookup_type

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    start="start",
    propagate_positions=True,
    maybe_placeholders=False,
)


def parse_ir(source: str) -> tir.CompiledIR:
    # The grammar wants every statement newline-terminated.
    text = source.rstrip() + "\n"
    try:
        tree = _PARSER.parse(text)
    except UnexpectedInput as exc:
        line = _position(getattr(exc, "line", 0))
        column = _position(getattr(exc, "column", 0))
        raise IRSyntaxError(_describe(exc), line=line, column=column) from None
    return _build_ir(tree)


def parse_file(path: Path) -> tir.CompiledIR:
    return parse_ir(Path(path).read_text(encoding="utf-8"))


def _describe(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedCharacters):
        return f"unexpected character {exc.char!r}"
    if isinstance(exc, UnexpectedEOF):
        return "unexpected end of input"
    if isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            return "unexpected end of input"
        return f"unexpected {exc.token.value!r}"
    return "invalid listing"


def _position(value: object) -> int:
    # lark reports -1 or '?' when the error is at end of input.
    return value if isinstance(value, int) and value > 0 else 0


def _build_ir(tree: Tree) -> tir.CompiledIR:
    header = tree.children[0]
    name, param_types, return_type = _build_header(header)
    statements: List[tir.Statement] = []
    for idx, child in enumerate(tree.children[1:]):
        kind = _name(child)
        if kind == "call_stmt":
            statements.append(_build_call(child, idx))
        elif kind == "return_stmt":
            statements.append(tir.Return(operand=_build_operand(child.children[0])))
        else:
            raise IRSyntaxError(f"unexpected {kind}", line=child.meta.line, column=child.meta.column)
    return tir.CompiledIR(statements=statements, param_types=param_types, return_type=return_type, name=name)


def _build_header(tree: Tree):
    names = [child for child in tree.children if isinstance(child, Token)]
    type_list = next((child for child in tree.children if isinstance(child, Tree)), None)
    param_types = []
    if type_list is not None:
        param_types = [lookup_type(tok.value) for tok in type_list.children]
    return names[0].value, param_types, lookup_type(names[-1].value)


def _build_call(tree: Tree, idx: int) -> tir.Call:
    dest, op = tree.children[0], tree.children[1]
    if int(dest.value[1:]) != idx:
        raise MalformedIR(f"{dest.value} defined at position {idx} (line {dest.line})", index=idx)
    operands = tuple(_build_operand(child) for child in tree.children[2:])
    try:
        op_value = tir.BinaryOp(op.value)
    except ValueError:
        # Left as a string; validation reports it as unsupported.
        op_value = op.value
    return tir.Call(op=op_value, operands=operands)


def _build_operand(tree: Tree) -> tir.Operand:
    kind = _name(tree)
    if kind == "param_ref":
        return tir.ParameterRef(int(tree.children[0].value[1:]))
    if kind == "ssa_ref":
        return tir.SSARef(int(tree.children[0].value[1:]))
    if kind == "const_int":
        value, width = tree.children
        return tir.ConstantInt(value=int(value.value), width=int(width.value[1:]))
    raise IRSyntaxError(f"unexpected operand {kind}", line=tree.meta.line, column=tree.meta.column)


def _name(tree: Tree) -> str:
    return str(tree.data)
