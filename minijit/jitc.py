#!/usr/bin/env python3
"""minijitc: compile a typed IR listing to native code and optionally call it."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .compiler import compile_ir
from .config import JitOptions
from .errors import CodegenError
from .parser import parse_file
from .printer import format_ir


def run(
    source_path: Path,
    call_args: list[int] | None,
    emit_llvm: bool,
    emit_asm: bool,
    dump_ir: bool,
    options: JitOptions,
    name: str | None = None,
) -> int:
    code = parse_file(source_path)
    if name:
        code = dataclasses.replace(code, name=name)
    if dump_ir:
        print(format_ir(code), end="")
    fn = compile_ir(code, options)
    if emit_llvm:
        print(fn.llvm_ir, end="")
    if emit_asm:
        print(fn.assembly(), end="")
    if call_args is not None:
        if len(call_args) != len(fn.param_types):
            print(
                f"error: {fn.signature} takes {len(fn.param_types)} argument(s), got {len(call_args)}",
                file=sys.stderr,
            )
            return 1
        print(fn(*call_args))
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="minijitc: typed IR -> LLVM -> native code (straight-line subset)")
    ap.add_argument("source", type=Path, help="Typed IR listing")
    ap.add_argument("--emit-llvm", action="store_true", help="Print the generated LLVM IR to stdout")
    ap.add_argument("--emit-asm", action="store_true", help="Print the native assembly to stdout")
    ap.add_argument("--dump-ir", action="store_true", help="Print the parsed listing before compiling")
    ap.add_argument(
        "--call",
        nargs="*",
        type=int,
        metavar="ARG",
        help="Call the compiled function with these integer arguments and print the result",
    )
    ap.add_argument(
        "-O",
        "--opt-level",
        type=int,
        choices=[0, 1, 2, 3],
        default=2,
        help="Backend code generation level (default: 2)",
    )
    ap.add_argument("--name", help="Override the native symbol name")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log compilation steps to stderr")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)

    try:
        return run(
            args.source,
            args.call,
            args.emit_llvm,
            args.emit_asm,
            args.dump_ir,
            JitOptions(opt_level=args.opt_level),
            name=args.name,
        )
    except CodegenError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: cannot read {args.source}: {e.strerror}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"error: {args.source} is not valid UTF-8: {e.reason}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
