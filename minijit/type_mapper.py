from __future__ import annotations

from typing import Dict, Mapping, Optional

from llvmlite import ir  # type: ignore

from .errors import MalformedIR, UnsupportedType
from .scalar_types import INT64, ScalarType, int_type_for_width


def default_bindings() -> Dict[ScalarType, ir.Type]:
    """Only Int64 is bound; narrower ints and floats are rejected, never widened."""
    return {INT64: ir.IntType(64)}


class TypeMapper:
    def __init__(self, bindings: Optional[Mapping[ScalarType, ir.Type]] = None) -> None:
        self._bindings: Dict[ScalarType, ir.Type] = dict(
            default_bindings() if bindings is None else bindings
        )

    def resolve(self, tag: ScalarType) -> ir.Type:
        try:
            return self._bindings[tag]
        except (KeyError, TypeError):
            raise UnsupportedType(f"unsupported type {tag}") from None

    def supports(self, tag: ScalarType) -> bool:
        return tag in self._bindings

    def constant(self, value: int, width: int) -> ir.Constant:
        """Materialize an integer constant of exactly `width` bits."""
        tag = int_type_for_width(width)
        if tag is None:
            raise UnsupportedType(f"unsupported integer width i{width}")
        ll_ty = self.resolve(tag)
        lo = -(1 << (width - 1))
        hi = (1 << (width - 1)) - 1
        if not lo <= value <= hi:
            raise MalformedIR(f"constant {value} does not fit in i{width}")
        return ir.Constant(ll_ty, value)
