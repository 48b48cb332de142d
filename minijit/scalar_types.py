from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .errors import UnsupportedType


@dataclass(frozen=True)
class ScalarType:
    name: str
    bits: int
    kind: str = "int"

    def __str__(self) -> str:
        return self.name


INT8 = ScalarType("Int8", 8)
INT16 = ScalarType("Int16", 16)
INT32 = ScalarType("Int32", 32)
INT64 = ScalarType("Int64", 64)
FLOAT32 = ScalarType("Float32", 32, kind="float")
FLOAT64 = ScalarType("Float64", 64, kind="float")
BOOL = ScalarType("Bool", 1, kind="bool")

_BY_NAME: Dict[str, ScalarType] = {
    ty.name: ty for ty in (INT8, INT16, INT32, INT64, FLOAT32, FLOAT64, BOOL)
}

_INT_BY_WIDTH: Dict[int, ScalarType] = {
    ty.bits: ty for ty in _BY_NAME.values() if ty.kind == "int"
}


def lookup_type(name: str) -> ScalarType:
    """Resolve a type name from a listing (e.g. ``Int64``) to its tag."""
    ty = _BY_NAME.get(name)
    if ty is None:
        raise UnsupportedType(f"unknown type {name!r}")
    return ty


def int_type_for_width(width: int) -> Optional[ScalarType]:
    return _INT_BY_WIDTH.get(width)
