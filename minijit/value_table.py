from __future__ import annotations

from typing import List

from llvmlite import ir  # type: ignore

from .errors import MalformedIR, UseBeforeDef


class ValueTable:
    """Append-only table of emitted values, indexed by SSA id."""

    def __init__(self) -> None:
        self._values: List[ir.Value] = []

    def __len__(self) -> int:
        return len(self._values)

    def append(self, value: ir.Value) -> int:
        self._values.append(value)
        return len(self._values) - 1

    def lookup(self, ssa_id: int, at: int) -> ir.Value:
        """Return the value defined by statement `ssa_id`, used from statement `at`."""
        if ssa_id < 0:
            raise MalformedIR(f"negative SSA id %{ssa_id}", index=at)
        if ssa_id >= at or ssa_id >= len(self._values):
            raise UseBeforeDef(f"%{ssa_id} used before its definition", index=at)
        return self._values[ssa_id]
