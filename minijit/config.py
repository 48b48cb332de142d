from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class JitOptions:
    """Knobs for a single compilation.

    `opt_level` is handed to the backend target machine (0-3); the engine
    itself performs no optimization.
    """

    opt_level: int = 2

    def __post_init__(self) -> None:
        if isinstance(self.opt_level, bool) or self.opt_level not in (0, 1, 2, 3):
            raise ValueError(f"opt_level must be 0-3, got {self.opt_level!r}")
