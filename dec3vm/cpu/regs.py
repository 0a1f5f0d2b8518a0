"""
dec3vm — CPU Register Set

Register model:
  r0–r9  — ten general-purpose registers, each holding 0–999
  PC     — program counter (index of the next word to fetch)
  halted — set only by the HALT opcode
  count  — instructions executed in the current run (reporting only)

Every register write is reduced modulo 1000, so no path can leave a
register outside word range.
"""

from .alu import wrap

REGISTER_COUNT = 10


class Registers:
    """Register file plus the machine's control state."""

    __slots__ = ('_r', 'PC', 'halted', 'count')

    def __init__(self):
        self._r = [0] * REGISTER_COUNT
        self.PC: int = 0
        self.halted: bool = False
        self.count: int = 0

    def __getitem__(self, index: int) -> int:
        return self._r[index]

    def __setitem__(self, index: int, value: int):
        self._r[index] = wrap(value)

    def __len__(self) -> int:
        return REGISTER_COUNT

    def __iter__(self):
        return iter(self._r)

    def snapshot(self) -> tuple:
        """Read-only copy of r0–r9."""
        return tuple(self._r)

    # --- Display ---

    def display(self) -> str:
        """One-line register dump for traces."""
        regs = ' '.join(f"r{i}={v:03d}" for i, v in enumerate(self._r))
        return f"PC={self.PC:03d} {regs}"

    def reset(self):
        """Zero all registers and control state."""
        self._r = [0] * REGISTER_COUNT
        self.PC = 0
        self.halted = False
        self.count = 0
