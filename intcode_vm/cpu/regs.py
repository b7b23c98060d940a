"""
Intcode VM — Register File

Register model:
  PC      — program counter (index of the next instruction word)
  RB      — relative base, added to mode-2 operands
  cycles  — number of instructions executed so far

Intcode has no flags and no stack, so unlike a real CPU the register
file is tiny. Both registers are unbounded Python ints.
"""


class Registers:
    """Intcode register set."""

    __slots__ = ('PC', 'RB', 'cycles')

    def __init__(self):
        self.PC: int = 0      # Program counter
        self.RB: int = 0      # Relative base
        self.cycles: int = 0  # Executed instruction counter

    def display(self) -> str:
        """Format register state for trace lines."""
        return f"PC={self.PC:<6d} RB={self.RB:<6d} CYC={self.cycles}"

    def reset(self):
        """Reset to power-on state."""
        self.PC = 0
        self.RB = 0
        self.cycles = 0
