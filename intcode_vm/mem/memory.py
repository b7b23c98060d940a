"""
Intcode VM — Growable Word Memory

The tape is a flat Python list of ints, initialised as a copy of the
program. It has no fixed size:

  - a read or write past the end grows the list with zeros up to and
    including the accessed index, then completes the access
  - memory never shrinks
  - a negative address is fatal (AddressError)

Reads grow too, so after any access len(memory) > addr. This keeps
the "untouched cell reads as zero" rule and the growth rule the same
for both directions.

Watchpoints fire on writes; snapshots + diff are for inspecting what a
program changed between two points.
"""

from typing import Callable, Dict, List, Optional, Sequence

from ..errors import AddressError


def _check_index(addr) -> int:
    if isinstance(addr, bool) or not isinstance(addr, int):
        raise TypeError(
            f"Memory addresses must be ints, not {type(addr).__name__}")
    return addr


class Memory:
    """Zero-filled, auto-growing word memory."""

    def __init__(self, program: Sequence[int] = ()):
        self._mem: List[int] = list(program)

        # Watchpoints: addr → [callback(addr, old_val, new_val)]
        self._watchpoints: Dict[int, List[Callable]] = {}

    def __len__(self) -> int:
        return len(self._mem)

    # --- Core read/write ---

    def _ensure(self, addr: int):
        if addr < 0:
            raise AddressError(f"Negative memory address {addr}")
        if addr >= len(self._mem):
            self._mem.extend([0] * (addr + 1 - len(self._mem)))

    def read(self, addr: int) -> int:
        """Read the word at addr, growing memory if addr is past the end."""
        self._ensure(addr)
        return self._mem[addr]

    def write(self, addr: int, value: int):
        """Write value at addr, growing memory if addr is past the end."""
        self._ensure(addr)
        old = self._mem[addr]
        self._mem[addr] = value

        if addr in self._watchpoints:
            for cb in self._watchpoints[addr]:
                cb(addr, old, value)

    def __getitem__(self, addr: int) -> int:
        return self.read(_check_index(addr))

    def __setitem__(self, addr: int, value: int):
        self.write(_check_index(addr), value)

    # --- Bulk load ---

    def load_program(self, program: Sequence[int]):
        """Replace memory contents with a copy of program."""
        self._mem = list(program)

    def to_list(self) -> List[int]:
        """Copy of the whole tape."""
        return list(self._mem)

    # --- Watchpoints ---

    def add_watchpoint(self, addr: int, callback: Callable):
        """Call callback(addr, old_val, new_val) on every write to addr."""
        if addr not in self._watchpoints:
            self._watchpoints[addr] = []
        self._watchpoints[addr].append(callback)

    def remove_watchpoint(self, addr: int, callback: Optional[Callable] = None):
        """Remove a watchpoint. If callback is None, removes all on that addr."""
        if addr in self._watchpoints:
            if callback is None:
                del self._watchpoints[addr]
            else:
                self._watchpoints[addr] = [
                    cb for cb in self._watchpoints[addr] if cb != callback
                ]

    # --- Snapshots ---

    def snapshot(self) -> tuple:
        """Capture the tape for later diffing."""
        return tuple(self._mem)

    @staticmethod
    def diff_snapshots(snap_a: Sequence[int],
                       snap_b: Sequence[int]) -> Dict[int, tuple]:
        """Compare two snapshots, return {addr: (old, new)} for changes.

        Cells past the end of the shorter snapshot count as zero.
        """
        changes = {}
        for addr in range(max(len(snap_a), len(snap_b))):
            old = snap_a[addr] if addr < len(snap_a) else 0
            new = snap_b[addr] if addr < len(snap_b) else 0
            if old != new:
                changes[addr] = (old, new)
        return changes

    # --- Dump ---

    def dump(self, start: int = 0, length: Optional[int] = None,
             width: int = 8) -> str:
        """Produce a decimal dump of memory for debugging.

        Does not grow memory; cells past the end are not shown.
        """
        end = len(self._mem) if length is None else min(len(self._mem), start + length)
        lines = []
        for row in range(start, end, width):
            words = ' '.join(f'{w:>8d}' for w in self._mem[row:min(row + width, end)])
            lines.append(f'{row:06d}  {words}')
        return '\n'.join(lines)
