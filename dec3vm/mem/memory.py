"""
dec3vm — Word-Addressable Memory

Memory layout:
  000–999  flat array of words, no regions, no protection

Each cell holds a Word. The same cell can be fetched as an instruction
or read/written as a number by LOAD/STORE, so programs may modify their
own code.

Unlike a real bus, addresses never wrap: any access outside
[0, size) raises AddressOutOfRange.
"""

from typing import Callable, Dict, List, Optional

from ..cpu.word import Word, ZERO_WORD, decode

MEMORY_SIZE = 1000


class AddressOutOfRange(IndexError):
    """Raised on a read or write outside [0, size)."""

    def __init__(self, addr: int, size: int):
        self.addr = addr
        self.size = size
        super().__init__(f"address {addr} outside memory 0-{size - 1}")


class ImageTooLarge(ValueError):
    """Raised when a program image does not fit in memory."""

    def __init__(self, length: int, base_addr: int, size: int):
        self.length = length
        self.base_addr = base_addr
        self.size = size
        super().__init__(
            f"image of {length} words at {base_addr} exceeds memory size {size}")


class Memory:
    """Flat memory of `size` words.

    Watchpoints fire on every write, including writes made by STORE
    during execution, so self-modifying programs can be observed.
    """

    def __init__(self, size: int = MEMORY_SIZE):
        if size < 1:
            raise ValueError(f"memory size must be positive, got {size}")
        self.size = size
        self._mem: List[Word] = [ZERO_WORD] * size

        # Watchpoints: addr → [callback(addr, old_word, new_word)]
        self._watchpoints: Dict[int, List[Callable]] = {}

    def _check(self, addr: int):
        if not 0 <= addr < self.size:
            raise AddressOutOfRange(addr, self.size)

    # --- Core read/write ---

    def read(self, addr: int) -> Word:
        self._check(addr)
        return self._mem[addr]

    def write(self, addr: int, word: Word):
        self._check(addr)
        old = self._mem[addr]
        for cb in self._watchpoints.get(addr, ()):
            cb(addr, old, word)
        self._mem[addr] = word

    def read_value(self, addr: int) -> int:
        """Read a word as data (0–999)."""
        return self.read(addr).to_int()

    def write_value(self, addr: int, value: int):
        """Write a number as data. Raises InvalidEncoding outside 0–999."""
        self.write(addr, decode(value))

    # --- Bulk load ---

    def load_image(self, values, base_addr: int = 0) -> int:
        """Decode integers and store them from base_addr upward.

        The whole image is decoded before anything is written, so a bad
        value leaves memory untouched. Bypasses watchpoints.
        Returns the number of words stored.
        """
        words = [decode(v) for v in values]
        if base_addr < 0 or base_addr + len(words) > self.size:
            raise ImageTooLarge(len(words), base_addr, self.size)
        self._mem[base_addr:base_addr + len(words)] = words
        return len(words)

    def clear(self):
        self._mem = [ZERO_WORD] * self.size

    # --- Watchpoints ---

    def add_watchpoint(self, addr: int, callback: Callable):
        """callback(addr, old_word, new_word) runs on each write to addr."""
        self._check(addr)
        self._watchpoints.setdefault(addr, []).append(callback)

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

    def snapshot(self, start: int = 0, end: Optional[int] = None) -> tuple:
        """Integer values of [start, end] inclusive. Default: all of memory."""
        if end is None:
            end = self.size - 1
        return tuple(w.to_int() for w in self._mem[start:end + 1])

    def diff_snapshots(self, snap_a, snap_b, base_addr: int = 0) -> Dict[int, tuple]:
        """Compare two snapshots, return {addr: (old, new)} for changes."""
        changes = {}
        for i in range(min(len(snap_a), len(snap_b))):
            if snap_a[i] != snap_b[i]:
                changes[base_addr + i] = (snap_a[i], snap_b[i])
        return changes

    # --- Dump ---

    def dump(self, start: int = 0, length: Optional[int] = None) -> str:
        """Ten words per line: 'NNN  www www ... www'."""
        if length is None:
            length = self.size - start
        end = min(start + length, self.size)
        lines = []
        for row in range(start, end, 10):
            words = ' '.join(str(self._mem[a]) for a in range(row, min(row + 10, end)))
            lines.append(f"{row:03d}  {words}")
        return '\n'.join(lines)
