"""
dec3vm — Three-Digit Decimal Register Machine
=============================================
An interpreter for a ten-register machine whose memory holds 1000
decimal words (000–999). Every word is both a number and an
instruction: the hundreds digit selects one of ten operations, the tens
and units digits are its operands.

Architecture:
    ┌────────────┐    ┌──────────┐    ┌──────────────────────────┐    ┌────────────┐
    │ image text │───>│  loader  │───>│ Machine.load → Memory    │───>│ RunResult  │
    │ (.txt)     │    │ (ints)   │    │ Machine.run  → fetch/exec│    │ (regs, n)  │
    └────────────┘    └──────────┘    └──────────────────────────┘    └────────────┘

    - cpu/word.py:    Word codec (int ↔ operation, x, y)
    - cpu/decoder.py: Opcode enum, instruction decode, disassembler
    - cpu/regs.py:    r0–r9, PC, halted flag, instruction count
    - cpu/alu.py:     modulo-1000 arithmetic
    - mem/memory.py:  word memory with range checks
    - emu.py:         fetch-decode-execute loop
    - loader.py:      whitespace-separated integer images
"""

__version__ = "0.1.0"

from .cpu.word import Word, InvalidEncoding, decode, encode
from .cpu.decoder import Opcode, Instruction, decode_instruction, disassemble
from .mem.memory import Memory, AddressOutOfRange, ImageTooLarge, MEMORY_SIZE
from .emu import Machine, RunResult, StopReason, ProgramCounterOutOfBounds
from .loader import LoadError, parse_image, load_file


def run_image(image, *, start_address: int = 0, max_steps: int = None) -> RunResult:
    """Load an integer image into a fresh Machine and run it.

    Full pipeline: Machine() -> load(image) -> run(start_address).

    Args:
        image: sequence of word values 0–999, stored from address 0.
        start_address: initial program counter (default 0).
        max_steps: optional step budget (default: unlimited).

    Returns:
        RunResult with the stop reason, final registers and
        instruction count.
    """
    machine = Machine()
    machine.load(image)
    return machine.run(start_address, max_steps=max_steps)
