"""
dec3vm — Main Machine Class

This is the top-level class that integrates:
  - register file (cpu/regs.py)
  - word memory (mem/memory.py)
  - opcode decoder (cpu/decoder.py)
  - modulo-1000 ALU (cpu/alu.py)

Execution model (one step):
  1. Guard: PC must satisfy 0 <= PC <= memory size
  2. Fetch the word at PC
  3. PC += 1
  4. Decode the word and execute the handler for its opcode
  5. instruction count += 1

The guard deliberately admits PC == memory size. That value passes the
check and the fetch that follows fails; both cases are reported as
ProgramCounterOutOfBounds.

Termination reasons:
  - HALT:           HALT opcode executed
  - PC_FAULT:       program counter outside memory
  - ADDRESS_FAULT:  LOAD/STORE through a register holding a bad address
  - STEP_LIMIT:     optional max_steps budget exhausted
  - BREAK:          breakpoint address hit

With no step budget a program that never halts and never leaves memory
runs forever.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set

from .cpu import alu
from .cpu.decoder import Opcode, decode_instruction, disassemble
from .cpu.regs import Registers
from .cpu.word import decode, encode
from .mem.memory import Memory, AddressOutOfRange, MEMORY_SIZE

logger = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    PC_FAULT = 'PC_FAULT'
    ADDRESS_FAULT = 'ADDRESS_FAULT'
    STEP_LIMIT = 'STEP_LIMIT'
    BREAK = 'BREAK'


FAULT_REASONS = frozenset({StopReason.PC_FAULT, StopReason.ADDRESS_FAULT})


class ProgramCounterOutOfBounds(Exception):
    """Program counter left memory.

    at_fetch is True when PC passed the guard (PC == memory size) and
    the fetch itself failed.
    """

    def __init__(self, pc: int, at_fetch: bool = False):
        self.pc = pc
        self.at_fetch = at_fetch
        where = "fetch" if at_fetch else "guard"
        super().__init__(f"pc out of bounds: {pc} ({where})")


@dataclass
class RunResult:
    """Final state reported by Machine.run()."""
    reason: StopReason
    registers: tuple
    instruction_count: int
    pc: int
    fault: Optional[Exception] = None

    @property
    def halted(self) -> bool:
        return self.reason is StopReason.HALT

    @property
    def faulted(self) -> bool:
        return self.reason in FAULT_REASONS


class Machine:
    """Ten-register decimal word machine.

    Usage:
        m = Machine()
        m.load([203, 204, 100])
        result = m.run(0)
        result.registers[0]       # 4
        result.instruction_count  # 3
    """

    def __init__(self, memory_size: int = MEMORY_SIZE):
        self.regs = Registers()
        self.mem = Memory(memory_size)

        self._breakpoints: Set[int] = set()

        self._trace = False
        self._trace_output = []

        self.last_fault: Optional[Exception] = None

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # State accessors
    # ══════════════════════════════════════════════

    @property
    def pc(self) -> int:
        return self.regs.PC

    @property
    def halted(self) -> bool:
        return self.regs.halted

    def get_registers(self) -> tuple:
        return self.regs.snapshot()

    def get_instruction_count(self) -> int:
        return self.regs.count

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load(self, image, start_address: int = 0) -> int:
        """Decode integers into memory from start_address upward.

        Raises InvalidEncoding for values outside 0–999 and ImageTooLarge
        when the image does not fit. PC and counters are left alone.
        """
        count = self.mem.load_image(image, start_address)
        logger.info(f"Loaded {count} words at {start_address:03d}")
        return count

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def pc_in_bounds(self, pc: int) -> bool:
        """Loop guard. Admits pc == memory size (see module docstring)."""
        return 0 <= pc <= self.mem.size

    def step(self, ignore_breakpoint: bool = False) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason if stopped, else None."""
        pc = self.regs.PC

        if not self.pc_in_bounds(pc):
            return self._fault(StopReason.PC_FAULT, ProgramCounterOutOfBounds(pc))

        if pc in self._breakpoints and not ignore_breakpoint:
            return StopReason.BREAK

        try:
            word = self.mem.read(pc)
        except AddressOutOfRange:
            return self._fault(StopReason.PC_FAULT,
                               ProgramCounterOutOfBounds(pc, at_fetch=True))

        self.regs.PC = pc + 1
        inst = decode_instruction(word)

        if self._trace:
            line = f"{pc:03d}: {word}  {disassemble(word):14s} {self.regs.display()}"
            self._trace_output.append(line)
            logger.debug(line)

        try:
            self._dispatch[inst.opcode](inst.x, inst.y)
        except AddressOutOfRange as e:
            return self._fault(StopReason.ADDRESS_FAULT, e)

        self.regs.count += 1

        if self.regs.halted:
            return StopReason.HALT
        return None

    def run(self, start_address: int = 0,
            max_steps: Optional[int] = None) -> RunResult:
        """Reset control state and run from start_address until stopped.

        Args:
            start_address: initial PC
            max_steps: stop with STEP_LIMIT after this many steps
                       (None = no limit)

        Faults never propagate; they are reported in the RunResult.
        """
        self.regs.PC = start_address
        self.regs.halted = False
        self.regs.count = 0
        self.last_fault = None
        logger.info(f"Run from {start_address:03d}")
        return self._loop(max_steps, resuming=False)

    def resume(self, max_steps: Optional[int] = None) -> RunResult:
        """Continue from the current PC, e.g. after a BREAK or STEP_LIMIT.

        A breakpoint at the current PC is stepped over once.
        """
        return self._loop(max_steps, resuming=True)

    def _loop(self, max_steps: Optional[int], resuming: bool) -> RunResult:
        steps = 0
        reason = StopReason.HALT if self.regs.halted else None
        while reason is None:
            if max_steps is not None and steps >= max_steps:
                reason = StopReason.STEP_LIMIT
                break
            reason = self.step(ignore_breakpoint=resuming and steps == 0)
            steps += 1

        logger.info(f"Stopped: {reason.value} at PC={self.regs.PC} "
                    f"after {self.regs.count} instructions")
        return RunResult(
            reason=reason,
            registers=self.regs.snapshot(),
            instruction_count=self.regs.count,
            pc=self.regs.PC,
            fault=self.last_fault if reason in FAULT_REASONS else None,
        )

    def _fault(self, reason: StopReason, exc: Exception) -> StopReason:
        self.last_fault = exc
        logger.warning(str(exc))
        if self._trace:
            self._trace_output.append(f"  FAULT: {exc}")
        return reason

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(x, y) with x, y the operand digits.

    def _build_dispatch(self) -> dict:
        """Build opcode → handler table. Every Opcode must have a handler."""
        table = {
            Opcode.BRANCH:             self._op_branch,
            Opcode.HALT:               self._op_halt,
            Opcode.SET_IMMEDIATE:      self._op_set,
            Opcode.MULTIPLY_IMMEDIATE: self._op_muli,
            Opcode.ADD_IMMEDIATE:      self._op_addi,
            Opcode.COPY_REGISTER:      self._op_mov,
            Opcode.MULTIPLY_REGISTER:  self._op_mul,
            Opcode.ADD_REGISTER:       self._op_add,
            Opcode.LOAD_INDIRECT:      self._op_load,
            Opcode.STORE_INDIRECT:     self._op_store,
        }
        missing = set(Opcode) - set(table)
        if missing:
            raise NotImplementedError(
                f"No handler for {', '.join(op.name for op in sorted(missing))}")
        return table

    def _op_branch(self, x, y):
        if self.regs[y] != 0:
            self.regs.PC = self.regs[x]

    def _op_halt(self, x, y):
        self.regs.halted = True

    def _op_set(self, x, y):
        self.regs[x] = y

    def _op_muli(self, x, y):
        self.regs[x] = alu.mul(self.regs[x], y)

    def _op_addi(self, x, y):
        self.regs[x] = alu.add(self.regs[x], y)

    def _op_mov(self, x, y):
        self.regs[x] = alu.wrap(self.regs[y])

    def _op_mul(self, x, y):
        self.regs[x] = alu.mul(self.regs[x], self.regs[y])

    def _op_add(self, x, y):
        self.regs[x] = alu.add(self.regs[x], self.regs[y])

    def _op_load(self, x, y):
        self.regs[x] = alu.wrap(encode(self.mem.read(self.regs[y])))

    def _op_store(self, x, y):
        self.mem.write(self.regs[y], decode(alu.wrap(self.regs[x])))

    # ══════════════════════════════════════════════
    # Breakpoint API
    # ══════════════════════════════════════════════

    def add_breakpoint(self, addr: int):
        """Execution stops with BREAK when PC reaches addr."""
        self._breakpoints.add(addr)

    def remove_breakpoint(self, addr: int):
        self._breakpoints.discard(addr)

    def clear_breakpoints(self):
        self._breakpoints.clear()

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record one line per executed instruction."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def reset(self):
        """Full machine reset: registers, memory, breakpoints, trace."""
        self.regs.reset()
        self.mem.clear()
        self._breakpoints.clear()
        self._trace_output.clear()
        self.last_fault = None
