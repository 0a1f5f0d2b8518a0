"""
dec3vm — Opcode Decoder / Disassembler

Maps the operation digit of a word to (mnemonic, operand format).

OPERATION ENCODING:
  0ds : BR    jump to address in register d unless register s is 0
  100 : HALT  (x and y ignored)
  2dn : SET   register d = n
  3dn : MULI  register d *= n
  4dn : ADDI  register d += n
  5ds : MOV   register d = register s
  6ds : MUL   register d *= register s
  7ds : ADD   register d += register s
  8da : LOAD  register d = memory[register a]
  9sa : STORE memory[register a] = register s

All ten digits are defined, so there is no illegal-opcode path: any word
0–999 decodes to an instruction.
"""

from enum import IntEnum
from typing import NamedTuple

from .word import Word, decode


class Opcode(IntEnum):
    BRANCH = 0
    HALT = 1
    SET_IMMEDIATE = 2
    MULTIPLY_IMMEDIATE = 3
    ADD_IMMEDIATE = 4
    COPY_REGISTER = 5
    MULTIPLY_REGISTER = 6
    ADD_REGISTER = 7
    LOAD_INDIRECT = 8
    STORE_INDIRECT = 9


# Format: opcode -> (mnemonic, operand template)
OPCODES = {
    Opcode.BRANCH:             ('BR',    'r{x} if r{y}'),
    Opcode.HALT:               ('HALT',  ''),
    Opcode.SET_IMMEDIATE:      ('SET',   'r{x}, {y}'),
    Opcode.MULTIPLY_IMMEDIATE: ('MULI',  'r{x}, {y}'),
    Opcode.ADD_IMMEDIATE:      ('ADDI',  'r{x}, {y}'),
    Opcode.COPY_REGISTER:      ('MOV',   'r{x}, r{y}'),
    Opcode.MULTIPLY_REGISTER:  ('MUL',   'r{x}, r{y}'),
    Opcode.ADD_REGISTER:       ('ADD',   'r{x}, r{y}'),
    Opcode.LOAD_INDIRECT:      ('LOAD',  'r{x}, [r{y}]'),
    Opcode.STORE_INDIRECT:     ('STORE', 'r{x}, [r{y}]'),
}


class Instruction(NamedTuple):
    opcode: Opcode
    x: int
    y: int

    @property
    def mnemonic(self) -> str:
        return OPCODES[self.opcode][0]


def decode_instruction(word) -> Instruction:
    """Word (or raw int) → Instruction."""
    if not isinstance(word, Word):
        word = decode(word)
    return Instruction(Opcode(word.operation), word.x, word.y)


def disassemble(word) -> str:
    """Format one word as assembly text, e.g. 427 → 'ADDI  r2, 7'."""
    inst = decode_instruction(word)
    mnem, template = OPCODES[inst.opcode]
    operands = template.format(x=inst.x, y=inst.y)
    return f"{mnem:5s} {operands}".rstrip()


def disassemble_range(memory, start: int, length: int) -> str:
    """Listing of `length` words from `start`: 'NNN  WWW  MNEMONIC ops'."""
    lines = []
    end = min(start + length, memory.size)
    for addr in range(start, end):
        word = memory.read(addr)
        lines.append(f"{addr:03d}  {word}  {disassemble(word)}")
    return '\n'.join(lines)
