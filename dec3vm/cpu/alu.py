"""
dec3vm — ALU Operations

Every arithmetic, copy or load result that lands in a register is
reduced modulo 1000 so registers always hold a valid word value. Python
`%` with a positive modulus never returns a negative number, so the
result is always in 0–999.
"""

from .word import WORD_MODULUS


def wrap(value: int) -> int:
    """Reduce a value into register range 0–999."""
    return value % WORD_MODULUS


def add(a: int, b: int) -> int:
    """(a + b) mod 1000"""
    return (a + b) % WORD_MODULUS


def mul(a: int, b: int) -> int:
    """(a * b) mod 1000"""
    return (a * b) % WORD_MODULUS
