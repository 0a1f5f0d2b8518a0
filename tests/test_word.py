"""
Word codec and decoder tests.

Covers:
  - int ↔ (operation, x, y) conversion in both directions
  - rejection of values outside 0–999 and digits outside 0–9
  - opcode table coverage and disassembly text
"""

import itertools

import pytest

from dec3vm.cpu.word import Word, InvalidEncoding, decode, encode, ZERO_WORD
from dec3vm.cpu.decoder import (
    Opcode, OPCODES, Instruction, decode_instruction, disassemble,
)


# ─── Codec ─────────────────────

class TestCodec:
    def test_decode_splits_digits(self):
        """427 → operation 4, x 2, y 7"""
        assert decode(427) == Word(4, 2, 7)

    def test_encode_joins_digits(self):
        assert encode(Word(4, 2, 7)) == 427

    def test_leading_zero_digits(self):
        """7 → (0, 0, 7), printed as 007"""
        word = decode(7)
        assert (word.operation, word.x, word.y) == (0, 0, 7)
        assert str(word) == "007"

    def test_int_round_trip(self):
        for value in range(1000):
            assert encode(decode(value)) == value

    def test_triple_round_trip(self):
        for op, x, y in itertools.product(range(10), repeat=3):
            assert decode(encode(Word(op, x, y))) == Word(op, x, y)

    def test_zero_word(self):
        assert ZERO_WORD == decode(0)
        assert int(ZERO_WORD) == 0

    @pytest.mark.parametrize("value", [-1, 1000, 12345])
    def test_decode_rejects_out_of_range(self, value):
        with pytest.raises(InvalidEncoding):
            decode(value)

    @pytest.mark.parametrize("value", [3.0, "5", None, True])
    def test_decode_rejects_non_integers(self, value):
        with pytest.raises(InvalidEncoding):
            decode(value)

    def test_invalid_encoding_is_value_error(self):
        with pytest.raises(ValueError):
            decode(1000)

    @pytest.mark.parametrize("digits", [(10, 0, 0), (0, -1, 0), (0, 0, 10)])
    def test_word_rejects_bad_digits(self, digits):
        with pytest.raises(InvalidEncoding):
            Word(*digits)

    def test_word_is_immutable(self):
        word = Word(1, 2, 3)
        with pytest.raises(AttributeError):
            word.x = 5


# ─── Decoder ─────────────────────

class TestDecoder:
    def test_every_opcode_has_table_entry(self):
        assert set(OPCODES) == set(Opcode)

    def test_operation_digit_selects_opcode(self):
        for digit in range(10):
            assert decode_instruction(digit * 100).opcode == Opcode(digit)

    def test_decode_instruction_from_int(self):
        assert decode_instruction(427) == Instruction(Opcode.ADD_IMMEDIATE, 2, 7)

    def test_decode_instruction_from_word(self):
        inst = decode_instruction(Word(9, 4, 5))
        assert inst.opcode is Opcode.STORE_INDIRECT
        assert (inst.x, inst.y) == (4, 5)
        assert inst.mnemonic == "STORE"

    def test_disassemble_immediate(self):
        assert disassemble(427) == "ADDI  r2, 7"
        assert disassemble(203) == "SET   r0, 3"

    def test_disassemble_register_forms(self):
        assert disassemble(845) == "LOAD  r4, [r5]"
        assert disassemble(945) == "STORE r4, [r5]"
        assert disassemble(712) == "ADD   r1, r2"

    def test_disassemble_branch(self):
        assert disassemble(12) == "BR    r1 if r2"

    def test_disassemble_halt_ignores_operands(self):
        assert disassemble(100) == "HALT"
        assert disassemble(199) == "HALT"
