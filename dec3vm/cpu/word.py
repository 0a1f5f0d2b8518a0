"""
dec3vm — Word Codec

One memory word is a decimal value 0–999. Fetched as an instruction it
reads as three digits:

    hundreds  operation  (0–9)
    tens      x operand  (0–9)
    units     y operand  (0–9)

  e.g. 427 → operation=4, x=2, y=7 → "add 7 to register 2"

Read or written as data (load/store indirect) the same word is just the
number 427. The codec is the only place that converts between the two
views.
"""

from dataclasses import dataclass

WORD_MIN = 0
WORD_MAX = 999
WORD_MODULUS = WORD_MAX + 1
DIGIT_MAX = 9


class InvalidEncoding(ValueError):
    """Raised when a value cannot be represented as a word."""
    pass


@dataclass(frozen=True)
class Word:
    """Structured view of one memory word: (operation, x, y)."""
    operation: int = 0
    x: int = 0
    y: int = 0

    def __post_init__(self):
        for name in ('operation', 'x', 'y'):
            digit = getattr(self, name)
            if type(digit) is not int or not 0 <= digit <= DIGIT_MAX:
                raise InvalidEncoding(
                    f"Word {name} must be a digit 0-{DIGIT_MAX}, got {digit!r}")

    def to_int(self) -> int:
        """427 ← (4, 2, 7)"""
        return self.operation * 100 + self.x * 10 + self.y

    @classmethod
    def from_int(cls, value: int) -> 'Word':
        """(4, 2, 7) ← 427. Truncating division, no rounding."""
        if type(value) is not int or not WORD_MIN <= value <= WORD_MAX:
            raise InvalidEncoding(
                f"Word value must be an integer {WORD_MIN}-{WORD_MAX}, got {value!r}")
        return cls(value // 100, value // 10 % 10, value % 10)

    def __int__(self) -> int:
        return self.to_int()

    def __str__(self) -> str:
        return f"{self.to_int():03d}"


def decode(value: int) -> Word:
    """Integer → Word. Raises InvalidEncoding outside 0–999."""
    return Word.from_int(value)


def encode(word: Word) -> int:
    """Word → integer 0–999."""
    return word.to_int()


ZERO_WORD = Word(0, 0, 0)
