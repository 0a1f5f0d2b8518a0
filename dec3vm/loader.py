"""
dec3vm — Program Image Loader

Image format: whitespace-separated decimal integers, one word each, in
address order starting at 000. No header, no length field. Line breaks
are just whitespace; they are tracked only for error messages.

    203 204
    100

An image may be shorter than memory (the rest stays 000) but not longer.
"""

import logging
import os
from pathlib import Path
from typing import List

from .cpu.word import InvalidEncoding, decode
from .mem.memory import ImageTooLarge, MEMORY_SIZE

logger = logging.getLogger(__name__)

__all__ = ['LoadError', 'ImageTooLarge', 'parse_image', 'load_file']


class LoadError(Exception):
    """Image text could not be read or parsed."""
    pass


def parse_image(text: str, max_words: int = MEMORY_SIZE) -> List[int]:
    """Parse image text into a list of word values.

    Raises:
        LoadError: a token is not a decimal integer
        InvalidEncoding: a value is outside 0–999
        ImageTooLarge: more than max_words values
    """
    values = []
    for lineno, line in enumerate(text.splitlines(), 1):
        for token in line.split():
            try:
                value = int(token, 10)
            except ValueError:
                raise LoadError(
                    f"line {lineno}: expected an integer, got {token!r}") from None
            try:
                decode(value)
            except InvalidEncoding as e:
                raise InvalidEncoding(f"line {lineno}: {e}") from None
            values.append(value)

    if len(values) > max_words:
        raise ImageTooLarge(len(values), 0, max_words)
    return values


def load_file(path, max_words: int = MEMORY_SIZE) -> List[int]:
    """Read and parse an image file (UTF-8 text)."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise LoadError(
            f"could not open file {str(path)!r}: {e.strerror or e} "
            f"(current working directory: {os.getcwd()})") from e

    values = parse_image(text, max_words)
    logger.info(f"Read {len(values)} words from {path}")
    return values
