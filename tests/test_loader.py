"""
Image loader tests.
"""

import pytest

from dec3vm.cpu.word import InvalidEncoding
from dec3vm.loader import LoadError, ImageTooLarge, parse_image, load_file


class TestParseImage:
    def test_whitespace_separated(self):
        assert parse_image("203 204\n100\n") == [203, 204, 100]

    def test_tabs_and_blank_lines(self):
        assert parse_image("\n\t7\t\n\n  8  \n") == [7, 8]

    def test_empty_text(self):
        assert parse_image("") == []

    def test_leading_zeros(self):
        assert parse_image("007 099") == [7, 99]

    def test_non_integer_token(self):
        with pytest.raises(LoadError) as exc:
            parse_image("12 abc")
        assert "line 1" in str(exc.value)
        assert "'abc'" in str(exc.value)

    def test_value_out_of_range_names_line(self):
        with pytest.raises(InvalidEncoding) as exc:
            parse_image("5\n1000\n")
        assert "line 2" in str(exc.value)

    def test_negative_value(self):
        with pytest.raises(InvalidEncoding):
            parse_image("-1")

    def test_exactly_memory_size(self):
        assert len(parse_image("0 " * 1000)) == 1000

    def test_too_many_words(self):
        with pytest.raises(ImageTooLarge):
            parse_image("0 " * 1001)

    def test_custom_limit(self):
        with pytest.raises(ImageTooLarge):
            parse_image("1 2 3", max_words=2)


class TestLoadFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "prog.txt"
        path.write_text("203 204 100\n", encoding="utf-8")
        assert load_file(path) == [203, 204, 100]

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "prog.txt"
        path.write_text("100", encoding="utf-8")
        assert load_file(str(path)) == [100]

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as exc:
            load_file(tmp_path / "missing.txt")
        assert "could not open file" in str(exc.value)
        assert "current working directory" in str(exc.value)
