"""
Intcode VM — Program Loader Tests
"""

import pytest

from intcode_vm import ProgramParseError, load_program, parse_program


class TestParseProgram:

    def test_spaces_around_tokens(self):
        assert parse_program("123, 9,45678 ,12,234,2,3,4") == \
            [123, 9, 45678, 12, 234, 2, 3, 4]

    def test_negative_and_plus(self):
        assert parse_program("1,-2,+3") == [1, -2, 3]

    def test_multiline_and_trailing_newline(self):
        assert parse_program("1,9,10,3,\n2,3,11,0,\n99,30,40,50\n") == \
            [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]

    def test_trailing_comma(self):
        assert parse_program("1,2,3,") == [1, 2, 3]

    def test_bad_token_reported(self):
        with pytest.raises(ProgramParseError) as exc_info:
            parse_program("1,2,x3,4")
        assert exc_info.value.token == "x3"
        assert exc_info.value.index == 2
        assert "x3" in str(exc_info.value)

    @pytest.mark.parametrize("text", ["", "1,,2", "1.5", "--1", "1 2"])
    def test_rejected(self, text):
        with pytest.raises(ProgramParseError):
            parse_program(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_program("abc")


class TestLoadProgram:

    def test_load_file(self, program_file):
        path = program_file([1, 0, 0, 0, 99])
        assert load_program(path) == [1, 0, 0, 0, 99]

    def test_load_str_path(self, program_file):
        path = program_file([104, -7, 99])
        assert load_program(str(path)) == [104, -7, 99]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_program(tmp_path / "nope.txt")
