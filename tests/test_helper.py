import unittest

from todotask.interfaces.tui.components import strike
from todotask.interfaces.tui.helper import _head_to_width, _string_width, _tail_to_width


class TestStringWidth(unittest.TestCase):
    def test_ascii(self) -> None:
        assert _string_width("abc") == 3

    def test_wide_chars(self) -> None:
        assert _string_width("タスク") == 6

    def test_strike_has_same_width(self) -> None:
        assert _string_width(strike("abc")) == 3


class TestTailToWidth(unittest.TestCase):
    def test_fits(self) -> None:
        assert _tail_to_width("abc", 5) == "abc"

    def test_cut_from_left(self) -> None:
        assert _tail_to_width("abcdef", 3) == "def"

    def test_wide_chars_not_split(self) -> None:
        assert _tail_to_width("aタスク", 5) == "スク"

    def test_zero_width(self) -> None:
        assert _tail_to_width("abc", 0) == ""


class TestHeadToWidth(unittest.TestCase):
    def test_cut_from_right(self) -> None:
        assert _head_to_width("abcdef", 3) == "abc"

    def test_wide_chars_not_split(self) -> None:
        assert _head_to_width("タスクa", 5) == "タス"

    def test_struck_text_counts_columns(self) -> None:
        assert _head_to_width(strike("abcdef"), 4) == strike("abcd")

    def test_zero_width(self) -> None:
        assert _head_to_width("abc", 0) == ""


if __name__ == "__main__":
    unittest.main()
