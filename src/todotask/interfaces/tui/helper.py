import unicodedata


def _char_width(ch: str) -> int:
    """Calculate the width of a character in the terminal."""
    if len(ch) == 0:
        return 0
    # 制御文字
    if ch < " ":
        return 0
    # 結合文字 (濁点、取り消し線など)
    if unicodedata.combining(ch):
        return 0
    # 東アジア文字幅プロパティ
    # F: full-width, W: wide, A: ambiguous を2倍にして返す
    if unicodedata.east_asian_width(ch) in ("F", "W", "A"):
        return 2
    return 1


def _string_width(s: str) -> int:
    """Calculate the width of a string in the terminal."""
    return sum(map(_char_width, s))


def _tail_to_width(s: str, width: int) -> str:
    """Return the longest suffix of `s` that fits in `width` columns."""
    if width <= 0:
        return ""
    used = 0
    start = len(s)
    while start > 0:
        w = _char_width(s[start - 1])
        if used + w > width:
            break
        used += w
        start -= 1
    return s[start:]


def _head_to_width(s: str, width: int) -> str:
    """Return the longest prefix of `s` that fits in `width` columns.

    Zero-width characters right after the last fitting one (e.g. a strike-through
    overlay) are kept with it.
    """
    if width <= 0:
        return ""
    used = 0
    end = 0
    while end < len(s):
        w = _char_width(s[end])
        if used + w > width:
            break
        used += w
        end += 1
    return s[:end]
