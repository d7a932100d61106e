MAIN_THEME_COLOR = 1
INPUT_COLOR = 2
SELECTED_ROW_COLOR = 3
SURPRESSED_COLOR = 4
COMPLETED_COLOR = 5
SECTION_TITLE_COLOR = 6
NOTICE_COLOR = 7

CHECKED_MARK = "[x]"
UNCHECKED_MARK = "[ ]"


class HeaderLines:
    """Header lines for the TUI."""

    @classmethod
    def height(cls) -> int:
        return 2

    @classmethod
    def title(cls) -> str:
        return "--- todotask (TUI) > In-memory TODO list ---"

    @classmethod
    def help(cls, focus: str) -> str:
        if focus == "input":
            return "Input: [Enter Add] [Tab List] [Esc Quit]"
        return "List: [↑/↓ Move] [Space Done/Undo] [(x)/Del Delete] [Tab Input] [(q)/Esc Quit]"
