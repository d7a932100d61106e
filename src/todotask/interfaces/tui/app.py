import curses
import time

from todotask.core.saver import from_parcel, restore_or_empty, save_state, to_parcel
from todotask.core.store import DeserializationError, TaskStore
from todotask.interfaces.tui.components import ScreenView, todo_screen
from todotask.interfaces.tui.data import AppState, FieldState, Focus, Notice
from todotask.interfaces.tui.style import (
    COMPLETED_COLOR,
    INPUT_COLOR,
    MAIN_THEME_COLOR,
    NOTICE_COLOR,
    SECTION_TITLE_COLOR,
    SELECTED_ROW_COLOR,
    SURPRESSED_COLOR,
)
from todotask.interfaces.tui.view import AppView
from todotask.util.ids import IdPolicy
from todotask.util.logger import setup_logger

logger = setup_logger("todotask", is_stream=False, is_file=True)

KEY_ENTER_CODES = (curses.KEY_ENTER, 10, 13)
KEY_BACKSPACE_CODES = (curses.KEY_BACKSPACE, 127, 8)
KEY_TAB = 9
KEY_ESC = 27
NO_KEY = -1  # 通常文字のときのkey


class App:
    """Curses host: owns the `TaskStore` and translates keys into view callbacks.

    A terminal resize is treated as a teardown/rebuild of the view layer. The
    store is saved to a parcel, dropped, and restored from that parcel.
    """

    def __init__(
        self,
        stdscr: curses.window,
        *,
        id_policy: IdPolicy = "max_plus_one",
        notice_seconds: float = 2.0,
        parcel: str | None = None,
        use_colors: bool = True,
    ) -> None:
        self.stdscr = stdscr
        self.id_policy: IdPolicy = id_policy
        self.notice_seconds = notice_seconds
        self.store = TaskStore(id_policy=id_policy)
        self.state = AppState(field=FieldState())
        self.view = AppView(stdscr, self.state)
        if use_colors:
            self._init_curses()
        if parcel is not None:
            self.rebuild(parcel)

    def _init_curses(self) -> None:
        curses.curs_set(1)
        self.stdscr.keypad(True)  # noqa: FBT003

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            # color pair indexes (idx, foreground, background) with ANSI color codes
            curses.init_pair(MAIN_THEME_COLOR, 166, -1)  # header
            curses.init_pair(INPUT_COLOR, 166, -1)  # input-bar label
            curses.init_pair(SELECTED_ROW_COLOR, -1, 7)  # selected-row
            curses.init_pair(SURPRESSED_COLOR, 8, -1)  # empty message
            curses.init_pair(COMPLETED_COLOR, 8, -1)  # completed row (muted)
            curses.init_pair(SECTION_TITLE_COLOR, 15, -1)  # section title
            curses.init_pair(NOTICE_COLOR, 9, -1)  # notice

    # ---- screen ----------------------------------------------------------

    def screen(self) -> ScreenView:
        """Compose the screen from the current store snapshot."""
        return todo_screen(self.store, on_error=self.notify)

    def draw(self) -> None:
        self.view.draw(self.screen())

    def notify(self, text: str) -> None:
        """Show a short-lived message in the footer."""
        logger.info("Notice: %s", text)
        self.state.notice = Notice(text=text, expires_at=time.monotonic() + self.notice_seconds)

    # ---- lifecycle -------------------------------------------------------

    def teardown(self) -> str:
        """Save the store into a parcel.

        The current view stays in place until `rebuild` replaces it.
        """
        parcel = to_parcel(save_state(self.store))
        logger.debug("Teardown: %d task(s) saved", len(self.store))
        return parcel

    def rebuild(self, parcel: str) -> None:
        """Restore the store from a parcel and build a fresh view.

        A broken parcel leaves an empty list and a notice instead of crashing.
        """
        focus: Focus = self.state.focus
        notice = self.state.notice
        try:
            saved = from_parcel(parcel)
        except DeserializationError:
            logger.exception("Failed to read parcel, starting with an empty list")
            self.store = TaskStore(id_policy=self.id_policy)
            notice = Notice(
                text="Saved tasks could not be restored.",
                expires_at=time.monotonic() + self.notice_seconds,
            )
        else:
            self.store = restore_or_empty(saved, id_policy=self.id_policy)
        self.state = AppState(
            focus=focus,
            field=FieldState(cursor=len(self.store.input_text)),
            notice=notice,
        )
        self.view = AppView(self.stdscr, self.state)
        logger.debug("Rebuild: %d task(s) restored", len(self.store))

    def resize(self) -> None:
        self.rebuild(self.teardown())

    # ---- input bar -------------------------------------------------------

    def _handle_input_key(self, key: int, ch: str | None = None) -> None:  # noqa: C901
        bar = self.screen().input_bar
        fs = self.state.field
        if fs is None:
            fs = self.state.field = FieldState(cursor=len(bar.text))
        text = bar.text
        fs.cursor = max(0, min(fs.cursor, len(text)))

        # 文字入力
        if ch is not None:
            bar.on_text_change(text[: fs.cursor] + ch + text[fs.cursor :])
            fs.cursor += len(ch)
            return

        # Enter: add
        if key in KEY_ENTER_CODES:
            bar.on_add_item()
            fs.cursor = len(self.store.input_text)
            return

        # Backspace: delete left char
        if key in KEY_BACKSPACE_CODES:
            if fs.cursor > 0:
                bar.on_text_change(text[: fs.cursor - 1] + text[fs.cursor :])
                fs.cursor -= 1
            return
        # Delete: delete right char
        if key in (curses.KEY_DC,):
            if fs.cursor < len(text):
                bar.on_text_change(text[: fs.cursor] + text[fs.cursor + 1 :])
            return

        # 左右移動
        if key == curses.KEY_LEFT:
            if fs.cursor > 0:
                fs.cursor -= 1
            return
        if key == curses.KEY_RIGHT:
            if fs.cursor < len(text):
                fs.cursor += 1
            return
        if key == curses.KEY_HOME:
            fs.cursor = 0
            return
        if key == curses.KEY_END:
            fs.cursor = len(text)

    # ---- list ------------------------------------------------------------

    def _handle_list_key(self, key: int, ch: str | None = None) -> bool:
        rows = self.screen().rows()
        if ch in ("q", "Q"):
            return False

        if key in (curses.KEY_UP,) and self.state.selected_index > 0:
            self.state.selected_index -= 1
        elif key in (curses.KEY_DOWN,) and self.state.selected_index < len(rows) - 1:
            self.state.selected_index += 1
        elif key in (curses.KEY_HOME,):
            self.state.selected_index = 0
        elif key in (curses.KEY_END,):
            self.state.selected_index = max(0, len(rows) - 1)
        elif key in (curses.KEY_PPAGE,):
            self.state.selected_index = max(0, self.state.selected_index - self.view.visible_rows())
        elif key in (curses.KEY_NPAGE,):
            self.state.selected_index = min(
                max(0, len(rows) - 1),
                self.state.selected_index + self.view.visible_rows(),
            )
        elif ch == " " or key in KEY_ENTER_CODES:
            if not rows:
                self.notify("No task selected")
                return True
            row = rows[min(self.state.selected_index, len(rows) - 1)]
            row.toggle()
            # 完了/未完了で行が別セクションに移るので、移動先の行を選択し直す
            self._select_row(row.key)
        elif ch in ("x", "X") or key == curses.KEY_DC:
            if not rows:
                self.notify("No task selected")
                return True
            row = rows[min(self.state.selected_index, len(rows) - 1)]
            row.delete()
            self.state.selected_index = max(0, min(self.state.selected_index, len(rows) - 2))
        return True

    def _select_row(self, key: int) -> None:
        for idx, row in enumerate(self.screen().rows()):
            if row.key == key:
                self.state.selected_index = idx
                return

    def handle_key(self, key: int, ch: str | None = None) -> bool:
        """Apply one key press. Returns False when the app should quit.

        `ch` is the str returned by `get_wch()`. Any printable character is text,
        even when its code point collides with a curses `KEY_*` value (e.g. "ć" is
        263 == KEY_BACKSPACE). Only control characters act as commands, and `key`
        is compared against `KEY_*` only when `get_wch()` returned an int.
        """
        key, ch = _normalize_key(key, ch)
        if key == curses.KEY_RESIZE:
            self.resize()
            return True
        if key == KEY_ESC:
            return False
        if key == KEY_TAB:
            self.state.focus = "list" if self.state.focus == "input" else "input"
            return True

        if self.state.focus == "input":
            self._handle_input_key(key, ch)
            return True
        return self._handle_list_key(key, ch)


def _normalize_key(key: int, ch: str | None) -> tuple[int, str | None]:
    """Split one `get_wch()` result into a command code or a text character.

    Returns `(code, None)` for commands and `(NO_KEY, char)` for text.
    """
    if ch is None:
        # 数値で来たASCII文字はテキスト扱い
        if 32 <= key <= 126:  # noqa: PLR2004
            return NO_KEY, chr(key)
        return key, None
    if len(ch) == 1 and (ch < " " or ch == "\x7f"):
        # 制御文字 (Enter/Tab/Esc/Backspace) はASCIIコードで扱う
        return ord(ch), None
    return NO_KEY, ch
