import curses
import time
from dataclasses import dataclass
from typing import Literal

from todotask.interfaces.tui.components import RowView, ScreenView, SectionView, render_row_line
from todotask.interfaces.tui.data import AppState
from todotask.interfaces.tui.helper import _head_to_width, _string_width, _tail_to_width
from todotask.interfaces.tui.style import (
    COMPLETED_COLOR,
    INPUT_COLOR,
    MAIN_THEME_COLOR,
    NOTICE_COLOR,
    SECTION_TITLE_COLOR,
    SURPRESSED_COLOR,
    HeaderLines,
)
from todotask.util.logger import setup_logger

logger = setup_logger("todotask", is_stream=False, is_file=True)

INPUT_BAR_HEIGHT = 2  # input line + spacer

LineKind = Literal["title", "message", "row", "blank"]


@dataclass
class Line:
    """One visual line of the list area."""

    text: str
    kind: LineKind
    row_index: int | None = None
    row: RowView | None = None


def build_list_lines(screen: ScreenView) -> list[Line]:
    """Flatten both sections into visual lines, numbering rows in display order."""
    lines: list[Line] = []
    row_index = 0
    for i, section in enumerate(screen.sections):
        if i > 0:
            lines.append(Line(text="", kind="blank"))
        lines.extend(_section_lines(section, row_index))
        row_index += len(section.rows)
    return lines


def _section_lines(section: SectionView, first_index: int) -> list[Line]:
    # 空のときはタイトルを出さずにメッセージだけ
    if section.is_empty:
        return [Line(text=section.message or "", kind="message")]
    lines = [Line(text=section.title or "", kind="title")]
    for offset, row in enumerate(section.rows):
        lines.append(
            Line(
                text=f"  {render_row_line(row)}",
                kind="row",
                row_index=first_index + offset,
                row=row,
            ),
        )
    return lines


@dataclass
class AppView:
    """AppView class to draw overall app screen.

    Attributes:
        stdscr: curses.window
        state: AppState
    """

    stdscr: curses.window
    state: AppState

    def draw(self, screen: ScreenView) -> None:
        """Draw overall app screen."""
        self.stdscr.erase()
        max_y, max_x = self.stdscr.getmaxyx()
        self.state.window_width = max_x
        self.state.window_height = max_y
        if max_y < 2 or max_x < 2:
            # give up drawing if terminal size is too small
            self.stdscr.refresh()
            return

        header_height = HeaderLines.height()
        footer_height = 1
        content_y = header_height + INPUT_BAR_HEIGHT
        content_height = max_y - content_y - footer_height

        self._draw_header(0, max_x)
        self._draw_footer(max_y - 1, max_x)
        if content_height > 0:
            self._draw_list(screen, content_y, content_height, max_x)
        # 入力欄は最後に描いてカーソルをそこに残す
        self._draw_input_bar(screen, header_height, max_x)

        self.stdscr.refresh()

    # header/footer
    def _draw_header(self, y: int, width: int) -> None:
        title = HeaderLines.title()
        helps = HeaderLines.help(self.state.focus)
        if curses.has_colors():
            self.stdscr.attron(curses.color_pair(MAIN_THEME_COLOR))
        self._safe_addnstr(y, 0, title.ljust(width), width)
        self._safe_addnstr(y + 1, 0, helps.ljust(width), width)
        if curses.has_colors():
            self.stdscr.attroff(curses.color_pair(MAIN_THEME_COLOR))

    def _draw_footer(self, y: int, width: int) -> None:
        notice = self.state.notice
        if notice is not None and notice.is_expired(time.monotonic()):
            self.state.notice = None
            notice = None
        msg = notice.text if notice is not None else ""
        attr = curses.color_pair(NOTICE_COLOR) if curses.has_colors() and msg else 0
        if attr:
            self.stdscr.attron(attr)
        self._safe_addnstr(y, 0, msg.ljust(width), width)
        if attr:
            self.stdscr.attroff(attr)

    # input bar
    def _draw_input_bar(self, screen: ScreenView, y: int, width: int) -> None:
        bar = screen.input_bar
        prefix = f"{bar.placeholder}: "
        button = f" [{bar.button_label}]"
        field_width = max(0, width - _string_width(prefix) - _string_width(button) - 1)

        cursor = len(bar.text) if self.state.field is None else self.state.field.cursor
        cursor = max(0, min(cursor, len(bar.text)))
        # show last part if input overflows
        before = _tail_to_width(bar.text[:cursor], field_width)
        shown = (before + bar.text[cursor:])[: max(0, field_width)]

        attr = curses.color_pair(INPUT_COLOR) if curses.has_colors() else 0
        if attr:
            self.stdscr.attron(attr)
        self._safe_addnstr(y, 0, prefix, width)
        if attr:
            self.stdscr.attroff(attr)
        x = _string_width(prefix)
        self._safe_addnstr(y, x, shown, field_width)
        self._safe_addnstr(y, x + field_width, button, width - x - field_width)

        # ---- draw text cursor ---------------------------------------------
        try:
            if self.state.focus == "input":
                curses.curs_set(1)
                cursor_col = x + _string_width(before)
                max_y, max_x = self.stdscr.getmaxyx()
                if 0 <= y < max_y and 0 <= cursor_col < max_x:
                    self.stdscr.move(y, cursor_col)
                else:
                    _msg = f"Cursor position out of screen: row={y}, col={cursor_col}"
                    logger.warning(_msg)
            else:
                curses.curs_set(0)
        except curses.error:
            # cursor control may be failed depending on the terminal environment
            logger.warning("Failed to set cursor visibility")

    # list view
    def _draw_list(
        self,
        screen: ScreenView,
        y: int,
        height: int,
        width: int,
    ) -> None:
        lines = build_list_lines(screen)
        total_rows = len(screen.rows())

        # selected_indexをclamp
        self.state.selected_index = max(0, min(self.state.selected_index, max(0, total_rows - 1)))

        # 選択行が見えるようにlist_offsetを調整
        selected_line = next(
            (i for i, line in enumerate(lines) if line.row_index == self.state.selected_index),
            None,
        )
        if selected_line is not None:
            if selected_line < self.state.list_offset:
                self.state.list_offset = selected_line
            elif selected_line >= self.state.list_offset + height:
                self.state.list_offset = selected_line - height + 1
        self.state.list_offset = max(0, min(self.state.list_offset, max(0, len(lines) - height)))

        start = self.state.list_offset
        end = min(start + height, len(lines))
        for i, line in enumerate(lines[start:end]):
            attrs = self._line_attrs(line)
            if attrs:
                self.stdscr.attron(attrs)
            self._safe_addnstr(y + i, 0, line.text, width)
            if attrs:
                self.stdscr.attroff(attrs)

    def _line_attrs(self, line: Line) -> int:
        attrs = 0
        if line.kind == "title":
            attrs |= curses.A_BOLD
            if curses.has_colors():
                attrs |= curses.color_pair(SECTION_TITLE_COLOR)
        elif line.kind == "message":
            if curses.has_colors():
                attrs |= curses.color_pair(SURPRESSED_COLOR)
        elif line.kind == "row" and line.row is not None:
            if line.row.struck:
                attrs |= curses.A_DIM
                if curses.has_colors():
                    attrs |= curses.color_pair(COMPLETED_COLOR)
            if self.state.focus == "list" and line.row_index == self.state.selected_index:
                attrs |= curses.A_REVERSE
        return attrs

    def _safe_addnstr(self, y: int, x: int, s: str, n: int) -> None:
        """Add a string to the screen safely."""
        max_y, max_x = self.stdscr.getmaxyx()
        # 画面外なら描かない
        if y < 0 or y >= max_y or x < 0 or x >= max_x:
            return
        # 右端を超えないようにクリップ
        limit = max_x - x
        if limit <= 0 or n <= 0:
            return
        # 最終行では右端1マスを開ける
        if y == max_y - 1 and limit == max_x:
            limit -= 1

        s = s.replace("\t", " ")  # タブがいると幅が読めないので潰す
        # nとlimitは表示幅 (桁数). 結合文字があるのでコードポイント数では切らない
        chunk = _head_to_width(s, min(n, limit))

        # 例外が発生したら1文字ずつ減らして再試行
        while chunk:
            try:
                self.stdscr.addnstr(y, x, chunk, len(chunk))
            except curses.error:
                chunk = chunk[:-1]
            else:
                return

    def visible_rows(self) -> int:
        """Number of list lines that fit the current window."""
        content_height = self.state.window_height - HeaderLines.height() - INPUT_BAR_HEIGHT - 1
        return max(1, content_height)
