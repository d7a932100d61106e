import argparse
import curses

from todotask.interfaces.tui.app import App

# notice を時間切れで消すための再描画間隔 (ms)
REDRAW_INTERVAL_MS = 250


def main(stdscr: curses.window, args: argparse.Namespace | None = None) -> int:
    app = App(
        stdscr,
        id_policy=getattr(args, "id_policy", "max_plus_one"),
        notice_seconds=getattr(args, "notice_seconds", 2.0),
    )
    stdscr.timeout(REDRAW_INTERVAL_MS)
    while True:
        app.draw()
        try:
            key_raw = stdscr.get_wch()
        except curses.error:
            # no input within the redraw interval
            continue
        # strなら文字 (コマンド判定はApp側で制御文字だけ), intならKEY_*
        key = ord(key_raw) if isinstance(key_raw, str) else key_raw
        ch = key_raw if isinstance(key_raw, str) else None
        cont = app.handle_key(key, ch)
        if not cont:
            break
    return 0


def run(args: argparse.Namespace | None = None) -> int:
    return curses.wrapper(main, args)
