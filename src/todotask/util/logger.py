import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from todotask.util.dirs import DEFAULT_HOME, ensure_dirs

ROOT_LOGGER_NAME = "todotask"
FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_mode(*, is_debug: bool) -> None:
    level = logging.DEBUG if is_debug else logging.INFO
    logging.basicConfig(level=level)
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def setup_logger(
    name: str,
    *,
    is_stream: bool = True,
    is_file: bool = True,
) -> logging.Logger:
    logger = logging.getLogger(name)
    # 同じloggerを何度もsetupしてもhandlerが重複しないようにする
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    # curses画面にrootのstderr出力が混ざらないようにする
    logger.propagate = False

    if is_stream or not is_file:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.DEBUG)
        stream_handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(stream_handler)

    if is_file:
        ensure_dirs()
        time_rotate_file_handler = TimedRotatingFileHandler(
            (Path(DEFAULT_HOME) / f"{name.lower()}.log").as_posix(),
            when="MIDNIGHT",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        time_rotate_file_handler.setLevel(logging.DEBUG)
        time_rotate_file_handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(time_rotate_file_handler)

    return logger
