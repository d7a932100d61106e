from dataclasses import dataclass
from typing import Literal

Focus = Literal[
    "input",
    "list",
]


@dataclass
class Notice:
    """Short-lived footer message, dropped once `expires_at` (monotonic seconds) has passed."""

    text: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass
class FieldState:
    """Cursor of the single-line input bar. The text itself lives in the store."""

    cursor: int = 0  # カーソル位置


@dataclass
class AppState:
    """UI-only state. Task data is owned by `TaskStore`, never copied here."""

    focus: Focus = "input"
    selected_index: int = 0  # 表示順に並べた全行のインデックス
    field: FieldState | None = None
    notice: Notice | None = None

    # UI用
    window_width: int = 0
    window_height: int = 0

    # scroll用
    list_offset: int = 0  # list viewのstart rowのオフセット
