"""Stateless view functions.

Each function receives data plus callbacks and returns a frozen view model with
the callbacks already bound. They never touch the store. Only the screen
composition knows about `TaskStore`, and only through its public operations.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from todotask.core.models import TaskRecord
from todotask.core.store import TaskStore, ValidationError
from todotask.interfaces.tui.style import CHECKED_MARK, UNCHECKED_MARK

ACTIVE_TITLE = "Items"
ACTIVE_EMPTY_MESSAGE = "No items yet!"
COMPLETED_TITLE = "Completed Items"
COMPLETED_EMPTY_MESSAGE = "No completed items yet."
INPUT_PLACEHOLDER = "Enter the task name"
ADD_BUTTON_LABEL = "Add"


@dataclass(frozen=True)
class RowView:
    key: int
    label: str
    checked: bool
    struck: bool  # 完了済みは取り消し線+減光で表示
    on_checked_change: Callable[[bool], None]
    on_delete: Callable[[], None]

    def check(self, value: bool) -> None:  # noqa: FBT001
        self.on_checked_change(value)

    def toggle(self) -> None:
        self.on_checked_change(not self.checked)

    def delete(self) -> None:
        self.on_delete()


@dataclass(frozen=True)
class SectionView:
    """A titled list of rows, or only the empty-state message when there are none."""

    title: str | None
    rows: tuple[RowView, ...]
    message: str | None

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 0


@dataclass(frozen=True)
class InputBarView:
    text: str
    placeholder: str
    button_label: str
    on_text_change: Callable[[str], None]
    on_add_item: Callable[[], None]


@dataclass(frozen=True)
class ScreenView:
    input_bar: InputBarView
    sections: tuple[SectionView, SectionView]

    def rows(self) -> list[RowView]:
        """All rows of all sections in display order."""
        return [row for section in self.sections for row in section.rows]


def item_row(
    item: TaskRecord,
    on_checked_change: Callable[[bool], None],
    on_delete: Callable[[], None],
) -> RowView:
    return RowView(
        key=item.id,
        label=item.label,
        checked=item.is_completed,
        struck=item.is_completed,
        on_checked_change=on_checked_change,
        on_delete=on_delete,
    )


def list_section(
    title: str,
    items: Sequence[TaskRecord],
    empty_message: str,
    on_item_checked_change: Callable[[TaskRecord, bool], None],
    on_item_deleted: Callable[[TaskRecord], None],
) -> SectionView:
    if len(items) == 0:
        return SectionView(title=None, rows=(), message=empty_message)

    def _row(item: TaskRecord) -> RowView:
        return item_row(
            item,
            on_checked_change=lambda checked: on_item_checked_change(item, checked),
            on_delete=lambda: on_item_deleted(item),
        )

    return SectionView(title=title, rows=tuple(_row(item) for item in items), message=None)


def input_bar(
    text: str,
    on_text_change: Callable[[str], None],
    on_add_item: Callable[[], None],
) -> InputBarView:
    return InputBarView(
        text=text,
        placeholder=INPUT_PLACEHOLDER,
        button_label=ADD_BUTTON_LABEL,
        on_text_change=on_text_change,
        on_add_item=on_add_item,
    )


def todo_screen(store: TaskStore, on_error: Callable[[str], None]) -> ScreenView:
    """Wire the store's partitions and operations into the screen's view models.

    A `ValidationError` from `add_task` is handed to `on_error` (the host's
    notice) and goes no further.
    """

    def _on_add_item() -> None:
        try:
            store.add_task()
        except ValidationError as e:
            on_error(str(e))

    def _on_checked_change(item: TaskRecord, checked: bool) -> None:  # noqa: FBT001
        store.toggle_completion(item.id, checked)

    def _on_deleted(item: TaskRecord) -> None:
        store.delete_task(item.id)

    return ScreenView(
        input_bar=input_bar(store.input_text, store.set_input_text, _on_add_item),
        sections=(
            list_section(
                ACTIVE_TITLE,
                store.active_tasks(),
                ACTIVE_EMPTY_MESSAGE,
                _on_checked_change,
                _on_deleted,
            ),
            list_section(
                COMPLETED_TITLE,
                store.completed_tasks(),
                COMPLETED_EMPTY_MESSAGE,
                _on_checked_change,
                _on_deleted,
            ),
        ),
    )


def render_row_line(row: RowView) -> str:
    mark = CHECKED_MARK if row.checked else UNCHECKED_MARK
    label = strike(row.label) if row.struck else row.label
    return f"{mark} {label}"


def render_section_lines(section: SectionView) -> list[str]:
    """Plain-text form of a section: title and rows, or only the empty message."""
    if section.is_empty:
        return [section.message or ""]
    return [section.title or "", *[render_row_line(row) for row in section.rows]]


def strike(text: str) -> str:
    """Strike-through using U+0336 COMBINING LONG STROKE OVERLAY."""
    return "".join(f"{ch}\u0336" for ch in text)
