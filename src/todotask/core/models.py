from dataclasses import astuple, dataclass, replace


@dataclass(frozen=True)
class TaskRecord:
    """One to-do entry.

    Records are immutable snapshots. A completion change produces a new record
    through `with_completed`, the store swaps it in at the same position.
    """

    id: int
    label: str
    is_completed: bool = False

    def with_completed(self, value: bool) -> "TaskRecord":  # noqa: FBT001
        return replace(self, is_completed=value)

    def to_tuple(self) -> tuple[int, str, bool]:
        return astuple(self)  # type: ignore[return-value]
