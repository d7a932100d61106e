from pyresults import Err, Ok, Result

from todotask.core.models import TaskRecord
from todotask.core.validate import validate_label
from todotask.util.ids import IdAllocator, IdPolicy
from todotask.util.logger import setup_logger

logger = setup_logger("todotask", is_stream=False, is_file=True)


class StoreError(Exception):
    """Task store の操作失敗を表す基底例外。"""


class ValidationError(StoreError):
    """Raised by `TaskStore.add_task` when the trimmed input text is empty."""


class DeserializationError(StoreError):
    """Raised when a saved state bundle cannot be turned back into records."""


class TaskStore:
    """Single source of truth for the task list and the pending input text.

    The store owns the ordered list of `TaskRecord` and the text typed in the
    input bar. Views receive snapshots (`tasks`, `active_tasks`, `completed_tasks`,
    `input_text`) and call back into `set_input_text`, `add_task`,
    `toggle_completion` and `delete_task`. Nothing else mutates the list.

    Public API:
        - set_input_text(): replace the pending input text
        - add_task(): validate the input text and append a new record
        - toggle_completion(): set the completion flag of one record
        - delete_task(): remove one record
        - tasks() / active_tasks() / completed_tasks(): ordered snapshots
        - get_task(): id lookup
    """

    def __init__(
        self,
        records: list[TaskRecord] | None = None,
        *,
        input_text: str = "",
        id_policy: IdPolicy = "max_plus_one",
        last_issued_id: int = 0,
    ) -> None:
        self._records: list[TaskRecord] = list[TaskRecord](records or [])
        self._input_text = input_text
        self._ids = IdAllocator(id_policy, last_issued=last_issued_id)
        self._ids.observe(r.id for r in self._records)

    # ---- 入力テキスト ----

    @property
    def input_text(self) -> str:
        return self._input_text

    def set_input_text(self, text: str) -> None:
        self._input_text = text

    @property
    def id_policy(self) -> IdPolicy:
        return self._ids.policy

    @property
    def last_issued_id(self) -> int:
        return self._ids.last_issued

    # ---- 読み出し ----

    def tasks(self) -> tuple[TaskRecord, ...]:
        return tuple[TaskRecord, ...](self._records)

    def active_tasks(self) -> list[TaskRecord]:
        return [r for r in self._records if not r.is_completed]

    def completed_tasks(self) -> list[TaskRecord]:
        return [r for r in self._records if r.is_completed]

    def get_task(self, task_id: int) -> Result[TaskRecord, str]:
        for r in self._records:
            if r.id == task_id:
                return Ok[TaskRecord, str](r)
        _msg = f"Task not found: {task_id}"
        return Err[TaskRecord, str](_msg)

    def __len__(self) -> int:
        return len(self._records)

    # ---- 変更操作 ----

    def add_task(self) -> TaskRecord:
        """Append a record built from the current input text.

        Raises:
            ValidationError: the trimmed input text is empty. Nothing is changed.
        """
        match validate_label(self._input_text):
            case Ok(label):
                new_id = self._ids.next_id(r.id for r in self._records)
                record = TaskRecord(id=new_id, label=label)
                self._records.append(record)
                self._input_text = ""
                logger.debug("Added task %d: %s", record.id, record.label)
                return record
            case Err(e):
                raise ValidationError(e)
            case _:
                _msg = "Unexpected error"
                raise StoreError(_msg)

    def toggle_completion(self, task_id: int, new_value: bool) -> None:  # noqa: FBT001
        """Replace the record with `task_id` by a copy with `is_completed=new_value`.

        The record keeps its position. Unknown ids are ignored.
        """
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Toggle ignored, task %d is gone", task_id)
            return
        self._records[idx] = self._records[idx].with_completed(new_value)

    def delete_task(self, task_id: int) -> None:
        """Remove the first record with `task_id`. Unknown ids are ignored."""
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Delete ignored, task %d is gone", task_id)
            return
        removed = self._records.pop(idx)
        logger.debug("Deleted task %d: %s", removed.id, removed.label)

    def _index_of(self, task_id: int) -> int | None:
        for idx, r in enumerate(self._records):
            if r.id == task_id:
                return idx
        return None
