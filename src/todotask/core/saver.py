"""Save/restore contract for a transient UI teardown/rebuild.

The host calls `save_state` right before the view layer is torn down and
`restore_store` (or `restore_or_empty`) once it has been rebuilt. Records travel
as fixed-arity `(id, label, is_completed)` tuples, the pending input text as an
opaque string.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import yaml  # type: ignore[import-untyped]
from pyresults import Err, Ok, Result

from todotask.core.models import TaskRecord
from todotask.core.store import DeserializationError, TaskStore
from todotask.core.validate import detect_duplicate_ids, detect_empty_labels
from todotask.util.ids import IdPolicy
from todotask.util.logger import setup_logger

logger = setup_logger("todotask", is_stream=False, is_file=True)

RecordTuple = tuple[int, str, bool]
RECORD_ARITY = 3


def serialize(records: Sequence[TaskRecord]) -> list[RecordTuple]:
    if len(records) == 0:
        return []
    return [r.to_tuple() for r in records]


def parse_record(raw: Any) -> Result[TaskRecord, str]:  # noqa: ANN401
    """Map one saved tuple back to a `TaskRecord` by position."""
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        return Err(f"Saved record is not a sequence: {raw!r}")
    if len(raw) < RECORD_ARITY:
        return Err(f"Saved record has {len(raw)} fields, expected {RECORD_ARITY}: {raw!r}")
    task_id, label, is_completed = raw[0], raw[1], raw[2]
    # boolはintのサブクラスなので先に弾く
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        return Err(f"Saved id is not an int: {task_id!r}")
    if not isinstance(label, str):
        return Err(f"Saved label is not a str: {label!r}")
    if not isinstance(is_completed, bool):
        return Err(f"Saved completion flag is not a bool: {is_completed!r}")
    return Ok(TaskRecord(id=task_id, label=label, is_completed=is_completed))


def deserialize(saved: Sequence[Any]) -> list[TaskRecord]:
    """Rebuild records from `serialize` output.

    Raises:
        DeserializationError: an entry is too short or has a field of the wrong type.
    """
    records: list[TaskRecord] = []
    for idx, raw in enumerate(saved):
        match parse_record(raw):
            case Ok(record):
                records.append(record)
            case Err(e):
                _msg = f"Record #{idx}: {e}"
                raise DeserializationError(_msg)
    return records


@dataclass(frozen=True)
class SavedState:
    """What the host keeps while the view layer does not exist."""

    records: list[RecordTuple] = field(default_factory=list)
    input_text: str = ""
    last_issued_id: int = 0


def save_state(store: TaskStore) -> SavedState:
    return SavedState(
        records=serialize(store.tasks()),
        input_text=store.input_text,
        last_issued_id=store.last_issued_id,
    )


def restore_store(state: SavedState, *, id_policy: IdPolicy = "max_plus_one") -> TaskStore:
    """Rebuild a `TaskStore` from a `SavedState`.

    Raises:
        DeserializationError: malformed records, duplicate ids, empty labels or a non-str input text.
    """
    records = deserialize(state.records)
    duplicates = detect_duplicate_ids(records)
    if duplicates:
        _msg = f"Duplicate task ids in saved state: {duplicates}"
        raise DeserializationError(_msg)
    empty_labels = detect_empty_labels(records)
    if empty_labels:
        _msg = f"Empty task labels in saved state: {empty_labels}"
        raise DeserializationError(_msg)
    if not isinstance(state.input_text, str):
        _msg = f"Saved input text is not a str: {state.input_text!r}"
        raise DeserializationError(_msg)
    last_issued = state.last_issued_id
    if isinstance(last_issued, bool) or not isinstance(last_issued, int):
        _msg = f"Saved last issued id is not an int: {last_issued!r}"
        raise DeserializationError(_msg)
    return TaskStore(
        records,
        input_text=state.input_text,
        id_policy=id_policy,
        last_issued_id=last_issued,
    )


def restore_or_empty(state: SavedState, *, id_policy: IdPolicy = "max_plus_one") -> TaskStore:
    """Like `restore_store`, but a broken bundle yields an empty store instead of an error.

    The pending input text is kept when it is still a string.
    """
    try:
        return restore_store(state, id_policy=id_policy)
    except DeserializationError:
        logger.exception("Failed to restore saved state, starting with an empty list")
        text = state.input_text if isinstance(state.input_text, str) else ""
        return TaskStore(input_text=text, id_policy=id_policy)


# ---- parcel (YAML text) ----------------------------------------------------


def to_parcel(state: SavedState) -> str:
    """Flatten a `SavedState` into YAML text so that no live object crosses the rebuild."""
    raw = {
        "records": [list(r) for r in state.records],
        "input_text": state.input_text,
        "last_issued_id": state.last_issued_id,
    }
    return yaml.safe_dump(raw, allow_unicode=True, sort_keys=True)


def from_parcel(parcel: str) -> SavedState:
    """Parse YAML text produced by `to_parcel`.

    Raises:
        DeserializationError: invalid YAML or an unexpected layout.
    """
    try:
        raw = yaml.safe_load(parcel)
    except yaml.YAMLError as e:
        _msg = f"Failed to load parcel: {e}"
        raise DeserializationError(_msg) from e
    if raw is None:
        return SavedState()
    if not isinstance(raw, dict):
        _msg = f"Parcel is not a mapping: {type(raw).__name__}"
        raise DeserializationError(_msg)
    records = raw.get("records") or []
    if not isinstance(records, list):
        _msg = f"Parcel records is not a list: {type(records).__name__}"
        raise DeserializationError(_msg)
    return SavedState(
        records=[tuple(r) if isinstance(r, list) else r for r in records],
        input_text=raw.get("input_text", ""),
        last_issued_id=raw.get("last_issued_id", 0),
    )
