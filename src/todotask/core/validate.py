from collections.abc import Iterable

from pyresults import Err, Ok, Result

from todotask.core.models import TaskRecord

EMPTY_LABEL_MESSAGE = "Task name cannot be empty."


def validate_label(text: str) -> Result[str, str]:
    """Trim the input text and reject it if nothing is left."""
    trimmed = text.strip()
    if len(trimmed) == 0:
        return Err[str, str](EMPTY_LABEL_MESSAGE)
    return Ok[str, str](trimmed)


def detect_duplicate_ids(records: Iterable[TaskRecord]) -> list[int]:
    """Return ids that appear more than once, in order of their second appearance."""
    seen: set[int] = set()
    duplicates: list[int] = []
    for r in records:
        if r.id in seen and r.id not in duplicates:
            duplicates.append(r.id)
        seen.add(r.id)
    return duplicates


def detect_empty_labels(records: Iterable[TaskRecord]) -> list[int]:
    """Return ids of records whose label is empty or whitespace only."""
    return [r.id for r in records if len(r.label.strip()) == 0]
