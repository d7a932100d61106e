import dataclasses
import unittest

import pytest

from todotask.core.models import TaskRecord


class TestTaskRecord(unittest.TestCase):
    def test_defaults_to_not_completed(self) -> None:
        r = TaskRecord(id=1, label="a")
        assert r.is_completed is False

    def test_with_completed_returns_new_record(self) -> None:
        r = TaskRecord(id=1, label="a")
        done = r.with_completed(True)
        assert done == TaskRecord(id=1, label="a", is_completed=True)
        assert r.is_completed is False
        assert done is not r

    def test_to_tuple_is_positional(self) -> None:
        assert TaskRecord(id=3, label="x", is_completed=True).to_tuple() == (3, "x", True)

    def test_is_immutable(self) -> None:
        r = TaskRecord(id=1, label="a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.label = "b"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
