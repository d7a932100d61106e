import random
import unittest

import pytest

from todotask.core.models import TaskRecord
from todotask.core.store import StoreError, TaskStore, ValidationError


def _add(store: TaskStore, text: str) -> TaskRecord:
    store.set_input_text(text)
    return store.add_task()


class TestInputText(unittest.TestCase):
    def test_set_input_text_is_verbatim(self) -> None:
        st = TaskStore()
        st.set_input_text("  draft  ")
        assert st.input_text == "  draft  "


class TestAddTask(unittest.TestCase):
    """add_task のバリデーションと id 採番"""

    def test_empty_input_raises_and_keeps_state(self) -> None:
        st = TaskStore()
        _add(st, "a")
        for text in ("", "   "):
            st.set_input_text(text)
            with pytest.raises(ValidationError) as exc:
                st.add_task()
            assert str(exc.value) == "Task name cannot be empty."
            assert st.tasks() == (TaskRecord(1, "a"),)
            # 失敗時は入力テキストも消さない
            assert st.input_text == text

    def test_validation_error_is_store_error(self) -> None:
        assert issubclass(ValidationError, StoreError)

    def test_label_is_trimmed_and_input_cleared(self) -> None:
        st = TaskStore()
        r = _add(st, " a ")
        assert r.label == "a"
        assert r.is_completed is False
        assert st.input_text == ""

    def test_ids_are_one_two_three(self) -> None:
        st = TaskStore()
        ids = [_add(st, t).id for t in ("x", "y", "z")]
        assert ids == [1, 2, 3]
        assert [r.label for r in st.tasks()] == ["x", "y", "z"]

    def test_id_after_deleting_middle_is_max_plus_one(self) -> None:
        st = TaskStore()
        for t in ("x", "y", "z"):
            _add(st, t)
        st.delete_task(2)
        r = _add(st, "w")
        assert r.id == max(1, 3) + 1 == 4

    def test_id_is_reused_after_deleting_max(self) -> None:
        st = TaskStore()
        _add(st, "x")
        _add(st, "y")
        st.delete_task(2)
        r = _add(st, "w")
        assert r.id == 2

    def test_only_task_deleted_then_id_one_again(self) -> None:
        st = TaskStore()
        _add(st, "x")
        st.delete_task(1)
        assert _add(st, "y").id == 1

    def test_counter_policy_does_not_reuse(self) -> None:
        st = TaskStore(id_policy="counter")
        _add(st, "x")
        _add(st, "y")
        st.delete_task(2)
        assert _add(st, "w").id == 3

    def test_ids_stay_unique_under_random_ops(self) -> None:
        rng = random.Random(1234)
        for policy in ("max_plus_one", "counter"):
            st = TaskStore(id_policy=policy)  # type: ignore[arg-type]
            for step in range(300):
                ids = [r.id for r in st.tasks()]
                if ids and rng.random() < 0.4:
                    st.delete_task(rng.choice(ids))
                else:
                    _add(st, f"task {step}")
                ids = [r.id for r in st.tasks()]
                assert len(ids) == len(set(ids))


class TestToggleCompletion(unittest.TestCase):
    def test_toggle_twice_is_idempotent_and_keeps_position(self) -> None:
        st = TaskStore()
        for t in ("a", "b", "c"):
            _add(st, t)
        st.toggle_completion(2, True)
        st.toggle_completion(2, True)
        assert st.tasks()[1] == TaskRecord(2, "b", is_completed=True)
        assert [r.id for r in st.active_tasks()] == [1, 3]
        assert [r.id for r in st.completed_tasks()] == [2]

    def test_toggle_back(self) -> None:
        st = TaskStore()
        _add(st, "a")
        st.toggle_completion(1, True)
        st.toggle_completion(1, False)
        assert st.tasks() == (TaskRecord(1, "a"),)

    def test_toggle_absent_is_noop(self) -> None:
        st = TaskStore()
        _add(st, "a")
        st.toggle_completion(999, True)
        assert st.tasks() == (TaskRecord(1, "a"),)


class TestDeleteTask(unittest.TestCase):
    def test_delete_absent_is_noop(self) -> None:
        st = TaskStore()
        st.delete_task(999)
        assert len(st) == 0
        _add(st, "a")
        st.delete_task(999)
        assert len(st) == 1

    def test_delete_does_not_renumber(self) -> None:
        st = TaskStore()
        for t in ("a", "b", "c"):
            _add(st, t)
        st.delete_task(1)
        assert [r.id for r in st.tasks()] == [2, 3]


class TestPartitions(unittest.TestCase):
    def test_empty_store(self) -> None:
        st = TaskStore()
        assert st.active_tasks() == []
        assert st.completed_tasks() == []

    def test_partitions_cover_collection_without_overlap(self) -> None:
        rng = random.Random(42)
        st = TaskStore()
        for i in range(20):
            _add(st, f"t{i}")
        for r in st.tasks():
            st.toggle_completion(r.id, rng.random() < 0.5)

        all_ids = [r.id for r in st.tasks()]
        active = [r.id for r in st.active_tasks()]
        completed = [r.id for r in st.completed_tasks()]
        assert set(active) | set(completed) == set(all_ids)
        assert set(active) & set(completed) == set()
        # 相対順序が保たれている
        assert active == [i for i in all_ids if i in set(active)]
        assert completed == [i for i in all_ids if i in set(completed)]

    def test_snapshot_is_not_live(self) -> None:
        st = TaskStore()
        _add(st, "a")
        snapshot = st.tasks()
        _add(st, "b")
        assert len(snapshot) == 1


class TestGetTask(unittest.TestCase):
    def test_found(self) -> None:
        st = TaskStore()
        _add(st, "a")
        r = st.get_task(1)
        assert r.is_ok()
        assert r.unwrap().label == "a"

    def test_not_found(self) -> None:
        r = TaskStore().get_task(5)
        assert r.is_err()
        assert "not found" in r.unwrap_err()


if __name__ == "__main__":
    unittest.main()
