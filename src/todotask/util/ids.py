from collections.abc import Iterable
from typing import Literal

from pyresults import Err, Ok, Result

IdPolicy = Literal["max_plus_one", "counter"]


def max_plus_one(ids: Iterable[int]) -> int:
    """Next id recomputed from the current contents.

    An id freed by deleting the highest record is handed out again.
    """
    return max(ids, default=0) + 1


def parse_policy(s: str) -> Result[IdPolicy, str]:
    s = s.strip().lower().replace("-", "_")
    if len(s) == 0:
        return Err("Empty ID policy")
    if s == "max_plus_one":
        return Ok("max_plus_one")
    if s == "counter":
        return Ok("counter")
    _msg = f"Unknown ID policy: {s} (max_plus_one or counter)"
    return Err(_msg)


class IdAllocator:
    """Assigns task ids according to an `IdPolicy`.

    - max_plus_one: `max(current ids, default 0) + 1`
    - counter: monotonically increasing, never reuses an id seen by this allocator
    """

    def __init__(self, policy: IdPolicy = "max_plus_one", *, last_issued: int = 0) -> None:
        self.policy: IdPolicy = policy
        self._last_issued = last_issued

    @property
    def last_issued(self) -> int:
        return self._last_issued

    def next_id(self, current_ids: Iterable[int]) -> int:
        ids = list[int](current_ids)
        if self.policy == "counter":
            new_id = max(self._last_issued, *ids, 0) + 1
        else:
            new_id = max_plus_one(ids)
        self._last_issued = max(self._last_issued, new_id)
        return new_id

    def observe(self, ids: Iterable[int]) -> None:
        """Make sure restored ids are never issued again by the counter policy."""
        self._last_issued = max(self._last_issued, *ids, 0)
