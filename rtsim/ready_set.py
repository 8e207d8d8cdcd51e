"""Priority-ordered set of ready task ids."""

from typing import List, Optional, Set, Tuple

from rtsim.models import TaskStateStore
from rtsim.policies import Policy


class ReadySet:
    """Tasks that are released and not running, ordered by a policy.

    Only ids are stored. Ordering is computed on demand from the state
    store, so keys recomputed at a release (EDF deadlines) are always
    current. Ties on the policy field go to the lowest task id.
    """

    def __init__(self, store: TaskStateStore, policy: Policy):
        self._store = store
        self._policy = policy
        self._members: Set[int] = set()

    def _sort_key(self, task_id: int) -> Tuple[int, int]:
        return (self._policy.priority_key(self._store, task_id), task_id)

    def add(self, task_id: int) -> None:
        if task_id not in self._store:
            raise KeyError(f"Unknown task id {task_id}")
        self._members.add(task_id)

    def discard(self, task_id: int) -> None:
        self._members.discard(task_id)

    def peek(self) -> Optional[int]:
        """Return the highest-priority ready id without removing it."""
        if not self._members:
            return None
        return min(self._members, key=self._sort_key)

    def pop(self) -> int:
        """Remove and return the highest-priority ready id."""
        best = self.peek()
        if best is None:
            raise IndexError("pop from an empty ready set")
        self._members.remove(best)
        return best

    def ordered(self) -> List[int]:
        """Return ready ids from highest to lowest priority."""
        return sorted(self._members, key=self._sort_key)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)
