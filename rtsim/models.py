"""Data models for tasks, task sets and per-task runtime state."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from rtsim.errors import InvalidTaskError


@dataclass(frozen=True)
class Task:
    """Represents a periodic task.

    Attributes:
        id: Unique task identifier.
        period: Time units between successive releases.
        wcet: Worst-case execution time of one instance.
        deadline: Relative deadline (defaults to period if not specified).
        name: Optional display label (defaults to "Task <id>").
        release: Time of the first release.
    """
    id: int
    period: int
    wcet: int
    deadline: Optional[int] = None
    name: str = ""
    release: int = 0

    def __post_init__(self) -> None:
        """Validate task parameters."""
        if self.deadline is None:
            object.__setattr__(self, 'deadline', self.period)

        for attr in ("id", "period", "wcet", "deadline", "release"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTaskError(f"Task {self.id}: {attr} must be an integer, got {value!r}")
        if self.period <= 0:
            raise InvalidTaskError(f"Task {self.id}: period must be positive, got {self.period}")
        if self.wcet <= 0:
            raise InvalidTaskError(f"Task {self.id}: wcet must be positive, got {self.wcet}")
        if self.wcet > self.period:
            raise InvalidTaskError(
                f"Task {self.id}: wcet ({self.wcet}) cannot exceed period ({self.period})"
            )
        if self.deadline <= 0:
            raise InvalidTaskError(f"Task {self.id}: deadline must be positive, got {self.deadline}")
        if self.deadline > self.period:
            raise InvalidTaskError(
                f"Task {self.id}: deadline ({self.deadline}) cannot exceed period ({self.period})"
            )
        if self.wcet > self.deadline:
            raise InvalidTaskError(
                f"Task {self.id}: wcet ({self.wcet}) cannot exceed deadline ({self.deadline})"
            )
        if self.release < 0:
            raise InvalidTaskError(f"Task {self.id}: release must be non-negative, got {self.release}")

        if not self.name:
            object.__setattr__(self, 'name', f"Task {self.id}")

    @property
    def utilization(self) -> float:
        """Return the utilization of this task (wcet/period)."""
        return self.wcet / self.period

    def __str__(self) -> str:
        return f"Task({self.name}: T={self.period}, C={self.wcet}, D={self.deadline})"


@dataclass
class TaskState:
    """Mutable runtime record of one task during a simulation run.

    Attributes:
        remaining: Execution units still needed by the current instance.
        deadline: Absolute deadline of the current instance.
        next_release_time: Absolute time of the next release.
        released_at: Release time of the current instance (-1 before the first one).
    """
    remaining: int = 0
    deadline: int = 0
    next_release_time: int = 0
    released_at: int = -1


class TaskStateStore:
    """Single source of truth for runtime state, keyed by task id."""

    def __init__(self, tasks: Iterable[Task]):
        self._tasks: Dict[int, Task] = {}
        self._states: Dict[int, TaskState] = {}
        for task in tasks:
            self._tasks[task.id] = task
            self._states[task.id] = TaskState(next_release_time=task.release)

    def task(self, task_id: int) -> Task:
        return self._tasks[task_id]

    def __getitem__(self, task_id: int) -> TaskState:
        return self._states[task_id]

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def release(self, task_id: int, now: int) -> None:
        """Start a new instance of a task at time ``now``."""
        task = self._tasks[task_id]
        state = self._states[task_id]
        state.remaining = task.wcet
        state.deadline = now + task.deadline
        state.next_release_time += task.period
        state.released_at = now


@dataclass
class TaskSet:
    """Represents an ordered set of tasks with unique ids.

    Attributes:
        tasks: List of tasks in input order.
    """
    tasks: List[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Reject duplicate task ids."""
        self.tasks = list(self.tasks)
        seen = set()
        for task in self.tasks:
            if task.id in seen:
                raise InvalidTaskError(f"Duplicate task id {task.id}")
            seen.add(task.id)

    @property
    def periods(self) -> List[int]:
        """Return task periods in input order."""
        return [t.period for t in self.tasks]

    @property
    def total_utilization(self) -> float:
        """Return the total utilization of all tasks."""
        return sum(t.utilization for t in self.tasks)

    def get(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]
