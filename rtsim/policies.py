"""Priority policies for the scheduling engine.

A policy maps a task's runtime state to an integer priority key; a smaller
key means a higher priority. The same key drives both the ready-set order
and the preemption test, so the two can never disagree.

    RMS: key = period               (static, fixed for the task's lifetime)
    EDF: key = absolute deadline    (dynamic, recomputed at every release)
"""

from abc import ABC, abstractmethod
from typing import Dict, Type, Union

from rtsim.errors import UnknownPolicyError
from rtsim.models import TaskStateStore


class Policy(ABC):
    """Total order over task ids, read from an external state store."""

    name: str = ""

    @abstractmethod
    def priority_key(self, store: TaskStateStore, task_id: int) -> int:
        """Return the priority field of a task (smaller = higher priority)."""

    def compare(self, store: TaskStateStore, a: int, b: int) -> int:
        """Compare two tasks on the policy field only.

        Returns:
            -1 if ``a`` has strictly higher priority, 1 if strictly lower,
            0 if their priority fields are equal.
        """
        key_a = self.priority_key(store, a)
        key_b = self.priority_key(store, b)
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RMSPolicy(Policy):
    """Rate Monotonic: shorter period = higher priority."""

    name = "RMS"

    def priority_key(self, store: TaskStateStore, task_id: int) -> int:
        return store.task(task_id).period


class EDFPolicy(Policy):
    """Earliest Deadline First: earlier absolute deadline = higher priority."""

    name = "EDF"

    def priority_key(self, store: TaskStateStore, task_id: int) -> int:
        return store[task_id].deadline


POLICIES: Dict[str, Type[Policy]] = {
    "rms": RMSPolicy,
    "edf": EDFPolicy,
}


def get_policy(policy: Union[str, Policy]) -> Policy:
    """Resolve a policy name ("rms"/"edf", any case) or pass a Policy through."""
    if isinstance(policy, Policy):
        return policy
    try:
        return POLICIES[str(policy).strip().lower()]()
    except KeyError:
        raise UnknownPolicyError(
            f"Unknown policy {policy!r}; expected one of {sorted(POLICIES)}"
        ) from None
