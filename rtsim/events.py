"""Timeline events emitted by the scheduling engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class EventType(str, Enum):
    """Kinds of facts the engine reports for a time unit."""

    PREEMPTED = "PREEMPTED"
    RUNNING = "RUNNING"
    IDLE = "IDLE"
    DEADLINE_MISSED = "DEADLINE_MISSED"
    COMPLETED = "COMPLETED"
    OVERRUN = "OVERRUN"


@dataclass(frozen=True)
class TimelineEvent:
    """One event of the simulated timeline.

    Attributes:
        time: Time unit the event belongs to.
        type: Event kind.
        task: Task id concerned (the incoming task for PREEMPTED, None for IDLE).
        data: Extra payload ({"from", "to"} for PREEMPTED, {"remaining"} for OVERRUN).
    """
    time: int
    type: EventType
    task: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"t={self.time}", self.type.value]
        if self.task is not None:
            parts.append(f"task={self.task}")
        parts.extend(f"{k}={v}" for k, v in self.data.items())
        return " ".join(parts)
