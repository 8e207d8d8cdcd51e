"""rtsim: preemptive uniprocessor scheduling simulator.

This package simulates a fixed set of periodic tasks on a single processor
under Rate-Monotonic (RMS) or Earliest-Deadline-First (EDF) scheduling and
reports a tick-by-tick timeline of runs, preemptions, completions and
deadline misses.
"""

from rtsim.models import Task, TaskSet, TaskState, TaskStateStore
from rtsim.events import EventType, TimelineEvent
from rtsim.horizon import compute_horizon
from rtsim.policies import Policy, RMSPolicy, EDFPolicy, get_policy
from rtsim.engine import Scheduler, simulate

__version__ = "0.1.0"
__all__ = [
    "Task",
    "TaskSet",
    "TaskState",
    "TaskStateStore",
    "EventType",
    "TimelineEvent",
    "compute_horizon",
    "Policy",
    "RMSPolicy",
    "EDFPolicy",
    "get_policy",
    "Scheduler",
    "simulate",
]
