"""Discrete-time preemptive uniprocessor scheduling engine.

Each time unit t is processed in a fixed order:

    1. Release admission   - tasks whose next release is t get a new instance
    2. Preemption check    - the best ready task replaces the running one only
                             if its priority field is strictly better
    3. Dispatch            - an idle processor takes the best ready task
    4. Execution           - the running task performs one unit of work;
                             deadline misses and completions are reported

Events for a unit are appended in that order:
    OVERRUN*, PREEMPTED?, RUNNING | IDLE, DEADLINE_MISSED?, COMPLETED?

A release that arrives while the previous instance still has work resets
the instance anyway (unfinished work is discarded); an OVERRUN event records
how much work was dropped.
"""

from typing import Iterable, List, Optional, Union

from loguru import logger

from rtsim.errors import InvalidTaskError
from rtsim.events import EventType, TimelineEvent
from rtsim.horizon import DEFAULT_MAX_HORIZON, compute_horizon
from rtsim.models import Task, TaskSet, TaskStateStore
from rtsim.policies import Policy, get_policy
from rtsim.ready_set import ReadySet


class Scheduler:
    """State of one simulation run: task states, ready set and running slot."""

    def __init__(self, tasks: Iterable[Task], policy: Union[str, Policy]):
        self.taskset = tasks if isinstance(tasks, TaskSet) else TaskSet(tasks=list(tasks))
        self.policy = get_policy(policy)
        self.store = TaskStateStore(self.taskset)
        self.ready = ReadySet(self.store, self.policy)
        self.current: Optional[int] = None
        self.events: List[TimelineEvent] = []

    def _emit(self, time: int, event_type: EventType, task: Optional[int] = None, **data) -> None:
        self.events.append(TimelineEvent(time=time, type=event_type, task=task, data=data))

    def _admit_releases(self, t: int) -> None:
        for task in self.taskset:
            state = self.store[task.id]
            if state.next_release_time != t:
                continue
            if state.remaining > 0:
                logger.debug(
                    "t={}: task {} re-released with {} unit(s) unfinished",
                    t, task.id, state.remaining,
                )
                self._emit(t, EventType.OVERRUN, task.id, remaining=state.remaining)
            self.store.release(task.id, t)
            # The running task keeps the processor with its state reset.
            if task.id != self.current:
                self.ready.add(task.id)

    def _check_preemption(self, t: int) -> None:
        if self.current is None or not self.ready:
            return
        challenger = self.ready.peek()
        if self.policy.compare(self.store, challenger, self.current) >= 0:
            return
        preempted = self.current
        self.ready.discard(challenger)
        self.ready.add(preempted)
        self.current = challenger
        logger.debug("t={}: task {} preempts task {}", t, challenger, preempted)
        self._emit(t, EventType.PREEMPTED, challenger, **{"from": preempted, "to": challenger})

    def _dispatch(self) -> None:
        if self.current is None and self.ready:
            self.current = self.ready.pop()

    def _execute(self, t: int) -> None:
        if self.current is None:
            self._emit(t, EventType.IDLE)
            return

        task_id = self.current
        state = self.store[task_id]
        self._emit(t, EventType.RUNNING, task_id)
        state.remaining -= 1

        if t >= state.deadline and state.remaining > 0:
            logger.debug("t={}: task {} missed deadline {}", t, task_id, state.deadline)
            self._emit(t, EventType.DEADLINE_MISSED, task_id)

        if state.remaining == 0:
            self._emit(t, EventType.COMPLETED, task_id, response_time=t + 1 - state.released_at)
            self.current = None

    def step(self, t: int) -> None:
        """Simulate time unit ``t``."""
        self._admit_releases(t)
        self._check_preemption(t)
        self._dispatch()
        self._execute(t)

    def run(self, horizon: int) -> List[TimelineEvent]:
        """Simulate time units 0 .. horizon-1 and return the event timeline."""
        for t in range(horizon):
            self.step(t)
        return self.events


def simulate(
    tasks: Iterable[Task],
    policy: Union[str, Policy],
    horizon: Optional[int] = None,
    max_horizon: Optional[int] = DEFAULT_MAX_HORIZON,
) -> List[TimelineEvent]:
    """Simulate a task set under a scheduling policy.

    Args:
        tasks: Task descriptors in input order.
        policy: A Policy instance or a policy name ("rms" or "edf").
        horizon: Number of time units to simulate; defaults to the hyperperiod.
        max_horizon: Bound on the computed hyperperiod (None for no bound).

    Returns:
        The ordered list of timeline events.

    Raises:
        InvalidTaskError: If the task set or horizon override is invalid.
        HorizonOverflowError: If the hyperperiod exceeds ``max_horizon``.
        UnknownPolicyError: If the policy name is not recognised.
    """
    scheduler = Scheduler(tasks, policy)

    if horizon is None:
        horizon = compute_horizon(scheduler.taskset.periods, max_horizon=max_horizon)
    elif isinstance(horizon, bool) or not isinstance(horizon, int) or horizon <= 0:
        raise InvalidTaskError(f"Horizon must be a positive integer, got {horizon!r}")

    logger.info(
        "Running preemptive {} simulation of {} task(s) for {} time units",
        scheduler.policy.name, len(scheduler.taskset), horizon,
    )
    events = scheduler.run(horizon)
    misses = sum(1 for e in events if e.type is EventType.DEADLINE_MISSED)
    logger.info("{} simulation finished: {} event(s), {} deadline miss(es)",
                scheduler.policy.name, len(events), misses)
    return events
