"""Human-readable rendering of engine timelines.

Rendering only reads events; it never influences the simulation.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from rtsim.events import EventType, TimelineEvent
from rtsim.models import Task


@dataclass
class TaskSummary:
    """Per-task counts collected from a timeline.

    ``worst_response`` is the longest release-to-completion time seen.
    """
    task_id: int
    name: str
    units_run: int = 0
    completions: int = 0
    preemptions: int = 0
    deadline_misses: int = 0
    overruns: int = 0
    worst_response: int = 0

    @property
    def missed_any(self) -> bool:
        return self.deadline_misses > 0 or self.overruns > 0


def _label(task_id: int, names: Dict[int, str]) -> str:
    return names.get(task_id, f"Task {task_id}")


def render_header(policy_name: str) -> str:
    return f"=== Running Preemptive {policy_name} Simulation ==="


def render_trace(events: Iterable[TimelineEvent], tasks: Optional[Iterable[Task]] = None) -> List[str]:
    """Format a timeline as one line per event."""
    names = {t.id: t.name for t in tasks} if tasks is not None else {}
    lines = []
    for event in events:
        t = event.time
        if event.type is EventType.PREEMPTED:
            lines.append(f"  [!] Preemption at Time {t}: Switching to {_label(event.task, names)}")
        elif event.type is EventType.RUNNING:
            lines.append(f"Time {t}: {_label(event.task, names)} is running.")
        elif event.type is EventType.IDLE:
            lines.append(f"Time {t}: Idle")
        elif event.type is EventType.DEADLINE_MISSED:
            lines.append(f"  !! Deadline Missed by {_label(event.task, names)}")
        elif event.type is EventType.COMPLETED:
            lines.append(f"  [+] {_label(event.task, names)} Completed.")
        elif event.type is EventType.OVERRUN:
            lines.append(f"  [~] Overrun at Time {t}: {_label(event.task, names)} released with "
                         f"{event.data['remaining']} unit(s) unfinished")
    return lines


def summarize(events: Iterable[TimelineEvent], tasks: Iterable[Task]) -> Dict[int, TaskSummary]:
    """Collect per-task counts and the worst observed response time."""
    summary = {t.id: TaskSummary(task_id=t.id, name=t.name) for t in tasks}
    for event in events:
        if event.type is EventType.IDLE:
            continue
        if event.type is EventType.PREEMPTED:
            summary[event.data["from"]].preemptions += 1
        elif event.type is EventType.RUNNING:
            summary[event.task].units_run += 1
        elif event.type is EventType.COMPLETED:
            s = summary[event.task]
            s.completions += 1
            s.worst_response = max(s.worst_response, event.data["response_time"])
        elif event.type is EventType.DEADLINE_MISSED:
            summary[event.task].deadline_misses += 1
        elif event.type is EventType.OVERRUN:
            summary[event.task].overruns += 1
    return summary


def render_summary(summary: Dict[int, TaskSummary]) -> List[str]:
    """Format a per-task summary as an aligned table."""
    header = f"{'Task':<12}{'Run':>6}{'Done':>6}{'Preempted':>11}{'Missed':>8}{'Overrun':>9}{'Worst R':>9}"
    lines = [header, "-" * len(header)]
    for s in summary.values():
        lines.append(
            f"{s.name:<12}{s.units_run:>6}{s.completions:>6}{s.preemptions:>11}"
            f"{s.deadline_misses:>8}{s.overruns:>9}{s.worst_response:>9}"
        )
    return lines
