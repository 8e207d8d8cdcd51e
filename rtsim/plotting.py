"""Gantt chart rendering of a simulated timeline."""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from loguru import logger

from rtsim.events import EventType, TimelineEvent
from rtsim.models import Task


def merge_blocks(events: Iterable[TimelineEvent]) -> List[Tuple[int, int, int]]:
    """Merge consecutive RUNNING units of the same task.

    Returns:
        List of (start, length, task_id) blocks in time order.
    """
    blocks: List[Tuple[int, int, int]] = []
    for event in events:
        if event.type is not EventType.RUNNING:
            continue
        if blocks:
            start, length, task_id = blocks[-1]
            if task_id == event.task and start + length == event.time:
                blocks[-1] = (start, length + 1, task_id)
                continue
        blocks.append((event.time, 1, event.task))
    return blocks


def plot_gantt(
    events: List[TimelineEvent],
    tasks: List[Task],
    output_path: str,
    title: Optional[str] = None,
) -> None:
    """Draw one row per task with its execution blocks and save the figure.

    Deadline misses are marked with a red cross, preemptions with a
    dashed vertical line.

    Args:
        events: Timeline produced by the engine.
        tasks: Tasks in display order (top row first).
        output_path: Image file to write; parent directories are created.
        title: Optional chart title.
    """
    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    tasks = list(tasks)
    duration = max((e.time for e in events), default=0) + 1
    rows = {t.id: len(tasks) - 1 - i for i, t in enumerate(tasks)}
    colors = matplotlib.colormaps['tab10']

    fig, ax = plt.subplots(figsize=(max(8, min(duration / 2, 40)), 1 + len(tasks)))
    for start, length, task_id in merge_blocks(events):
        row = rows[task_id]
        ax.broken_barh([(start, length)], (row * 10, 8), facecolors=colors(row % 10))

    for event in events:
        if event.type is EventType.DEADLINE_MISSED:
            ax.plot(event.time + 0.5, rows[event.task] * 10 + 4, 'rx', markersize=8)
        elif event.type is EventType.PREEMPTED:
            ax.axvline(event.time, color='grey', linestyle='--', linewidth=0.8)

    ax.set_xlim(0, duration)
    ax.set_ylim(-2, len(tasks) * 10)
    ax.set_xlabel('Time')
    ax.set_yticks([rows[t.id] * 10 + 4 for t in tasks])
    ax.set_yticklabels([t.name for t in tasks])
    if title:
        ax.set_title(title)
    ax.grid(True, axis='x', alpha=0.3)

    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info("Gantt chart saved to {}", output_path)
