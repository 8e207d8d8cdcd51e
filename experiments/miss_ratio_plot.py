"""Deadline Miss Ratio vs Utilisation Experiment.

Generates random task sets at various utilisation levels using UUniFast,
simulates each one under RMS and EDF over its hyperperiod, and plots the
fraction of task sets that miss at least one deadline.
"""

from pathlib import Path
from typing import Dict, List

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from rtsim.engine import simulate
from rtsim.events import EventType
from rtsim.generators import generate_taskset
from rtsim.horizon import compute_horizon
from rtsim.log import setup_logging
from rtsim.models import TaskSet
from rtsim.trace import summarize


def has_miss(events, taskset: TaskSet) -> bool:
    """A task set fails if any instance released within the hyperperiod misses
    its deadline or never completes (overrun or still running at the end)."""
    if any(e.type is EventType.DEADLINE_MISSED for e in events):
        return True
    horizon = compute_horizon(taskset.periods)
    summary = summarize(events, taskset)
    return any(
        summary[t.id].completions < len(range(t.release, horizon, t.period)) for t in taskset
    )


def run_miss_ratio_experiment(
    utilisation_points: List[float],
    num_task_sets_per_point: int = 100,
    num_tasks: int = 5,
    policies: tuple = ("rms", "edf"),
    seed: int = 42,
) -> Dict[str, Dict[float, float]]:
    """Run the miss-ratio experiment across utilisation levels.

    Args:
        utilisation_points: List of utilisation values to test (e.g. [0.1, 0.2, ..., 1.0]).
        num_task_sets_per_point: Number of random task sets to generate per utilisation.
        num_tasks: Number of tasks per task set.
        policies: Policy names to compare.
        seed: Base random seed (will be varied per task set).

    Returns:
        Dictionary mapping policy -> {utilisation -> miss ratio}.
    """
    results: Dict[str, Dict[float, float]] = {p: {} for p in policies}

    for u_total in utilisation_points:
        failures = {p: 0 for p in policies}

        for i in range(num_task_sets_per_point):
            # Same task set for every policy
            taskset = generate_taskset(num_tasks, u_total, seed=seed + int(u_total * 1000) + i)
            for p in policies:
                if has_miss(simulate(taskset, p), taskset):
                    failures[p] += 1

        for p in policies:
            results[p][u_total] = failures[p] / num_task_sets_per_point

    return results


def plot_miss_ratio_vs_utilisation(
    results: Dict[str, Dict[float, float]],
    output_path: str = "results/miss_ratio_vs_utilisation.png",
) -> None:
    """Plot one miss-ratio curve per policy and save it to ``output_path``."""
    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    plt.figure(figsize=(10, 6))
    for policy, curve in results.items():
        utilisations = sorted(curve)
        plt.plot(utilisations, [curve[u] for u in utilisations], 'o-', linewidth=2,
                 markersize=8, label=policy.upper())
    plt.xlabel('Total Utilisation', fontsize=12)
    plt.ylabel('Fraction of Task Sets with a Miss', fontsize=12)
    plt.title('Deadline Miss Ratio vs Utilisation (simulation)', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.ylim(0, 1.05)
    plt.legend()

    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()

    print(f"Plot saved to {output_path}")


def main():
    """Run the full miss ratio vs utilisation experiment."""
    setup_logging("WARNING")
    print("Running miss ratio vs utilisation experiment...")

    utilisation_points = [u / 10.0 for u in range(1, 13)]  # 0.1, 0.2, ..., 1.2

    results = run_miss_ratio_experiment(
        utilisation_points=utilisation_points,
        num_task_sets_per_point=100,
        num_tasks=5,
        seed=42,
    )

    print("\nResults:")
    for policy, curve in results.items():
        for u, ratio in sorted(curve.items()):
            print(f"  {policy.upper()} U = {u:.1f}: {ratio:.3f} with misses")

    plot_miss_ratio_vs_utilisation(results)

    print("\nExperiment complete!")


if __name__ == "__main__":
    main()
