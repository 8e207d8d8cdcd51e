"""YAML configuration and task-set loading.

Example file::

    policies: [rms, edf]
    max_horizon: 10000000
    log_level: INFO
    tasks:
      - {id: 1, period: 5, wcet: 3}
      - {id: 2, period: 8, wcet: 3, name: sensor}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from rtsim.errors import ConfigError, InvalidTaskError
from rtsim.horizon import DEFAULT_MAX_HORIZON
from rtsim.log import validate_level
from rtsim.models import Task, TaskSet
from rtsim.policies import POLICIES

TASK_FIELDS = ("id", "period", "wcet", "deadline", "name", "release")


@dataclass
class SimulationConfig:
    """Everything needed to run one or more simulations of a task set."""
    taskset: TaskSet
    policies: List[str] = field(default_factory=lambda: ["rms", "edf"])
    horizon: Optional[int] = None
    max_horizon: Optional[int] = DEFAULT_MAX_HORIZON
    log_level: str = "WARNING"


def _parse_task(entry: Any, index: int) -> Task:
    if not isinstance(entry, dict):
        raise ConfigError(f"tasks[{index}]: expected a mapping, got {type(entry).__name__}")
    unknown = set(entry) - set(TASK_FIELDS)
    if unknown:
        raise ConfigError(f"tasks[{index}]: unknown field(s) {sorted(map(str, unknown))}")
    missing = [k for k in ("id", "period", "wcet") if k not in entry]
    if missing:
        raise ConfigError(f"tasks[{index}]: missing field(s) {missing}")
    return Task(**entry)


def parse_tasks(entries: Any) -> TaskSet:
    """Build a TaskSet from a list of task mappings."""
    if not isinstance(entries, list) or not entries:
        raise ConfigError("'tasks' must be a non-empty list")
    return TaskSet(tasks=[_parse_task(e, i) for i, e in enumerate(entries)])


def _parse_policies(value: Any) -> List[str]:
    names = [value] if isinstance(value, str) else value
    if not isinstance(names, list) or not names:
        raise ConfigError("'policies' must be a policy name or a non-empty list of names")
    result = []
    for name in names:
        key = str(name).strip().lower()
        if key not in POLICIES:
            raise ConfigError(f"Unknown policy {name!r}; expected one of {sorted(POLICIES)}")
        result.append(key)
    return result


def parse_config(data: Dict[str, Any]) -> SimulationConfig:
    """Validate a configuration mapping (as loaded from YAML)."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    config = SimulationConfig(taskset=parse_tasks(data.get("tasks")))
    if "policies" in data:
        config.policies = _parse_policies(data["policies"])
    if "horizon" in data:
        config.horizon = data["horizon"]
        if config.horizon is not None and (not isinstance(config.horizon, int) or config.horizon <= 0):
            raise ConfigError(f"'horizon' must be a positive integer, got {config.horizon!r}")
    if "max_horizon" in data:
        config.max_horizon = data["max_horizon"]
        if config.max_horizon is not None and (
            not isinstance(config.max_horizon, int) or config.max_horizon <= 0
        ):
            raise ConfigError(f"'max_horizon' must be a positive integer, got {config.max_horizon!r}")
    if "log_level" in data:
        config.log_level = validate_level(data["log_level"])
    return config


def _read_yaml(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: str) -> SimulationConfig:
    """Load a simulation configuration from a YAML file."""
    try:
        return parse_config(_read_yaml(path))
    except InvalidTaskError as e:
        raise ConfigError(f"{path}: {e}") from e


def load_tasks(path: str) -> TaskSet:
    """Load only the task set from a YAML file.

    The file may be a full configuration or a bare list of tasks.
    """
    data = _read_yaml(path)
    entries = data.get("tasks") if isinstance(data, dict) else data
    try:
        return parse_tasks(entries)
    except InvalidTaskError as e:
        raise ConfigError(f"{path}: {e}") from e
