"""Tests for YAML configuration loading."""

import os
import tempfile
import textwrap
import unittest

from rtsim.config import load_config, load_tasks, parse_config
from rtsim.errors import ConfigError, RTSimError


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        path = os.path.join(self.tmpdir.name, "tasks.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(textwrap.dedent(text))
        return path

    def test_full_config(self):
        path = self.write("""
            policies: EDF
            horizon: 20
            max_horizon: 500
            log_level: debug
            tasks:
              - {id: 1, period: 5, wcet: 3}
              - {id: 2, period: 8, wcet: 3, deadline: 6, name: sensor}
        """)
        config = load_config(path)
        self.assertEqual(config.policies, ["edf"])
        self.assertEqual(config.horizon, 20)
        self.assertEqual(config.max_horizon, 500)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual([t.id for t in config.taskset], [1, 2])
        self.assertEqual(config.taskset[1].name, "sensor")
        self.assertEqual(config.taskset[1].deadline, 6)

    def test_defaults(self):
        config = parse_config({"tasks": [{"id": 1, "period": 4, "wcet": 1}]})
        self.assertEqual(config.policies, ["rms", "edf"])
        self.assertIsNone(config.horizon)
        self.assertEqual(config.log_level, "WARNING")

    def test_bare_task_list(self):
        path = self.write("""
            - {id: 1, period: 5, wcet: 3}
            - {id: 2, period: 8, wcet: 3}
        """)
        self.assertEqual(load_tasks(path).periods, [5, 8])

    def test_missing_tasks(self):
        with self.assertRaises(ConfigError):
            parse_config({"policies": ["rms"]})

    def test_missing_task_field(self):
        with self.assertRaises(ConfigError):
            parse_config({"tasks": [{"id": 1, "period": 5}]})

    def test_unknown_task_field(self):
        with self.assertRaises(ConfigError):
            parse_config({"tasks": [{"id": 1, "period": 5, "wcet": 1, "priority": 3}]})

    def test_unknown_task_fields_of_mixed_key_types(self):
        # YAML allows integer keys next to string ones
        with self.assertRaises(ConfigError) as ctx:
            parse_config({"tasks": [{"id": 1, "period": 5, "wcet": 1, 3: "x", "prio": 2}]})
        self.assertIn("['3', 'prio']", str(ctx.exception))

    def test_unknown_log_level(self):
        with self.assertRaises(ConfigError) as ctx:
            parse_config({"log_level": "chatty", "tasks": [{"id": 1, "period": 5, "wcet": 1}]})
        self.assertIn("chatty", str(ctx.exception))

    def test_unknown_policy(self):
        with self.assertRaises(ConfigError):
            parse_config({"policies": ["llf"], "tasks": [{"id": 1, "period": 5, "wcet": 1}]})

    def test_bad_horizon(self):
        with self.assertRaises(ConfigError):
            parse_config({"horizon": -3, "tasks": [{"id": 1, "period": 5, "wcet": 1}]})

    def test_invalid_task_wrapped(self):
        path = self.write("""
            tasks:
              - {id: 1, period: 0, wcet: 1}
        """)
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_invalid_yaml(self):
        path = self.write("tasks: [ {id: 1\n")
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_missing_file(self):
        with self.assertRaises(RTSimError):
            load_config(os.path.join(self.tmpdir.name, "nope.yaml"))


if __name__ == "__main__":
    unittest.main()
