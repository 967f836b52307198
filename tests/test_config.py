"""Tests for the configuration module."""

import os
import tempfile
import unittest

import yaml

from logstash_layout.config import Config, load_config, load_yaml_config

ENV_KEYS = (
    "LOGSTASH_CONFIG", "LOGSTASH_HOSTNAME", "LOGSTASH_ESCAPE_MODE",
    "LOGSTASH_BUFFER_SIZE", "LOGSTASH_MAX_BUFFER_SIZE", "LOG_LEVEL", "LOG_STREAM",
)


class TestConfigDefaults(unittest.TestCase):
    def test_default_values(self):
        cfg = Config()
        self.assertIsNone(cfg.hostname)
        self.assertEqual(cfg.escape_mode, "strict")
        self.assertEqual(cfg.initial_buffer_size, 256)
        self.assertEqual(cfg.max_buffer_size, 1024)
        self.assertEqual(cfg.level, "INFO")
        self.assertEqual(cfg.stream, "stdout")

    def test_frozen(self):
        cfg = Config()
        with self.assertRaises(AttributeError):
            cfg.escape_mode = "compat"

    def test_invalid_escape_mode(self):
        with self.assertRaises(ValueError):
            Config(escape_mode="loose")

    def test_invalid_buffer_sizes(self):
        with self.assertRaises(ValueError):
            Config(initial_buffer_size=0)
        with self.assertRaises(ValueError):
            Config(initial_buffer_size=512, max_buffer_size=256)

    def test_invalid_stream(self):
        with self.assertRaises(ValueError):
            Config(stream="file")


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self._orig_env = os.environ.copy()
        for key in ENV_KEYS:
            os.environ.pop(key, None)
        self._tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        os.environ.clear()
        os.environ.update(self._orig_env)
        self._tmpdir.cleanup()

    def _write_yaml(self, data) -> str:
        path = os.path.join(self._tmpdir.name, "layout.yaml")
        with open(path, "w") as f:
            yaml.dump(data, f)
        return path

    def test_defaults_without_env(self):
        self.assertEqual(load_config(), Config())

    def test_env_var_overrides(self):
        os.environ["LOGSTASH_HOSTNAME"] = "web-01"
        os.environ["LOGSTASH_ESCAPE_MODE"] = "COMPAT"
        os.environ["LOGSTASH_BUFFER_SIZE"] = "128"
        os.environ["LOGSTASH_MAX_BUFFER_SIZE"] = "512"
        os.environ["LOG_LEVEL"] = "debug"
        os.environ["LOG_STREAM"] = "stderr"
        cfg = load_config()
        self.assertEqual(cfg.hostname, "web-01")
        self.assertEqual(cfg.escape_mode, "compat")
        self.assertEqual(cfg.initial_buffer_size, 128)
        self.assertEqual(cfg.max_buffer_size, 512)
        self.assertEqual(cfg.level, "DEBUG")
        self.assertEqual(cfg.stream, "stderr")

    def test_yaml_values(self):
        path = self._write_yaml({"hostname": "yaml-host", "max_buffer_size": 2048})
        cfg = load_config(path)
        self.assertEqual(cfg.hostname, "yaml-host")
        self.assertEqual(cfg.max_buffer_size, 2048)
        self.assertEqual(cfg.initial_buffer_size, 256)

    def test_env_beats_yaml(self):
        path = self._write_yaml({"hostname": "yaml-host"})
        os.environ["LOGSTASH_HOSTNAME"] = "env-host"
        self.assertEqual(load_config(path).hostname, "env-host")

    def test_config_path_from_env(self):
        os.environ["LOGSTASH_CONFIG"] = self._write_yaml({"escape_mode": "compat"})
        self.assertEqual(load_config().escape_mode, "compat")

    def test_missing_yaml_uses_defaults(self):
        self.assertEqual(load_config("/nonexistent/layout.yaml"), Config())

    def test_invalid_int_raises(self):
        os.environ["LOGSTASH_BUFFER_SIZE"] = "lots"
        with self.assertRaises(ValueError):
            load_config()


class TestLoadYamlConfig(unittest.TestCase):
    def test_no_path(self):
        self.assertEqual(load_yaml_config(None), {})

    def test_empty_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            path = f.name
        try:
            self.assertEqual(load_yaml_config(path), {})
        finally:
            os.unlink(path)

    def test_non_mapping_rejected(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            yaml.dump(["a", "b"], f)
            path = f.name
        try:
            with self.assertRaises(ValueError):
                load_yaml_config(path)
        finally:
            os.unlink(path)
