"""Configuration — frozen dataclass loaded from an optional YAML file and env vars."""

import logging
import os
from dataclasses import dataclass

import yaml

from logstash_layout.buffer import DEFAULT_BUFFER_SIZE, DEFAULT_MAX_BUFFER_SIZE
from logstash_layout.serializer import ESCAPE_MODES, STRICT

logger = logging.getLogger(__name__)

STREAMS = ("stdout", "stderr")


@dataclass(frozen=True)
class Config:
    hostname: str | None = None
    escape_mode: str = STRICT
    initial_buffer_size: int = DEFAULT_BUFFER_SIZE
    max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE
    level: str = "INFO"
    stream: str = "stdout"

    def __post_init__(self):
        if self.escape_mode not in ESCAPE_MODES:
            raise ValueError(
                f"escape_mode must be one of {ESCAPE_MODES}, got {self.escape_mode!r}"
            )
        if self.initial_buffer_size <= 0:
            raise ValueError("initial_buffer_size must be positive")
        if self.max_buffer_size < self.initial_buffer_size:
            raise ValueError("max_buffer_size must be >= initial_buffer_size")
        if self.stream not in STREAMS:
            raise ValueError(f"stream must be one of {STREAMS}, got {self.stream!r}")


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(config_path: str | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars (highest priority)."""
    yaml_data = load_yaml_config(config_path or os.environ.get("LOGSTASH_CONFIG"))

    def setting(env_key: str, yaml_key: str, default):
        value = os.environ.get(env_key)
        if value is not None:
            return value
        return yaml_data.get(yaml_key, default)

    return Config(
        hostname=setting("LOGSTASH_HOSTNAME", "hostname", Config.hostname) or None,
        escape_mode=str(setting("LOGSTASH_ESCAPE_MODE", "escape_mode", Config.escape_mode)).lower(),
        initial_buffer_size=int(
            setting("LOGSTASH_BUFFER_SIZE", "initial_buffer_size", Config.initial_buffer_size)
        ),
        max_buffer_size=int(
            setting("LOGSTASH_MAX_BUFFER_SIZE", "max_buffer_size", Config.max_buffer_size)
        ),
        level=str(setting("LOG_LEVEL", "level", Config.level)).upper(),
        stream=str(setting("LOG_STREAM", "stream", Config.stream)).lower(),
    )
