"""
Configuration management for fuzzytodo.

The configuration is stored as a TOML file in the config directory.
It controls how searches are parallelized and whether an operations
log is written. Items themselves are never persisted.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w


CONFIG_FILENAME = "fuzzytodo.toml"
CONFIG_VERSION = 1

# Stores smaller than this are searched on the calling thread
DEFAULT_PARALLEL_THRESHOLD = 256

# Upper bound for the automatic worker count
MAX_AUTO_WORKERS = 8


def get_config_dir() -> Path:
    """
    Resolve the config directory.

    Priority:
    1. FUZZYTODO_CONFIG_DIR environment variable
    2. $XDG_CONFIG_HOME/fuzzytodo
    3. ~/.config/fuzzytodo
    """
    env_dir = os.environ.get("FUZZYTODO_CONFIG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "fuzzytodo"
    return Path.home() / ".config" / "fuzzytodo"


def default_workers() -> int:
    """Worker count used when the config asks for automatic sizing."""
    return max(1, min(MAX_AUTO_WORKERS, os.cpu_count() or 1))


@dataclass
class TodoConfig:
    """Complete fuzzytodo configuration."""
    path: Path
    version: int = CONFIG_VERSION

    # Search worker threads; 0 means automatic
    workers: int = 0
    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD

    # Write fuzzytodo-ops.log in the config directory
    ops_log: bool = False

    @property
    def config_path(self) -> Path:
        """Path to the TOML config file."""
        return self.path / CONFIG_FILENAME

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def effective_workers(self) -> int:
        """Worker count after applying FUZZYTODO_WORKERS and auto sizing."""
        workers = self.workers
        env_workers = os.environ.get("FUZZYTODO_WORKERS")
        if env_workers:
            try:
                workers = int(env_workers)
            except ValueError:
                raise ValueError(f"FUZZYTODO_WORKERS must be an integer, got {env_workers!r}") from None
            if workers < 0:
                raise ValueError(f"FUZZYTODO_WORKERS must be >= 0, got {workers}")
        return workers or default_workers()

    def to_dict(self) -> dict:
        return {
            "config": {"version": self.version},
            "search": {
                "workers": self.workers,
                "parallel_threshold": self.parallel_threshold,
            },
            "logging": {"ops_log": self.ops_log},
        }


def load_config(config_dir: Path) -> TodoConfig:
    """
    Load configuration from a config directory.

    Raises:
        FileNotFoundError: If config doesn't exist
        ValueError: If config is invalid
    """
    config_path = config_dir / CONFIG_FILENAME

    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    version = data.get("config", {}).get("version", 1)
    if version > CONFIG_VERSION:
        raise ValueError(f"Config version {version} is newer than supported ({CONFIG_VERSION})")

    search = data.get("search", {})
    workers = search.get("workers", 0)
    threshold = search.get("parallel_threshold", DEFAULT_PARALLEL_THRESHOLD)
    if not isinstance(workers, int) or workers < 0:
        raise ValueError(f"search.workers must be a non-negative integer, got {workers!r}")
    if not isinstance(threshold, int) or threshold < 0:
        raise ValueError(f"search.parallel_threshold must be a non-negative integer, got {threshold!r}")

    return TodoConfig(
        path=config_dir,
        version=version,
        workers=workers,
        parallel_threshold=threshold,
        ops_log=bool(data.get("logging", {}).get("ops_log", False)),
    )


def save_config(config: TodoConfig) -> None:
    """
    Save configuration to the config directory.

    Creates the directory if it doesn't exist.
    """
    config.path.mkdir(parents=True, exist_ok=True)
    with open(config.config_path, "wb") as f:
        tomli_w.dump(config.to_dict(), f)


def load_or_create_config(config_dir: Path | None = None) -> TodoConfig:
    """
    Load existing config or create a new one with defaults.

    This is the main entry point for config management.
    """
    config_dir = config_dir if config_dir is not None else get_config_dir()
    config_path = config_dir / CONFIG_FILENAME

    if config_path.exists():
        return load_config(config_dir)
    else:
        config = TodoConfig(path=config_dir)
        save_config(config)
        return config
