"""
Tests for TOML configuration and logging setup.
"""

import logging

import pytest

from fuzzytodo.config import (
    CONFIG_FILENAME,
    DEFAULT_PARALLEL_THRESHOLD,
    TodoConfig,
    get_config_dir,
    load_config,
    load_or_create_config,
    save_config,
)
from fuzzytodo.errors import log_exception
from fuzzytodo.logging_config import configure_ops_log
from fuzzytodo.store import TodoStore
from fuzzytodo.types import Index, SearchParams


class TestConfigDir:

    def test_env_override(self, config_dir):
        assert get_config_dir() == config_dir

    def test_xdg(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FUZZYTODO_CONFIG_DIR")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "fuzzytodo"


class TestLoadSave:

    def test_create_defaults(self, config_dir):
        config = load_or_create_config()
        assert config.path == config_dir
        assert (config_dir / CONFIG_FILENAME).exists()
        assert config.workers == 0
        assert config.parallel_threshold == DEFAULT_PARALLEL_THRESHOLD
        assert config.ops_log is False

    def test_round_trip(self, config_dir):
        save_config(TodoConfig(path=config_dir, workers=3, parallel_threshold=10, ops_log=True))
        config = load_config(config_dir)
        assert config.workers == 3
        assert config.parallel_threshold == 10
        assert config.ops_log is True

    def test_missing(self, config_dir):
        with pytest.raises(FileNotFoundError):
            load_config(config_dir)

    def test_newer_version_rejected(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / CONFIG_FILENAME).write_text("[config]\nversion = 99\n")
        with pytest.raises(ValueError, match="newer"):
            load_config(config_dir)

    def test_negative_workers_rejected(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / CONFIG_FILENAME).write_text("[search]\nworkers = -2\n")
        with pytest.raises(ValueError, match="workers"):
            load_config(config_dir)


class TestEffectiveWorkers:

    def test_explicit(self, config_dir):
        assert TodoConfig(path=config_dir, workers=2).effective_workers() == 2

    def test_automatic(self, config_dir):
        assert TodoConfig(path=config_dir).effective_workers() >= 1

    def test_env_override(self, config_dir, monkeypatch):
        monkeypatch.setenv("FUZZYTODO_WORKERS", "5")
        assert TodoConfig(path=config_dir, workers=2).effective_workers() == 5

    def test_env_invalid(self, config_dir, monkeypatch):
        monkeypatch.setenv("FUZZYTODO_WORKERS", "many")
        with pytest.raises(ValueError):
            TodoConfig(path=config_dir).effective_workers()

    def test_store_from_config(self, config_dir):
        with TodoStore.from_config(TodoConfig(path=config_dir, workers=2, parallel_threshold=0)) as store:
            store.insert(["a"], [])
            store.insert(["b"], [])
            store.insert(["ab"], [])
            assert store.search(SearchParams(words=("a",))) == [Index(2), Index(0)]


class TestLogging:

    def test_ops_log(self, config_dir):
        handler = configure_ops_log(config_dir)
        try:
            logging.getLogger("fuzzytodo.test").info("hello ops")
            handler.flush()
            assert "hello ops" in (config_dir / "fuzzytodo-ops.log").read_text()
        finally:
            logging.getLogger("fuzzytodo").removeHandler(handler)
            handler.close()

    def test_log_exception(self, config_dir):
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            path = log_exception(e, "test")
        assert path == config_dir / "fuzzytodo-errors.log"
        text = path.read_text()
        assert "test" in text
        assert "RuntimeError: boom" in text
