"""
CLI interface for fuzzytodo.

Usage:
    fuzzytodo run queries.txt
    echo 'add "buy milk" #errand' | fuzzytodo run
    fuzzytodo shell
"""

import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import tomli_w
import typer
from typing_extensions import Annotated

from .config import TodoConfig, load_or_create_config
from .errors import log_exception
from .logging_config import configure_ops_log, configure_quiet_mode, enable_debug_mode
from .runner import run_line
from .store import TodoStore

QUIT_COMMANDS = frozenset({"quit", "exit"})

# Configure quiet mode by default
# Set FUZZYTODO_VERBOSE=1 to enable debug mode via environment
if os.environ.get("FUZZYTODO_VERBOSE") == "1":
    enable_debug_mode()
else:
    configure_quiet_mode(quiet=True)


def _version_callback(value: bool):
    if value:
        from importlib.metadata import version
        print(f"fuzzytodo {version('fuzzytodo')}")
        raise typer.Exit()


def _verbose_callback(value: bool):
    if value:
        enable_debug_mode()


# Global state for CLI options
_config_dir_override: Optional[Path] = None


def _config_dir_callback(value: Optional[Path]):
    global _config_dir_override
    _config_dir_override = value


def _get_config_dir_override() -> Optional[Path]:
    return _config_dir_override


app = typer.Typer(
    name="fuzzytodo",
    help="Todo list with fuzzy subsequence search.",
    no_args_is_help=True,
    rich_markup_mode=None,
)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option(
        "--verbose", "-v",
        help="Enable debug-level logging to stderr",
        callback=_verbose_callback,
        is_eager=True,
    )] = False,
    version: Annotated[Optional[bool], typer.Option(
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    )] = None,
    config_dir: Annotated[Optional[Path], typer.Option(
        "--config-dir", "-c",
        envvar="FUZZYTODO_CONFIG_DIR",
        help="Directory holding fuzzytodo.toml",
        callback=_config_dir_callback,
        is_eager=True,
    )] = None,
):
    """Todo list with fuzzy subsequence search."""


def _get_config() -> TodoConfig:
    """Load config, handling errors gracefully."""
    try:
        config = load_or_create_config(_get_config_dir_override())
        config.effective_workers()
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    return config


@contextmanager
def _open_store():
    """Yield a fresh store; the ops log handler lives only as long as it."""
    config = _get_config()
    handler = configure_ops_log(config.path) if config.ops_log else None
    try:
        with TodoStore.from_config(config) as store:
            yield store
    finally:
        if handler is not None:
            logging.getLogger("fuzzytodo").removeHandler(handler)
            handler.close()


def _run_lines(lines, store: TodoStore, context: str) -> None:
    try:
        for line in lines:
            run_line(line.rstrip("\n"), store)
    except Exception as e:
        log_path = log_exception(e, context)
        typer.echo(f"Error: {e} (details in {log_path})", err=True)
        raise typer.Exit(1)


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

@app.command()
def run(
    file: Annotated[Optional[Path], typer.Argument(
        help="File of queries, one per line (default: stdin)",
        exists=True,
        dir_okay=False,
        readable=True,
    )] = None,
):
    """Execute queries line by line against a fresh list."""
    with _open_store() as store:
        if file is None:
            _run_lines(sys.stdin, store, "run")
        else:
            with open(file, encoding="utf-8") as f:
                _run_lines(f, store, "run")


@app.command()
def shell():
    """Interactive prompt; 'quit' or EOF to leave."""
    def prompt_lines():
        while True:
            try:
                line = input("> ")
            except EOFError:
                typer.echo()
                return
            if line.strip() in QUIT_COMMANDS:
                return
            yield line

    with _open_store() as store:
        _run_lines(prompt_lines(), store, "shell")


@app.command()
def config():
    """Show the effective configuration."""
    cfg = _get_config()
    typer.echo(f"# {cfg.config_path}")
    typer.echo(tomli_w.dumps(cfg.to_dict()).rstrip())
    typer.echo(f"# effective workers: {cfg.effective_workers()}")


def main():
    app()


if __name__ == "__main__":
    main()
