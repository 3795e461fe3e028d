"""
Dispatch parsed queries against a store and render the results.
"""

import logging
from dataclasses import dataclass
from typing import Union

import typer

from .errors import NotFoundError, QueryParseError
from .parser import AddQuery, DoneQuery, Query, SearchQuery, parse_query
from .store import TodoStore
from .types import Index, TodoItem

logger = logging.getLogger(__name__)

INVALID_INDEX_MESSAGE = "Invalid Index"


@dataclass(frozen=True)
class Added:
    index: Index


@dataclass(frozen=True)
class Completed:
    index: Index


@dataclass(frozen=True)
class Found:
    items: tuple[TodoItem, ...]


QueryResult = Union[Added, Completed, Found]


def run_query(query: Query, store: TodoStore) -> QueryResult:
    """
    Execute a parsed query.

    Raises:
        NotFoundError: If a done query names an unknown index
    """
    if isinstance(query, AddQuery):
        return Added(store.push(query.description, query.tags))
    if isinstance(query, DoneQuery):
        return Completed(store.done_with_index(query.index))
    if isinstance(query, SearchQuery):
        indexes = store.search(query.params)
        return Found(tuple(store.get(i) for i in indexes))
    raise TypeError(f"Unsupported query: {query!r}")


def render(result: QueryResult) -> str:
    """Format a query result for terminal output."""
    if isinstance(result, Added):
        return str(result.index)
    if isinstance(result, Completed):
        return "done"
    lines = [f"{len(result.items)} item(s) found"]
    lines.extend(str(item) for item in result.items)
    return "\n".join(lines)


def run_line(line: str, store: TodoStore) -> bool:
    """
    Parse and execute one line, echoing the result.

    Blank lines are skipped. Unparseable lines are logged and skipped.
    Unknown indexes print an error to stderr.

    Returns:
        True if a query was executed successfully
    """
    if not line.strip():
        return False
    try:
        query = parse_query(line)
    except QueryParseError as e:
        logger.warning("Skipping query: %s", e)
        return False

    try:
        result = run_query(query, store)
    except NotFoundError as e:
        logger.info("Query failed: %s", e)
        typer.echo(f"Error: {INVALID_INDEX_MESSAGE}", err=True)
        return False

    typer.echo(render(result))
    return True
