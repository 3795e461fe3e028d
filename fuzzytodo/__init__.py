"""
fuzzytodo - todo list with fuzzy subsequence search.

Items carry a description and tags; pending items can be searched by
patterns whose characters must appear, in order, within a word or tag.

Quick Start:
    from fuzzytodo import TodoStore, Description, Tag, SearchParams

    with TodoStore() as store:
        i = store.push(Description("buy groceries"), [Tag("errand")])
        store.search(SearchParams(words=("grc",)))  # → [i]
        store.done_with_index(i)
"""

from .errors import NotFoundError, QueryParseError, TodoError
from .parser import parse_query
from .runner import run_line, run_query
from .store import TodoStore
from .types import Description, Index, SearchParams, Tag, TodoItem

__version__ = "0.1.0"
__all__ = [
    "TodoStore",
    "TodoItem",
    "Index",
    "Description",
    "Tag",
    "SearchParams",
    "parse_query",
    "run_query",
    "run_line",
    "TodoError",
    "NotFoundError",
    "QueryParseError",
]
