"""
Parser for one-line todo queries.

    add "buy groceries" #errand #weekend
    done 0
    search buy #errand
"""

import re
from dataclasses import dataclass
from typing import Union

from .errors import QueryParseError
from .types import Description, Index, SearchParams, Tag

TAG_PREFIX = "#"

# add "<description>" <rest>
_ADD_PATTERN = re.compile(r'^add\s+"([^"]*)"(.*)$', re.DOTALL)
_DONE_PATTERN = re.compile(r'^done\s+(\d+)$')


@dataclass(frozen=True)
class AddQuery:
    description: Description
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class DoneQuery:
    index: Index


@dataclass(frozen=True)
class SearchQuery:
    params: SearchParams


Query = Union[AddQuery, DoneQuery, SearchQuery]


def _parse_tags(tokens: list[str], line: str) -> tuple[Tag, ...]:
    tags = []
    for token in tokens:
        if not token.startswith(TAG_PREFIX) or len(token) == len(TAG_PREFIX):
            raise QueryParseError(f"Expected #tag, got {token!r}", line)
        tags.append(Tag(token[len(TAG_PREFIX):]))
    return tuple(tags)


def parse_query(line: str) -> Query:
    """
    Parse a query line.

    Raises:
        QueryParseError: If the line is not a valid add, done or search query
    """
    text = line.strip()
    command = text.split(None, 1)[0] if text else ""

    if command == "add":
        m = _ADD_PATTERN.match(text)
        if not m:
            raise QueryParseError('Expected: add "<description>" [#tag ...]', line)
        return AddQuery(
            description=Description(m.group(1)),
            tags=_parse_tags(m.group(2).split(), line),
        )

    if command == "done":
        m = _DONE_PATTERN.match(text)
        if not m:
            raise QueryParseError("Expected: done <index>", line)
        return DoneQuery(index=Index(int(m.group(1))))

    if command == "search":
        words = []
        tags = []
        for term in text.split()[1:]:
            if term.startswith(TAG_PREFIX):
                tags.extend(t.value for t in _parse_tags([term], line))
            else:
                words.append(term)
        return SearchQuery(params=SearchParams(words=tuple(words), tags=tuple(tags)))

    raise QueryParseError("Unknown command", line)
