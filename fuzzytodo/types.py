"""
Data types for todo items and queries.
"""

from dataclasses import dataclass, field

from .matching import Signature


@dataclass(frozen=True, order=True)
class Index:
    """Identifier of a todo item, assigned in insertion order."""
    value: int

    def increment(self) -> "Index":
        return Index(self.value + 1)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Description:
    """Free-text description of an item, as typed by the user."""
    value: str

    def words(self) -> list[str]:
        """Split on single spaces; empty tokens are kept."""
        return self.value.split(" ")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tag:
    """A label attached to an item (without the leading '#')."""
    value: str

    @classmethod
    def from_strings(cls, values: list[str]) -> list["Tag"]:
        return [cls(v) for v in values]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TodoItem:
    """
    A stored todo item.

    This is a read-only snapshot. Completion replaces the stored item
    with a copy whose done flag is set.

    Attributes:
        index: Identifier assigned at insertion
        description: Description words, verbatim
        tags: Labels, verbatim
        done: Whether the item has been completed
        words_signature: Signature of the description words
        tags_signature: Signature of the labels
    """
    index: Index
    description: tuple[str, ...]
    tags: tuple[str, ...]
    done: bool = False
    words_signature: Signature = field(default=(), repr=False)
    tags_signature: Signature = field(default=(), repr=False)

    @property
    def text(self) -> str:
        """Description words joined back into the original text."""
        return " ".join(self.description)

    def __str__(self) -> str:
        tags = "".join(f" #{t}" for t in self.tags)
        return f'{self.index} "{self.text}"{tags}'


@dataclass(frozen=True)
class SearchParams:
    """Word and label patterns of a search query."""
    words: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
