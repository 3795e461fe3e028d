"""
In-memory todo store with fuzzy search.

- push(): tokenize → build signatures → append
- done_with_index(): mark an item completed
- search(): filter pending items by word and tag patterns, newest first
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Optional, Sequence

from .config import DEFAULT_PARALLEL_THRESHOLD, default_workers
from .errors import NotFoundError
from .locking import ReadWriteLock
from .matching import build_signature, match_all
from .types import Description, Index, SearchParams, Tag, TodoItem

logger = logging.getLogger(__name__)


def _item_matches(item: TodoItem, words: Sequence[str], tags: Sequence[str]) -> bool:
    return (
        not item.done
        and match_all(words, item.words_signature, item.description)
        and match_all(tags, item.tags_signature, item.tags)
    )


def _filter_chunk(items: Sequence[TodoItem], words: Sequence[str], tags: Sequence[str]) -> list[Index]:
    return [item.index for item in items if _item_matches(item, words, tags)]


class TodoStore:
    """
    Append-only collection of todo items.

    Items are never removed, only completed. Indexes are assigned in
    insertion order and never reused.

    Thread safety: push() and done_with_index() are exclusive; search()
    and get() share access and may run concurrently with each other.
    """

    def __init__(
        self,
        workers: Optional[int] = None,
        parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
    ):
        """
        Args:
            workers: Search worker threads (None for automatic sizing)
            parallel_threshold: Minimum item count before search fans out
        """
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if parallel_threshold < 0:
            raise ValueError(f"parallel_threshold must be >= 0, got {parallel_threshold}")
        self._workers = workers if workers is not None else default_workers()
        self._parallel_threshold = parallel_threshold
        self._top_index = Index(0)
        self._items: list[TodoItem] = []
        self._lock = ReadWriteLock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> "TodoStore":
        """Create a store sized by a TodoConfig."""
        return cls(
            workers=config.effective_workers(),
            parallel_threshold=config.parallel_threshold,
        )

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def push(self, description: Description, tags: Sequence[Tag]) -> Index:
        """Add an item and return its index."""
        return self.insert(description.words(), [t.value for t in tags])

    def insert(self, words: Sequence[str], tags: Sequence[str]) -> Index:
        """
        Add an item from already tokenized words and tags.

        Signatures are computed before the write lock is taken so readers
        only ever see complete items.
        """
        words = tuple(words)
        tags = tuple(tags)
        words_signature = build_signature(words)
        tags_signature = build_signature(tags)

        with self._lock.write_locked():
            index = self._top_index
            self._items.append(TodoItem(
                index=index,
                description=words,
                tags=tags,
                done=False,
                words_signature=words_signature,
                tags_signature=tags_signature,
            ))
            self._top_index = index.increment()

        logger.debug("Added item %s (%d words, %d tags)", index, len(words), len(tags))
        return index

    def done_with_index(self, index: Index) -> Index:
        """
        Mark an item as done.

        Completing an item that is already done succeeds again.

        Raises:
            NotFoundError: If no item was assigned this index
        """
        with self._lock.write_locked():
            position = self._position(index)
            item = self._items[position]
            if not item.done:
                self._items[position] = replace(item, done=True)

        logger.debug("Completed item %s", index)
        return index

    complete = done_with_index

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get(self, index: Index) -> TodoItem:
        """
        Get an item by index.

        Raises:
            NotFoundError: If no item was assigned this index
        """
        with self._lock.read_locked():
            return self._items[self._position(index)]

    def search(self, params: SearchParams) -> list[Index]:
        """
        Find pending items matching every word and tag pattern.

        Results are ordered newest first. Large stores are split into
        contiguous chunks of the reversed item list, filtered on the
        worker pool, and concatenated in chunk order.
        """
        words = tuple(params.words)
        tags = tuple(params.tags)

        with self._lock.read_locked():
            items = self._items[::-1]
            if self._workers <= 1 or len(items) < max(self._parallel_threshold, 2):
                result = _filter_chunk(items, words, tags)
                logger.debug("Sequential search over %d items: %d found", len(items), len(result))
                return result

            chunk_size = -(-len(items) // self._workers)
            chunks = [items[i:i + chunk_size] for i in range(0, len(items), chunk_size)]
            executor = self._get_executor()
            result = []
            for found in executor.map(_filter_chunk, chunks,
                                      [words] * len(chunks), [tags] * len(chunks)):
                result.extend(found)

        logger.debug(
            "Parallel search over %d items in %d chunks: %d found",
            len(items), len(chunks), len(result),
        )
        return result

    @property
    def next_index(self) -> Index:
        """Index the next pushed item will receive."""
        with self._lock.read_locked():
            return self._top_index

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._items)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Shut down the search worker pool.

        Waits for in-flight searches; a later search starts a new pool.
        """
        with self._lock.write_locked():
            with self._executor_lock:
                executor, self._executor = self._executor, None
            if executor is not None:
                executor.shutdown(wait=True)

    def __enter__(self) -> "TodoStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._workers,
                    thread_name_prefix="fuzzytodo-search",
                )
            return self._executor

    def _position(self, index: Index) -> int:
        value = index.value if isinstance(index, Index) else int(index)
        if value < 0 or value >= self._top_index.value:
            logger.info("Item %s not found", index)
            raise NotFoundError(index)
        return value
