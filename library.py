import json
import logging
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from book import Book, normalize_id
from exceptions import ConflictError, InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


class Library:
    """Holds the book collection in memory, keyed by book id.

    Every operation runs under a single lock, so concurrent requests never see a
    half-applied create, update or delete. Books handed out are copies; mutating
    them does not touch the stored record.
    """

    def __init__(self) -> None:
        self._books: Dict[str, Book] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        return self.count()

    # ------------------------- Core operations ------------------------- #
    def list_books(self) -> List[Book]:
        """Return every book, ordered ascending by id."""
        with self._lock:
            books = sorted(self._books.values(), key=lambda b: b.sort_key)
            return [b.copy() for b in books]

    def get_book(self, book_id: Any) -> Book:
        with self._lock:
            return self._find(book_id).copy()

    def add_book(self, book: Union[Book, Mapping[str, Any]]) -> Book:
        """Add a book. Rejects a missing id and an id that is already taken."""
        if not isinstance(book, Book):
            book = Book.from_dict(book)
        with self._lock:
            if book.key in self._books:
                raise ConflictError(book.id)
            self._books[book.key] = book.copy()
            logger.info(f"Book created: id={book.id!r}")
            return book.copy()

    def update_book(self, book_id: Any, fields: Optional[Mapping[str, Any]] = None) -> Book:
        """Merge ``fields`` into the stored book and return the merged result.

        Fields not mentioned keep their value, and an ``id`` in ``fields`` is ignored.
        """
        if fields is None:
            fields = {}
        if not isinstance(fields, Mapping):
            raise InvalidArgumentError("Update must be a JSON object.", book_id=book_id)
        with self._lock:
            current = self._find(book_id)
            updated = current.merged(fields)
            self._books[current.key] = updated
            logger.info(f"Book updated: id={current.id!r}, fields={sorted(k for k in fields if k != 'id')}")
            return updated.copy()

    def remove_book(self, book_id: Any) -> None:
        with self._lock:
            book = self._find(book_id)
            del self._books[book.key]
            logger.info(f"Book removed: id={book.id!r}")

    # ------------------------- Bulk helpers ------------------------- #
    def load_books(self, records: Iterable[Union[Book, Mapping[str, Any]]]) -> int:
        """Add each record in order; stops at the first invalid or duplicate one."""
        loaded = 0
        with self._lock:
            for record in records:
                self.add_book(record)
                loaded += 1
        return loaded

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def clear(self) -> None:
        """Drop every book (useful for testing)."""
        with self._lock:
            self._books.clear()

    # ------------------------- Utilities ------------------------- #
    def _find(self, book_id: Any) -> Book:
        # Caller must hold the lock.
        key = normalize_id(book_id)
        book = self._books.get(key) if key else None
        if book is None:
            raise NotFoundError(book_id)
        return book


def read_seed_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a JSON array of book records from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise InvalidArgumentError(f"Seed file {path} must contain a JSON array of books.")
    return data
