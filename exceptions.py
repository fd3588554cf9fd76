"""Exceptions raised by the book store."""

from typing import Any


class LibraryError(Exception):
    """Base exception for book store errors."""


class InvalidArgumentError(LibraryError, ValueError):
    """Raise when a book id is missing or the input is not a record."""

    def __init__(self, message: str, book_id: Any = None) -> None:
        self.book_id = book_id
        super().__init__(message)


class NotFoundError(LibraryError, LookupError):
    """Raise when no book exists for the given id."""

    def __init__(self, book_id: Any) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id!r} not found.")


class ConflictError(LibraryError, ValueError):
    """Raise when creating a book whose id is already taken."""

    def __init__(self, book_id: Any) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id!r} already exists.")
