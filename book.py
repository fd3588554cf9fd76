from __future__ import annotations

import copy
import math
import re
from typing import Any, Mapping

from exceptions import InvalidArgumentError

NUMERIC_ID = re.compile(r"^-?\d+(\.\d+)?$")


def normalize_id(raw: Any) -> str:
    """Return the lookup key for a book id, or "" when the id is missing.

    Numeric ids and their string form share a key, so a body id of ``1`` and the
    path segment ``"1"`` address the same book.
    """
    if raw is None or isinstance(raw, bool):
        return ""
    if isinstance(raw, int):
        return str(raw) if raw != 0 else ""
    if isinstance(raw, float):
        if not math.isfinite(raw) or raw == 0:
            return ""
        return str(int(raw)) if raw.is_integer() else repr(raw)
    if isinstance(raw, str):
        return raw.strip()
    return ""


def id_sort_key(raw: Any) -> tuple:
    """Numeric ids sort numerically ahead of string ids, which sort lexicographically.

    Only plain decimal strings such as ``"10"`` or ``"-2.5"`` count as numeric.
    """
    key = normalize_id(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return (0, raw, key)
    if NUMERIC_ID.match(key):
        return (0, float(key), key)
    return (1, 0.0, key)


def check_finite(value: Any) -> None:
    """Reject NaN and infinities anywhere in a record; JSON has no way to carry them."""
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidArgumentError(f"Non-finite number {value!r} is not valid JSON.")
    if isinstance(value, Mapping):
        for item in value.values():
            check_finite(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            check_finite(item)


class Book:
    """A single book: a reserved ``id`` plus any number of named fields."""

    def __init__(self, id: Any, /, **fields: Any) -> None:
        key = normalize_id(id)
        if not key:
            raise InvalidArgumentError("Book id is required.", book_id=id)
        fields.pop("id", None)
        check_finite(fields)
        self.id = id
        self.key = key
        self.fields: dict[str, Any] = copy.deepcopy(fields)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        title = self.fields.get("title")
        return f"{title} (id: {self.id})" if title else f"Book {self.id}"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Book(id={self.id!r}, fields={self.fields!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def sort_key(self) -> tuple:
        return id_sort_key(self.id)

    def copy(self) -> "Book":
        return Book(self.id, **self.fields)

    def merged(self, changes: Mapping[str, Any]) -> "Book":
        """Return a new book with ``changes`` laid over this one. The id never changes."""
        fields = dict(self.fields)
        fields.update({k: v for k, v in changes.items() if k != "id"})
        return Book(self.id, **fields)

    def to_dict(self) -> dict:
        return {"id": self.id, **copy.deepcopy(self.fields)}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Book":
        if not isinstance(data, Mapping):
            raise InvalidArgumentError("Book must be a JSON object.")
        fields = {str(k): v for k, v in data.items() if k != "id"}
        return Book(data.get("id"), **fields)
