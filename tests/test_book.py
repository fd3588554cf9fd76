import pytest

from book import Book, id_sort_key, normalize_id
from exceptions import InvalidArgumentError


@pytest.mark.parametrize("raw, expected", [
    (1, "1"),
    ("1", "1"),
    (" 42 ", "42"),
    (2.0, "2"),
    (2.5, "2.5"),
    ("abc", "abc"),
    (-3, "-3"),
])
def test_normalize_id(raw, expected):
    assert normalize_id(raw) == expected

@pytest.mark.parametrize("raw", [None, "", "   ", 0, 0.0, True, False, [], {}, [1], float("inf"), float("-inf"), float("nan")])
def test_normalize_id_rejects_missing(raw):
    assert normalize_id(raw) == ""

def test_numeric_and_string_ids_share_a_key():
    assert Book(1).key == Book("1").key

def test_book_requires_id():
    with pytest.raises(InvalidArgumentError):
        Book(None, title="No id")
    with pytest.raises(InvalidArgumentError):
        Book.from_dict({"title": "No id"})

def test_from_dict_rejects_non_mapping():
    with pytest.raises(InvalidArgumentError):
        Book.from_dict(["id", 1])

def test_to_dict_round_trip_keeps_original_id_type():
    data = {"id": 1, "title": "Book 1", "author": "Author 1", "published_date": "2022-01-01", "price": 9.99}
    book = Book.from_dict(data)
    assert book.id == 1
    assert book.to_dict() == data

def test_merged_overwrites_named_fields_only():
    book = Book(1, title="Old", author="Someone")
    merged = book.merged({"title": "New", "price": 5})
    assert merged.to_dict() == {"id": 1, "title": "New", "author": "Someone", "price": 5}
    # the original is untouched
    assert book.fields == {"title": "Old", "author": "Someone"}

def test_merged_never_changes_id():
    book = Book(1, title="Old")
    assert book.merged({"id": 99, "title": "New"}).id == 1

def test_copy_is_independent():
    book = Book(1, tags=["a"])
    clone = book.copy()
    clone.fields["tags"].append("b")
    assert book.fields["tags"] == ["a"]
    assert clone == Book(1, tags=["a", "b"])

def test_sort_key_orders_numbers_numerically_before_strings():
    keys = ["b", "10", "2", "a", "1.5"]
    assert sorted(keys, key=id_sort_key) == ["1.5", "2", "10", "a", "b"]

def test_sort_key_only_treats_plain_decimals_as_numbers():
    keys = ["1_000", "5", "abc", "1e3"]
    assert sorted(keys, key=id_sort_key) == ["5", "1_000", "1e3", "abc"]

def test_sort_key_numeric_ids_before_strings():
    assert sorted([10, "9", 2.5, "x"], key=id_sort_key) == [2.5, "9", 10, "x"]

@pytest.mark.parametrize("value", [float("nan"), float("inf"), [1, float("-inf")], {"usd": float("nan")}])
def test_book_rejects_non_finite_fields(value):
    with pytest.raises(InvalidArgumentError):
        Book(1, price=value)
