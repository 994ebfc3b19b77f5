import pytest
from pydantic import ValidationError

from bookshelf.queries import CATALOG, QueryKind, QueryRequest, get_request


def test_catalog_order():
    assert [r.name for r in CATALOG] == [
        "books_by_genre",
        "books_published_after",
        "books_by_author",
        "update_book_price",
        "delete_book_by_title",
        "in_stock_recent_books",
        "book_summaries",
        "books_by_price_ascending",
        "books_by_price_descending",
        "books_page_two",
        "average_price_by_genre",
        "most_prolific_author",
        "books_by_decade",
        "title_index",
        "author_year_index",
        "explain_title_lookup",
    ]


def test_names_are_unique():
    names = [r.name for r in CATALOG]
    assert len(names) == len(set(names))


@pytest.mark.parametrize("name, expected", [
    ("books_by_genre", {"genre": "Fiction"}),
    ("books_published_after", {"published_year": {"$gt": 1813}}),
    ("books_by_author", {"author": "J.R.R. Tolkien"}),
    ("in_stock_recent_books", {"in_stock": True, "published_year": {"$gt": 2010}}),
])
def test_find_filters_are_literal(name, expected):
    request = get_request(name)
    assert request.kind is QueryKind.FIND
    assert request.filter == expected


def test_update_sets_price_on_one_title():
    request = get_request("update_book_price")
    assert request.kind is QueryKind.UPDATE_ONE
    assert request.filter == {"title": "Brave New World"}
    assert request.update == {"$set": {"price": 19.99}}


def test_delete_targets_one_title():
    request = get_request("delete_book_by_title")
    assert request.kind is QueryKind.DELETE_ONE
    assert request.filter == {"title": "The Great Gatsby"}


def test_projection_keeps_title_author_price():
    request = get_request("book_summaries")
    assert request.filter == {}
    assert request.projection == {"title": 1, "author": 1, "price": 1, "_id": 0}


def test_sorts_differ_only_by_direction():
    asc = get_request("books_by_price_ascending")
    desc = get_request("books_by_price_descending")
    assert asc.sort == [("price", 1)]
    assert desc.sort == [("price", -1)]
    assert asc.model_dump(exclude={"name", "sort"}) == desc.model_dump(exclude={"name", "sort"})


def test_pagination_has_no_filter():
    request = get_request("books_page_two")
    assert request.filter == {}
    assert (request.skip, request.limit) == (5, 5)


def test_index_keys():
    assert get_request("title_index").keys == [("title", 1)]
    assert get_request("author_year_index").keys == [("author", 1), ("published_year", 1)]


def test_explain_filters_on_title():
    request = get_request("explain_title_lookup")
    assert request.kind is QueryKind.EXPLAIN
    assert request.filter == {"title": "Brave New World"}


def test_unknown_name():
    with pytest.raises(KeyError):
        get_request("nope")


@pytest.mark.parametrize("kwargs", [
    {"kind": "update_one", "filter": {"title": "x"}},
    {"kind": "delete_one"},
    {"kind": "explain"},
    {"kind": "aggregate", "pipeline": []},
    {"kind": "create_index"},
    {"kind": "drop_everything"},
])
def test_incomplete_requests_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        QueryRequest(name="bad", **kwargs)


def test_requests_are_frozen():
    with pytest.raises(ValidationError):
        get_request("books_by_genre").limit = 10
