from bookshelf.models import Book
from bookshelf.seed import CLASSICS, make_fake_books, seed_books


def test_fake_books_are_valid_and_reproducible():
    first = make_fake_books(5, seed=42)
    second = make_fake_books(5, seed=42)

    assert len(first) == 5
    assert all(isinstance(book, Book) for book in first)
    assert [b.model_dump() for b in first] == [b.model_dump() for b in second]


def test_classics_cover_catalog_lookups():
    titles = {book["title"] for book in CLASSICS}
    assert {"Brave New World", "The Great Gatsby"} <= titles
    assert any(book["author"] == "J.R.R. Tolkien" for book in CLASSICS)
    assert any(book["genre"] == "Fiction" for book in CLASSICS)


def test_seed_books_inserts_classics_and_fakes(books_db):
    ids = seed_books(books_db, 3, seed=7)

    assert len(ids) == len(CLASSICS) + 3
    assert books_db.count() == len(CLASSICS) + 3


def test_seed_books_can_start_over(books_db):
    seed_books(books_db, 2, seed=1)
    seed_books(books_db, 0, drop_existing=True)

    assert books_db.count() == len(CLASSICS)
