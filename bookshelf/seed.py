"""
Development data for the books collection.

The classics below are the titles and authors the query catalog looks for;
the rest is generated with Faker.
"""

from __future__ import annotations

from faker import Faker

from .logger import get_logger
from .models import Book
from .mongo import MongoDB

logger = get_logger(__name__)

GENRES = ["Fiction", "Fantasy", "Dystopian", "Romance", "Mystery", "Science Fiction", "History"]

CLASSICS = [
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance",
     "published_year": 1813, "price": 7.99, "in_stock": True},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "genre": "Fiction",
     "published_year": 1925, "price": 10.99, "in_stock": True},
    {"title": "Brave New World", "author": "Aldous Huxley", "genre": "Dystopian",
     "published_year": 1932, "price": 11.50, "in_stock": False},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1937, "price": 14.99, "in_stock": True},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1954, "price": 24.99, "in_stock": True},
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian",
     "published_year": 1949, "price": 9.99, "in_stock": True},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "genre": "Fiction",
     "published_year": 1960, "price": 12.99, "in_stock": False},
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "genre": "Fiction",
     "published_year": 1951, "price": 8.99, "in_stock": True},
]


def make_fake_books(n: int, *, locale: str = "en_US", seed: int | None = None) -> list[Book]:
    fake = Faker(locale)
    if seed is not None:
        fake.seed_instance(seed)

    books = []
    for _ in range(n):
        books.append(Book(
            title=fake.sentence(nb_words=3).rstrip("."),
            author=fake.name(),
            genre=fake.random_element(GENRES),
            published_year=fake.random_int(min=1800, max=2024),
            price=float(fake.pydecimal(left_digits=2, right_digits=2, positive=True)),
            in_stock=fake.boolean(chance_of_getting_true=70),
        ))
    return books


def seed_books(
        db: MongoDB,
        fake_count: int = 0,
        *,
        locale: str = "en_US",
        seed: int | None = None,
        drop_existing: bool = False,
) -> list[str]:
    """
    Insert the classics plus ``fake_count`` generated books.

    Args:
        db: Open connection to the books collection.
        fake_count: Number of Faker generated books to add.
        locale: Faker locale.
        seed: Seed for reproducible fake data.
        drop_existing: Drop the collection first.

    Returns:
        Inserted document IDs.
    """
    if drop_existing:
        db.drop_collection(confirm=True)

    books = [Book(**raw) for raw in CLASSICS]
    books.extend(make_fake_books(fake_count, locale=locale, seed=seed))
    logger.info(f"Seeding {len(books)} books ({len(CLASSICS)} classics, {fake_count} generated)")
    return db.insert_many([book.model_dump() for book in books])
