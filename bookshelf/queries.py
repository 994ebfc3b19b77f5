"""
The fixed catalog of requests issued against the books collection.

Each entry is plain data; :func:`bookshelf.runner.execute` is the only code
that interprets it.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pymongo import ASCENDING, DESCENDING


class QueryKind(str, Enum):
    FIND = "find"
    UPDATE_ONE = "update_one"
    DELETE_ONE = "delete_one"
    AGGREGATE = "aggregate"
    CREATE_INDEX = "create_index"
    EXPLAIN = "explain"


class QueryRequest(BaseModel):
    """A single request against the collection, described as data."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: QueryKind
    filter: Dict[str, Any] = Field(default_factory=dict)
    projection: Optional[Dict[str, Any]] = None
    sort: Optional[List[Tuple[str, int]]] = None
    skip: int = Field(0, ge=0)
    limit: int = Field(0, ge=0)
    update: Optional[Dict[str, Any]] = None
    pipeline: Optional[List[Dict[str, Any]]] = None
    keys: Optional[List[Tuple[str, int]]] = None

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "QueryRequest":
        if self.kind is QueryKind.UPDATE_ONE and not (self.filter and self.update):
            raise ValueError(f"{self.name}: update_one needs a filter and an update document")
        if self.kind in (QueryKind.DELETE_ONE, QueryKind.EXPLAIN) and not self.filter:
            raise ValueError(f"{self.name}: {self.kind.value} needs a filter")
        if self.kind is QueryKind.AGGREGATE and not self.pipeline:
            raise ValueError(f"{self.name}: aggregate needs a pipeline")
        if self.kind is QueryKind.CREATE_INDEX and not self.keys:
            raise ValueError(f"{self.name}: create_index needs index keys")
        return self


# floor(published_year / 10) * 10, rendered as e.g. "1810s"
DECADE_EXPRESSION: Dict[str, Any] = {
    "$concat": [
        {"$toString": {"$multiply": [{"$floor": {"$divide": ["$published_year", 10]}}, 10]}},
        "s",
    ]
}

PAGE_SIZE = 5

CATALOG: List[QueryRequest] = [
    QueryRequest(
        name="books_by_genre",
        kind=QueryKind.FIND,
        filter={"genre": "Fiction"},
    ),
    QueryRequest(
        name="books_published_after",
        kind=QueryKind.FIND,
        filter={"published_year": {"$gt": 1813}},
    ),
    QueryRequest(
        name="books_by_author",
        kind=QueryKind.FIND,
        filter={"author": "J.R.R. Tolkien"},
    ),
    QueryRequest(
        name="update_book_price",
        kind=QueryKind.UPDATE_ONE,
        filter={"title": "Brave New World"},
        update={"$set": {"price": 19.99}},
    ),
    QueryRequest(
        name="delete_book_by_title",
        kind=QueryKind.DELETE_ONE,
        filter={"title": "The Great Gatsby"},
    ),
    QueryRequest(
        name="in_stock_recent_books",
        kind=QueryKind.FIND,
        filter={"in_stock": True, "published_year": {"$gt": 2010}},
    ),
    QueryRequest(
        name="book_summaries",
        kind=QueryKind.FIND,
        projection={"title": 1, "author": 1, "price": 1, "_id": 0},
    ),
    QueryRequest(
        name="books_by_price_ascending",
        kind=QueryKind.FIND,
        sort=[("price", ASCENDING)],
    ),
    QueryRequest(
        name="books_by_price_descending",
        kind=QueryKind.FIND,
        sort=[("price", DESCENDING)],
    ),
    QueryRequest(
        name="books_page_two",
        kind=QueryKind.FIND,
        skip=PAGE_SIZE,
        limit=PAGE_SIZE,
    ),
    QueryRequest(
        name="average_price_by_genre",
        kind=QueryKind.AGGREGATE,
        pipeline=[
            {"$group": {"_id": "$genre", "averagePrice": {"$avg": "$price"}}},
        ],
    ),
    QueryRequest(
        name="most_prolific_author",
        kind=QueryKind.AGGREGATE,
        pipeline=[
            {"$group": {"_id": "$author", "bookCount": {"$sum": 1}}},
            {"$sort": {"bookCount": DESCENDING}},
            {"$limit": 1},
        ],
    ),
    QueryRequest(
        name="books_by_decade",
        kind=QueryKind.AGGREGATE,
        pipeline=[
            {"$project": {"decade": DECADE_EXPRESSION}},
            {"$group": {"_id": "$decade", "count": {"$sum": 1}}},
            {"$sort": {"_id": ASCENDING}},
        ],
    ),
    QueryRequest(
        name="title_index",
        kind=QueryKind.CREATE_INDEX,
        keys=[("title", ASCENDING)],
    ),
    QueryRequest(
        name="author_year_index",
        kind=QueryKind.CREATE_INDEX,
        keys=[("author", ASCENDING), ("published_year", ASCENDING)],
    ),
    QueryRequest(
        name="explain_title_lookup",
        kind=QueryKind.EXPLAIN,
        filter={"title": "Brave New World"},
    ),
]


def get_request(name: str) -> QueryRequest:
    """Look up a catalog entry by name."""
    for request in CATALOG:
        if request.name == name:
            return request
    raise KeyError(name)
