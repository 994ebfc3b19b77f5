"""
Bookshelf

Runs a fixed catalog of MongoDB queries against a ``books`` collection.
"""

from .models import Book
from .mongo import MongoDB
from .queries import CATALOG, QueryKind, QueryRequest
from .runner import RunResult, RunStatus, execute, run

__all__ = [
    "Book",
    "CATALOG",
    "MongoDB",
    "QueryKind",
    "QueryRequest",
    "RunResult",
    "RunStatus",
    "execute",
    "run",
]
