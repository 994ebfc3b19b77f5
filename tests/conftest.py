import mongomock
import pytest

from bookshelf.mongo import MongoDB


class RecordingStore:
    """Stand-in for MongoDB that records every call in order."""

    def __init__(self, fail_on=None, error=None):
        self.calls = []
        self.closed = 0
        self.fail_on = fail_on
        self.error = error

    def _record(self, method, *args, **kwargs):
        self.calls.append((method, args, kwargs))
        if method == self.fail_on:
            raise self.error

    def filter(self, filter=None, **kwargs):
        self._record("filter", filter, **kwargs)
        return [{"title": "stub"}]

    def update_one(self, filter, update):
        self._record("update_one", filter, update)
        return {"matched": 1, "modified": 1}

    def delete_one(self, filter):
        self._record("delete_one", filter)
        return {"deleted": 1}

    def aggregate(self, pipeline):
        self._record("aggregate", pipeline)
        return []

    def create_index(self, keys):
        self._record("create_index", keys)
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    def explain(self, filter):
        self._record("explain", filter)
        return {
            "queryPlanner": {"winningPlan": {"stage": "FETCH", "inputStage": {"stage": "IXSCAN", "indexName": "title_1"}}},
            "executionStats": {"nReturned": 1, "totalKeysExamined": 1, "totalDocsExamined": 1, "executionTimeMillis": 0},
        }

    def close(self):
        self.closed += 1


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def books_db():
    db = MongoDB("library", "books", client=mongomock.MongoClient())
    yield db
    db.close()
