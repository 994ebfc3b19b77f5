"""
Sequential executor for the query catalog.

``run`` opens one connection, issues every request in order, and reports the
outcome as a :class:`RunResult`. The first driver error stops the run; the
connection is closed on every path once it has been opened.
"""

from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from pydantic import BaseModel, Field
from pymongo.errors import PyMongoError

from . import config
from .logger import get_logger
from .mongo import MongoDB, summarize_explain
from .queries import CATALOG, QueryKind, QueryRequest
from .timing import timeit

logger = get_logger(__name__)


class RunStatus(str, Enum):
    SUCCESS = "success"
    CONNECTION_FAILED = "connection_failed"
    OPERATION_FAILED = "operation_failed"


class RunResult(BaseModel):
    status: RunStatus
    completed: List[str] = Field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCESS


def open_connection() -> MongoDB:
    """Open the configured database and collection."""
    return MongoDB(
        config.MONGO_DB,
        config.MONGO_COLLECTION,
        connection_str=config.MONGO_URI,
        timeout_ms=config.MONGO_TIMEOUT_MS,
    )


@timeit(threshold=1.0)
def execute(db: MongoDB, request: QueryRequest) -> Any:
    """
    Issue one request and return whatever the driver returned.

    Args:
        db (MongoDB): Open connection.
        request (QueryRequest): The request to issue.

    Returns:
        Any: Documents for find/aggregate, counts for update/delete, the index
        name for create_index, and execution statistics for explain.
    """
    kind = request.kind
    if kind is QueryKind.FIND:
        return db.filter(
            request.filter,
            projection=request.projection,
            sort=request.sort,
            skip=request.skip,
            limit=request.limit,
        )
    if kind is QueryKind.UPDATE_ONE:
        return db.update_one(request.filter, request.update)
    if kind is QueryKind.DELETE_ONE:
        return db.delete_one(request.filter)
    if kind is QueryKind.AGGREGATE:
        return db.aggregate(request.pipeline)
    if kind is QueryKind.CREATE_INDEX:
        return db.create_index(request.keys)
    if kind is QueryKind.EXPLAIN:
        plan = db.explain(request.filter)
        logger.info(f"Explain summary: {summarize_explain(plan)}")
        return plan.get("executionStats", {})
    raise ValueError(f"Unsupported request kind: {kind}")


def _report(request: QueryRequest, result: Any) -> None:
    if isinstance(result, list):
        logger.info(f"{request.name}: {len(result)} result(s)")
        for doc in result:
            logger.info(f"  {doc}")
    else:
        logger.info(f"{request.name}: {result}")


def run(
        requests: Iterable[QueryRequest] = CATALOG,
        connect: Callable[[], MongoDB] = open_connection
) -> RunResult:
    """
    Run the requests one after another against a single connection.

    Args:
        requests (Iterable[QueryRequest]): Requests in execution order.
        connect (Callable[[], MongoDB]): Factory for the connection.

    Returns:
        RunResult: Which steps completed and, on failure, where and why.
    """
    try:
        db = connect()
    except PyMongoError as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        return RunResult(status=RunStatus.CONNECTION_FAILED, error=str(e))

    completed: List[str] = []
    current: Optional[str] = None
    try:
        for request in requests:
            current = request.name
            logger.info(f"--- {request.name} ({request.kind.value}) ---")
            _report(request, execute(db, request))
            completed.append(request.name)
    except PyMongoError as e:
        logger.error(f"Step '{current}' failed, skipping the remaining steps: {e}")
        return RunResult(
            status=RunStatus.OPERATION_FAILED,
            completed=completed,
            failed_step=current,
            error=str(e),
        )
    finally:
        db.close()

    logger.info(f"Completed {len(completed)} steps")
    return RunResult(status=RunStatus.SUCCESS, completed=completed)
