"""
MongoDB Utility Module

Thin wrapper around a single PyMongo collection. Every method is a direct
delegation to the driver: failures are logged and re-raised, never retried.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import MONGO_TIMEOUT_MS, MONGO_URI
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONNECTION_STRING = MONGO_URI
DEFAULT_TIMEOUT_MS = MONGO_TIMEOUT_MS


class MongoDB:
    """
    MongoDB utility class bound to one database and one collection.

    Example:
        >>> with MongoDB("library", "books") as db:
        ...     db.filter({"genre": "Fiction"})
    """

    def __init__(
            self,
            db_name: str,
            collection_name: str,
            connection_str: str = DEFAULT_CONNECTION_STRING,
            timeout_ms: int = DEFAULT_TIMEOUT_MS,
            client: Optional[MongoClient] = None,
            **kwargs
    ) -> None:
        """
        Create the client, select database and collection, and ping the server.

        Args:
            db_name (str): Name of the database.
            collection_name (str): Name of the collection.
            connection_str (str): MongoDB connection string.
            timeout_ms (int): Server selection, connect and socket timeout in milliseconds.
            client (Optional[MongoClient]): Pre-built client to use instead of creating one.
            **kwargs: Additional MongoClient parameters.

        Raises:
            ServerSelectionTimeoutError: If the server cannot be reached in time.
            OperationFailure: If authentication is rejected.
        """
        self.client: MongoClient = client if client is not None else MongoClient(
            connection_str,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
            **kwargs
        )
        try:
            self.client.admin.command('ping')
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            self.client.close()
            raise

        self.db: Database = self.client[db_name]
        self.collection: Collection = self.db[collection_name]
        logger.info(f"Connected to MongoDB: {db_name}.{collection_name}")

    def __enter__(self) -> 'MongoDB':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def insert_many(self, data: List[Dict[str, Any]], ordered: bool = True) -> List[str]:
        """
        Insert multiple documents.

        Args:
            data (List[Dict[str, Any]]): Documents to insert.
            ordered (bool): Stop at the first failing document.

        Returns:
            List[str]: Inserted document IDs as strings.
        """
        if not data:
            logger.warning("insert_many called with empty data list")
            return []
        try:
            result = self.collection.insert_many(data, ordered=ordered)
            logger.info(f"Inserted {len(result.inserted_ids)} documents")
            return [str(_id) for _id in result.inserted_ids]
        except PyMongoError as e:
            logger.error(f"Error inserting multiple documents: {e}")
            raise

    def filter(
            self,
            filter: Optional[Dict[str, Any]] = None,
            show_id: bool = False,
            projection: Optional[Dict[str, Any]] = None,
            sort: Optional[List[Tuple[str, int]]] = None,
            limit: int = 0,
            skip: int = 0,
            **kwargs
    ) -> List[Dict[str, Any]]:
        """
        Filter documents with projection, sorting, and pagination support.

        The cursor is sorted first, then skipped, then limited.

        Args:
            filter (Optional[Dict[str, Any]]): Query filter.
            show_id (bool): Whether to include '_id' in results.
            projection (Optional[Dict[str, Any]]): Fields to include/exclude.
            sort (Optional[List[Tuple[str, int]]]): Sort specification.
            limit (int): Maximum number of documents to return (0 = no limit).
            skip (int): Number of documents to skip.
            **kwargs: Additional find parameters.

        Returns:
            List[Dict[str, Any]]: List of matching documents.

        Example:
            >>> db.filter(
            ...     {"published_year": {"$gt": 1813}},
            ...     projection={"title": 1, "price": 1},
            ...     sort=[("price", -1)],
            ...     limit=10
            ... )
        """
        try:
            if projection is None:
                projection = None if show_id else {"_id": 0}

            cursor = self.collection.find(filter or {}, projection, **kwargs)

            if sort:
                cursor = cursor.sort(sort)
            if skip > 0:
                cursor = cursor.skip(skip)
            if limit > 0:
                cursor = cursor.limit(limit)

            result = []
            for item in cursor:
                if "_id" in item:
                    item["_id"] = str(item["_id"])
                result.append(item)

            logger.debug(f"Filter returned {len(result)} documents")
            return result
        except PyMongoError as e:
            logger.error(f"Error filtering documents: {e}")
            raise

    def count(self, filter: Optional[Dict[str, Any]] = None) -> int:
        try:
            return self.collection.count_documents(filter or {})
        except PyMongoError as e:
            logger.error(f"Error counting documents: {e}")
            raise

    def update_one(self, filter: Dict[str, Any], update: Dict[str, Any], **kwargs) -> Dict[str, int]:
        """
        Update a single document matching the filter.

        Args:
            filter (Dict[str, Any]): Query filter.
            update (Dict[str, Any]): Update document, e.g. ``{"$set": {...}}``.
            **kwargs: Additional update_one parameters.

        Returns:
            Dict[str, int]: Matched and modified counts.
        """
        try:
            result = self.collection.update_one(filter, update, **kwargs)
            return {"matched": result.matched_count, "modified": result.modified_count}
        except PyMongoError as e:
            logger.error(f"Error in update_one: {e}")
            raise

    def delete_one(self, filter: Dict[str, Any], **kwargs) -> Dict[str, int]:
        """
        Delete a single document matching the filter.

        Args:
            filter (Dict[str, Any]): Query filter.
            **kwargs: Additional delete_one parameters.

        Returns:
            Dict[str, int]: Deleted count (0 or 1).
        """
        try:
            result = self.collection.delete_one(filter, **kwargs)
            return {"deleted": result.deleted_count}
        except PyMongoError as e:
            logger.error(f"Error in delete_one: {e}")
            raise

    def drop_collection(self, confirm: bool = False) -> None:
        """
        Drop the current collection.

        Args:
            confirm (bool): Must be True to execute.

        Raises:
            ValueError: If confirm is not True.
        """
        if not confirm:
            raise ValueError("Must set confirm=True to drop collection. This action is irreversible!")

        try:
            self.db.drop_collection(self.collection.name)
            logger.warning(f"Dropped collection: {self.collection.name}")
        except PyMongoError as e:
            logger.error(f"Error dropping collection: {e}")
            raise

    # ========== INDEX MANAGEMENT ==========

    def create_index(self, keys: Union[str, List[Tuple[str, int]]], **kwargs) -> str:
        """
        Create an index on the collection.

        Args:
            keys: Field name(s) to index. Can be:
                - str: Single field name (ascending)
                - List[Tuple[str, int]]: [(field, direction), ...]
            **kwargs: Additional create_index parameters.

        Returns:
            str: Name of the created (or already existing) index.

        Example:
            >>> db.create_index([("author", 1), ("published_year", 1)])
            'author_1_published_year_1'
        """
        try:
            if isinstance(keys, str):
                keys = [(keys, ASCENDING)]

            index_name = self.collection.create_index(keys, **kwargs)
            logger.info(f"Created index: {index_name}")
            return index_name
        except PyMongoError as e:
            logger.error(f"Error creating index: {e}")
            raise

    # ========== AGGREGATION ==========

    def aggregate(self, pipeline: List[Dict[str, Any]], **kwargs) -> List[Dict[str, Any]]:
        """
        Perform aggregation pipeline query.

        Args:
            pipeline (List[Dict[str, Any]]): Aggregation pipeline stages.
            **kwargs: Additional aggregate parameters.

        Returns:
            List[Dict[str, Any]]: Aggregation results.

        Example:
            >>> db.aggregate([
            ...     {"$group": {"_id": "$genre", "averagePrice": {"$avg": "$price"}}}
            ... ])
        """
        try:
            results = list(self.collection.aggregate(pipeline, **kwargs))
            logger.debug(f"Aggregation returned {len(results)} results")
            return results
        except PyMongoError as e:
            logger.error(f"Error in aggregation: {e}")
            raise

    # ========== DIAGNOSTICS ==========

    def explain(self, filter: Dict[str, Any], verbosity: str = "executionStats") -> Dict[str, Any]:
        """
        Run the ``explain`` command for a find on the current collection.

        Args:
            filter (Dict[str, Any]): Query filter to explain.
            verbosity (str): queryPlanner, executionStats or allPlansExecution.

        Returns:
            Dict[str, Any]: The full explain output from the server.
        """
        try:
            return self.db.command({
                "explain": {"find": self.collection.name, "filter": filter},
                "verbosity": verbosity,
            })
        except PyMongoError as e:
            logger.error(f"Error in explain: {e}")
            raise

    def close(self) -> None:
        """
        Close the MongoDB client connection.
        """
        self.client.close()
        logger.info("MongoDB connection closed")


def summarize_explain(plan: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pull the headline execution statistics out of an explain document.

    Args:
        plan (Dict[str, Any]): Output of :meth:`MongoDB.explain`.

    Returns:
        Dict[str, Any]: nReturned, totalKeysExamined, totalDocsExamined,
        executionTimeMillis, plus the winning plan's stage and index name.
    """
    stats = plan.get("executionStats", {})
    winning = plan.get("queryPlanner", {}).get("winningPlan", {})
    winning = winning.get("queryPlan", winning)
    # The index scan, when there is one, sits below FETCH/PROJECTION stages;
    # OR and SORT_MERGE keep their children in inputStages
    stage = winning
    while "indexName" not in stage:
        if "inputStage" in stage:
            stage = stage["inputStage"]
        elif stage.get("inputStages"):
            stage = stage["inputStages"][0]
        else:
            break

    return {
        "nReturned": stats.get("nReturned"),
        "totalKeysExamined": stats.get("totalKeysExamined"),
        "totalDocsExamined": stats.get("totalDocsExamined"),
        "executionTimeMillis": stats.get("executionTimeMillis"),
        "stage": winning.get("stage"),
        "indexName": stage.get("indexName"),
    }
