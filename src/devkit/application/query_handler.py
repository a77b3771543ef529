"""
Base Query Handler
Abstract base for all query handlers
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from devkit.application.base_query import BaseQuery
from devkit.domain import Error, Result
from devkit.logging import get_logger

logger = get_logger(__name__)

TQuery = TypeVar("TQuery", bound=BaseQuery)
TResult = TypeVar("TResult")


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """
    Abstract base class for query handlers.

    Query handlers execute read operations without modifying state.

    Type Parameters:
        TQuery: Query type this handler processes
        TResult: Value type of a successful Result
    """

    @abstractmethod
    async def handle(self, query: TQuery) -> Result[TResult]:
        ...

    async def __call__(self, query: TQuery) -> Result[TResult]:
        query_name = query.__class__.__name__

        logger.debug("Executing query", query=query_name)
        try:
            result = await self.handle(query)
        except Exception as e:
            logger.exception("Query execution raised", query=query_name, error=str(e))
            return Result.failure(Error.from_exception(e))

        if result.is_success():
            logger.debug("Query executed successfully", query=query_name)
        else:
            logger.info(
                "Query returned a failure",
                query=query_name,
                error_codes=[error.code for error in result.errors],
            )
        return result
