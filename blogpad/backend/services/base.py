"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, wrap storage failures and log what
they do.

Usage:
    from blogpad.backend.services.base import BaseService

    class EntryService(BaseService):
        def add(self, title: str, content: str, tags: list[str]) -> Entry:
            self._log_operation("Adding entry", title=title)
            ...
            self._execute_store_operation("persist_entries", self.repo.save, entries)
"""

from typing import Any, Callable, TypeVar

from blogpad.backend.core.exceptions import StorageError
from blogpad.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Error wrapping for store operations
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _execute_store_operation(
        self,
        operation: str,
        func: Callable[..., T],
        *args: Any,
    ) -> T:
        """
        Execute a key-value store operation with error handling.

        Args:
            operation: Description of the operation for logging
            func: Callable performing the store access
            *args: Arguments for func

        Returns:
            Result of func

        Raises:
            StorageError: If the store raises OSError
        """
        try:
            return func(*args)
        except OSError as e:
            self._logger.error(
                "Store error",
                extra={"operation": operation, "error": str(e)},
            )
            raise StorageError(f"Storage operation failed: {operation}") from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
