"""
Core Exceptions
================

Custom exceptions for the application.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class DatabaseConnectionError(RepositoryException):
    """
    Raised when a database connection could not be established.

    Carries the name of the driver that was in use and the original
    failure, which is also set as ``__cause__`` by the raiser.
    """

    def __init__(
        self,
        driver: str,
        message: str,
        cause: Optional[BaseException] = None,
    ):
        self.driver = driver
        self.cause = cause
        super().__init__(message, {"driver": driver})

    def __str__(self) -> str:
        return f"Unable to connect using driver '{self.driver}': {self.message}"
