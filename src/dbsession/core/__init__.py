"""
Core Module
============

Shared core utilities and abstractions used across the application.
"""

from dbsession.core.exceptions import (
    ApplicationException,
    RepositoryException,
    ConfigurationException,
    DatabaseConnectionError,
)

__all__ = [
    "ApplicationException",
    "RepositoryException",
    "ConfigurationException",
    "DatabaseConnectionError",
]
