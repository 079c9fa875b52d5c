"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

The ticket solver itself never raises for any ticket text; these exceptions
cover the edges around it (configuration loading, lookups, request
validation) and are handled at the application boundaries.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class KnowledgeBaseException(ConfigurationException):
    """Exception raised when the scenario knowledge base cannot be loaded."""

    def __init__(
        self,
        source: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.source = source
        super().__init__(
            f"Knowledge base {source}: {message}",
            details or {"source": source}
        )
