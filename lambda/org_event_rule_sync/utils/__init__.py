"""Utility functions for the organization event rule sync Lambda."""

from .aws_helpers import (
    get_client,
    get_error_code,
    is_resource_not_found,
)
from .logging_config import get_logger

__all__ = [
    "get_client",
    "get_error_code",
    "is_resource_not_found",
    "get_logger",
]
