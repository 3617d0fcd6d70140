"""AWS Organizations membership lookups."""

from .accounts import list_accounts

__all__ = ["list_accounts"]
