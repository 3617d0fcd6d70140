"""Central EventBridge rule synchronization for an organizational unit."""

from .handler import lambda_handler

__version__ = "1.0.0"
__description__ = "Keeps the central event rule in sync with OU membership"

__all__ = ["lambda_handler"]
