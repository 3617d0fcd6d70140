"""AWS helper functions."""

from __future__ import annotations
from typing import Any

import boto3
from botocore.exceptions import ClientError

from .logging_config import get_logger

logger = get_logger()

# Clients are created once per Lambda execution environment and reused
_clients: dict[str, Any] = {}


def get_client(service_name: str, region_name: str) -> Any:
    """Get a cached boto3 client for the given service and region."""
    client_key = f"{service_name}_{region_name}"

    if client_key not in _clients:
        logger.debug(
            "Creating AWS client",
            extra={"service": service_name, "region": region_name},
        )
        _clients[client_key] = boto3.client(service_name, region_name=region_name)

    return _clients[client_key]


def clear_client_cache() -> None:
    """Drop cached clients so the next call recreates them."""
    _clients.clear()


def get_error_code(error: ClientError) -> str:
    """Extract the AWS error code from a ClientError."""
    return error.response.get("Error", {}).get("Code", "")


def is_resource_not_found(error: ClientError) -> bool:
    """Check whether a ClientError means the target resource does not exist."""
    return get_error_code(error) == "ResourceNotFoundException"
