"""Logging configuration using AWS Lambda Powertools."""

import os

from aws_lambda_powertools import Logger

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Structured JSON logging with Lambda context injected by the handler decorator
logger = Logger(
    service="org-event-rule-sync",
    level=LOG_LEVEL,
)


def get_logger():
    """Get the configured logger instance.

    Returns the shared Powertools Logger so every module writes to the same
    structured stream (request_id, function_name and cold_start are added
    once the handler is decorated with ``inject_lambda_context``).
    """
    return logger
