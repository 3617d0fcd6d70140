"""EventBridge rule synthesis and convergence."""

from .rules import (
    TargetAttachmentError,
    build_pattern,
    build_target,
    upsert_rule,
    remove_rule,
)

__all__ = [
    "TargetAttachmentError",
    "build_pattern",
    "build_target",
    "upsert_rule",
    "remove_rule",
]
