"""Data models for the organization event rule sync Lambda."""

from .config import Config, ConfigurationError
from .reconcile_result import ReconcileAction
from .rule import RuleDefinition, RuleTarget
from .trigger import (
    LifecycleEvent,
    MembershipChangeEvent,
    TriggerEvent,
    classify_event,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "ReconcileAction",
    "RuleDefinition",
    "RuleTarget",
    "LifecycleEvent",
    "MembershipChangeEvent",
    "TriggerEvent",
    "classify_event",
]
