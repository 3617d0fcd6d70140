"""Inbound trigger events.

A single invocation can come from the custom resource provider (a
CloudFormation lifecycle event) or from the CloudTrail-backed EventBridge rule
that watches Organizations membership changes. Both shapes are checked on every
invocation, so an event carrying both produces two triggers.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Union

from aws_lambda_powertools.utilities.data_classes import (
    CloudFormationCustomResourceEvent,
    EventBridgeEvent,
)

from .config import MEMBERSHIP_CHANGE_EVENTS

LIFECYCLE_REQUEST_TYPES = ("Create", "Update", "Delete")


@dataclass(frozen=True)
class LifecycleEvent:
    """Create/Update/Delete request from the provisioning layer."""

    request_type: str
    physical_resource_id: str | None = None


@dataclass(frozen=True)
class MembershipChangeEvent:
    """Organizations API call that moved or removed an account."""

    event_name: str


TriggerEvent = Union[LifecycleEvent, MembershipChangeEvent]


def parse_lifecycle_event(event: dict[str, Any]) -> LifecycleEvent | None:
    """Return the lifecycle trigger carried by the event, if any."""
    if event.get("RequestType") not in LIFECYCLE_REQUEST_TYPES:
        return None

    cfn_event = CloudFormationCustomResourceEvent(event)
    return LifecycleEvent(
        request_type=cfn_event.request_type,
        physical_resource_id=cfn_event.get("PhysicalResourceId") or None,
    )


def parse_membership_change_event(
    event: dict[str, Any],
) -> MembershipChangeEvent | None:
    """Return the membership-change trigger carried by the event, if any."""
    detail = event.get("detail")
    if not isinstance(detail, dict):
        return None

    event_name = EventBridgeEvent(event).detail.get("eventName")
    if not isinstance(event_name, str) or event_name not in MEMBERSHIP_CHANGE_EVENTS:
        return None

    return MembershipChangeEvent(event_name=event_name)


def classify_event(event: dict[str, Any]) -> list[TriggerEvent]:
    """Extract every trigger from an inbound event, lifecycle first."""
    triggers: list[TriggerEvent] = []

    lifecycle = parse_lifecycle_event(event)
    if lifecycle:
        triggers.append(lifecycle)

    membership_change = parse_membership_change_event(event)
    if membership_change:
        triggers.append(membership_change)

    return triggers
