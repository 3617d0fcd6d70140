"""Central routing rule synthesis and convergence."""

from __future__ import annotations
from typing import Any, Sequence

from botocore.exceptions import ClientError

from ..models import Config, RuleDefinition, RuleTarget
from ..models.config import RULE_DESCRIPTION, RULE_SOURCES
from ..utils import get_logger, is_resource_not_found

logger = get_logger()


class TargetAttachmentError(Exception):
    """Raised when EventBridge reports failed entries for a target call."""

    def __init__(self, rule_name: str, failed_entries: list[dict[str, Any]]):
        self.rule_name = rule_name
        self.failed_entries = failed_entries
        details = ", ".join(
            f"{entry.get('TargetId')}: {entry.get('ErrorCode')} {entry.get('ErrorMessage', '')}".strip()
            for entry in failed_entries
        )
        super().__init__(f"Target operation failed for rule {rule_name}: {details}")


def build_pattern(
    accounts: Sequence[str],
    rule_name: str,
    sources: Sequence[str] = RULE_SOURCES,
    description: str = RULE_DESCRIPTION,
) -> RuleDefinition | None:
    """Build the desired rule for the given accounts.

    Returns None when there are no accounts: a pattern with an empty
    ``account`` list must never be written, so the caller skips creation.
    """
    if not accounts:
        return None

    return RuleDefinition(
        name=rule_name,
        description=description,
        accounts=tuple(accounts),
        sources=tuple(sources),
    )


def build_target(config: Config) -> RuleTarget:
    """Build the SNS target for the configured rule."""
    return RuleTarget(
        rule_name=config.rule_name,
        target_id=config.target_id,
        arn=config.sns_topic_arn,
    )


def _raise_on_failed_entries(rule_name: str, response: dict[str, Any]) -> None:
    if response.get("FailedEntryCount", 0):
        raise TargetAttachmentError(rule_name, response.get("FailedEntries", []))


def upsert_rule(
    events_client: Any,
    definition: RuleDefinition,
    target: RuleTarget,
    event_bus_name: str,
) -> None:
    """Create or replace the rule, then create or replace its single target.

    PutRule and PutTargets both overwrite existing state, so repeating the
    call converges to the same result. If PutTargets fails the rule is left
    without a target until the next invocation.
    """
    events_client.put_rule(
        Name=definition.name,
        Description=definition.description,
        EventBusName=event_bus_name,
        EventPattern=definition.event_pattern_json(),
    )
    logger.info(
        "Rule written",
        extra={
            "rule": definition.to_dict(),
            "event_bus": event_bus_name,
            "account_count": len(definition.accounts),
        },
    )

    response = events_client.put_targets(
        Rule=definition.name,
        EventBusName=event_bus_name,
        Targets=[target.to_api()],
    )
    _raise_on_failed_entries(definition.name, response)
    logger.info(
        "Rule target attached",
        extra={
            "rule_name": definition.name,
            "target_id": target.target_id,
            "target_arn": target.arn,
        },
    )


def remove_rule(
    events_client: Any,
    rule_name: str,
    target_id: str,
    event_bus_name: str,
) -> None:
    """Detach the rule's target, then delete the rule.

    A rule or target that is already gone is not an error, so teardown can be
    retried safely.
    """
    try:
        response = events_client.remove_targets(
            Rule=rule_name,
            EventBusName=event_bus_name,
            Ids=[target_id],
        )
        _raise_on_failed_entries(rule_name, response)
        logger.info(
            "Rule target removed",
            extra={"rule_name": rule_name, "target_id": target_id},
        )
    except ClientError as e:
        if not is_resource_not_found(e):
            raise
        logger.info(
            "Rule not found while removing target, nothing to detach",
            extra={"rule_name": rule_name, "event_bus": event_bus_name},
        )

    try:
        events_client.delete_rule(Name=rule_name, EventBusName=event_bus_name)
        logger.info(
            "Rule deleted",
            extra={"rule_name": rule_name, "event_bus": event_bus_name},
        )
    except ClientError as e:
        if not is_resource_not_found(e):
            raise
        logger.info(
            "Rule already deleted",
            extra={"rule_name": rule_name, "event_bus": event_bus_name},
        )
