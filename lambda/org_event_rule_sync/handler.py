"""Main Lambda handler for central event rule synchronization."""

from __future__ import annotations
import functools
import json
import time
from typing import Any

from aws_lambda_powertools import Tracer, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from .eventbridge import build_pattern, build_target, upsert_rule, remove_rule
from .models import (
    Config,
    LifecycleEvent,
    MembershipChangeEvent,
    ReconcileAction,
    TriggerEvent,
    classify_event,
)
from .models.reconcile_result import UPSERT, REMOVE, SKIP
from .organizations import list_accounts
from .utils import get_client, get_logger

logger = get_logger()
tracer = Tracer(service="org-event-rule-sync")
metrics = Metrics(namespace="OrgEventRuleSync", service="org-event-rule-sync")


@functools.lru_cache(maxsize=1)
def load_config() -> Config:
    """Load and validate configuration once per execution environment."""
    return Config.from_env()


class RuleReconciler:
    """Converges the central rule to the current OU membership.

    Clients are injected so one execution environment reuses them across
    invocations. Build a new reconciler per invocation: membership is looked
    up at most once per instance and never carried into the next event.
    """

    def __init__(
        self, config: Config, organizations_client: Any, events_client: Any
    ) -> None:
        self.config = config
        self.organizations_client = organizations_client
        self.events_client = events_client
        self._accounts: list[str] | None = None

    def current_accounts(self) -> list[str]:
        if self._accounts is None:
            self._accounts = list_accounts(
                self.organizations_client, self.config.organization_unit_id
            )
            metrics.add_metric(
                name="AccountsEnumerated",
                unit=MetricUnit.Count,
                value=len(self._accounts),
            )
        return self._accounts

    def sync_rule(self, trigger: str) -> ReconcileAction:
        """Enumerate the OU and write the rule, skipping an empty OU."""
        accounts = self.current_accounts()
        definition = build_pattern(accounts, self.config.rule_name)

        if definition is None:
            logger.info(
                "Organizational unit has no accounts, skipping rule update",
                extra={
                    "rule_name": self.config.rule_name,
                    "organization_unit_id": self.config.organization_unit_id,
                    "trigger": trigger,
                },
            )
            metrics.add_metric(name="RuleUpsertsSkipped", unit=MetricUnit.Count, value=1)
            return ReconcileAction(
                action=SKIP, rule_name=self.config.rule_name, trigger=trigger
            )

        upsert_rule(
            self.events_client,
            definition,
            build_target(self.config),
            self.config.event_bus_name,
        )
        metrics.add_metric(name="RuleUpserts", unit=MetricUnit.Count, value=1)
        return ReconcileAction(
            action=UPSERT,
            rule_name=definition.name,
            trigger=trigger,
            account_count=len(definition.accounts),
        )

    def teardown_rule(self, trigger: str) -> ReconcileAction:
        remove_rule(
            self.events_client,
            self.config.rule_name,
            self.config.target_id,
            self.config.event_bus_name,
        )
        metrics.add_metric(name="RuleRemovals", unit=MetricUnit.Count, value=1)
        return ReconcileAction(
            action=REMOVE, rule_name=self.config.rule_name, trigger=trigger
        )

    def handle_lifecycle(self, event: LifecycleEvent) -> list[ReconcileAction]:
        trigger = f"Lifecycle:{event.request_type}"

        if event.request_type == "Create":
            return [self.sync_rule(trigger)]

        if event.request_type == "Update":
            # Update writes the rule and then removes it again.
            # REMOVE_RULE_ON_UPDATE=false keeps the rule in place.
            actions = [self.sync_rule(trigger)]
            if self.config.remove_rule_on_update:
                actions.append(self.teardown_rule(trigger))
            return actions

        if event.request_type == "Delete":
            return [self.teardown_rule(trigger)]

        return []

    def handle_membership_change(
        self, event: MembershipChangeEvent
    ) -> list[ReconcileAction]:
        return [self.sync_rule(f"MembershipChange:{event.event_name}")]

    def dispatch(self, triggers: list[TriggerEvent]) -> list[ReconcileAction]:
        """Run every trigger in order and collect the actions taken."""
        actions: list[ReconcileAction] = []
        for trigger in triggers:
            if isinstance(trigger, LifecycleEvent):
                actions.extend(self.handle_lifecycle(trigger))
            elif isinstance(trigger, MembershipChangeEvent):
                actions.extend(self.handle_membership_change(trigger))
        return actions


def build_response(
    triggers: list[TriggerEvent],
    actions: list[ReconcileAction],
    config: Config,
) -> dict[str, Any]:
    """Shape the return value for whichever system invoked the function.

    Custom resource provider calls get a PhysicalResourceId (kept stable across
    Update and Delete), everything else gets a status/body summary.
    """
    account_count = max((action.account_count for action in actions), default=0)
    action_dicts = [action.to_dict() for action in actions]

    lifecycle = next((t for t in triggers if isinstance(t, LifecycleEvent)), None)
    if lifecycle:
        return {
            "PhysicalResourceId": lifecycle.physical_resource_id or config.rule_name,
            "Data": {
                "RuleName": config.rule_name,
                "AccountCount": account_count,
                "Actions": [action.action for action in actions],
            },
        }

    return {
        "statusCode": 200,
        "body": json.dumps(
            {
                "rule_name": config.rule_name,
                "total_actions": len(actions),
                "actions": action_dicts,
            }
        ),
    }


@logger.inject_lambda_context(log_event=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Main Lambda handler for central event rule synchronization."""
    start_time = time.time()
    config = load_config()

    triggers = classify_event(event)
    if not triggers:
        logger.info(
            "Event matched no lifecycle or membership trigger, nothing to do",
            extra={"event_keys": sorted(event.keys()) if event else []},
        )

    reconciler = RuleReconciler(
        config,
        organizations_client=get_client("organizations", config.region),
        events_client=get_client("events", config.region),
    )

    try:
        actions = reconciler.dispatch(triggers)
    except Exception:
        logger.exception(
            "Rule reconciliation failed",
            extra={
                "rule_name": config.rule_name,
                "event_bus": config.event_bus_name,
                "triggers": [type(t).__name__ for t in triggers],
            },
        )
        raise

    logger.info(
        "Rule reconciliation complete",
        extra={
            "rule_name": config.rule_name,
            "event_bus": config.event_bus_name,
            "actions": [action.to_dict() for action in actions],
            "duration_seconds": round(time.time() - start_time, 2),
        },
    )

    return build_response(triggers, actions, config)
