"""Configuration from environment variables."""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping

# Central rule defaults (the provisioning layer grants permissions on this name)
DEFAULT_RULE_NAME = "CentralEventBridgeRule"
RULE_DESCRIPTION = (
    "The Rule propagates all Amazon CloudWatch Events, AWS Config Events, "
    "AWS Guardduty Events to the eventbus"
)
RULE_SOURCES = ("aws.cloudwatch", "aws.config", "aws.guardduty")

# Organizations API calls that change OU membership
MEMBERSHIP_CHANGE_EVENTS = frozenset({"MoveAccount", "RemoveAccountFromOrganization"})

REQUIRED_VARIABLES = (
    "ORGANIZATION_UNIT_ID",
    "SNS_TOPIC_ARN",
    "REGION",
    "EVENT_BUS_NAME",
)


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""


@dataclass(frozen=True)
class Config:
    """Settings for one Lambda execution environment."""

    organization_unit_id: str
    sns_topic_arn: str
    region: str
    event_bus_name: str
    rule_name: str = DEFAULT_RULE_NAME
    remove_rule_on_update: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build configuration from the environment.

        Raises:
            ConfigurationError: When any required variable is unset or blank
        """
        environ = os.environ if environ is None else environ

        missing = [
            name for name in REQUIRED_VARIABLES if not environ.get(name, "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return cls(
            organization_unit_id=environ["ORGANIZATION_UNIT_ID"].strip(),
            sns_topic_arn=environ["SNS_TOPIC_ARN"].strip(),
            region=environ["REGION"].strip(),
            event_bus_name=environ["EVENT_BUS_NAME"].strip(),
            rule_name=(
                environ.get("CENTRAL_EVENT_BRIDGE_RULE_NAME", "").strip()
                or DEFAULT_RULE_NAME
            ),
            remove_rule_on_update=(
                environ.get("REMOVE_RULE_ON_UPDATE", "true").lower() == "true"
            ),
        )

    @property
    def target_id(self) -> str:
        """Identifier of the single SNS target attached to the rule."""
        return f"snsTarget-{self.rule_name}"
