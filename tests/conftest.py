"""Pytest configuration and shared fixtures for event rule sync tests.

This file contains:
1. Environment defaults for Powertools so tests never talk to X-Ray
2. EventBuilder - Builder pattern for inbound Lambda events
3. Mock client factories for Organizations and EventBridge
4. A LambdaContext stand-in for the decorated handler
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any
from unittest.mock import Mock

import pytest

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "OrgEventRuleSyncTests")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from org_event_rule_sync.models import Config  # noqa: E402

OU_ID = "ou-abcd-11112222"
SNS_TOPIC_ARN = "arn:aws:sns:us-east-1:111111111111:EventBridgeTopic"
EVENT_BUS_NAME = "CentralEventBus"
RULE_NAME = "CentralEventBridgeRule"


class EventBuilder:
    """Builder pattern for creating inbound Lambda events.

    Produces CloudFormation custom resource requests, CloudTrail-backed
    Organizations events, or both merged into one payload.
    """

    def __init__(self):
        self._event: dict[str, Any] = {}

    def lifecycle(
        self, request_type: str, physical_resource_id: str | None = None
    ) -> EventBuilder:
        """Add custom resource provider fields."""
        self._event.update(
            {
                "RequestType": request_type,
                "ServiceToken": "arn:aws:lambda:us-east-1:111111111111:function:provider",
                "ResponseURL": "https://cloudformation-custom-resource-response.example",
                "StackId": "arn:aws:cloudformation:us-east-1:111111111111:stack/Mgmt/guid",
                "RequestId": "request-1",
                "LogicalResourceId": "UpdateMatchingRuleCustomResource",
                "ResourceType": "AWS::CloudFormation::CustomResource",
                "ResourceProperties": {},
            }
        )
        if physical_resource_id:
            self._event["PhysicalResourceId"] = physical_resource_id
        return self

    def membership_change(self, event_name: str) -> EventBuilder:
        """Add EventBridge envelope for an Organizations API call."""
        self._event.update(
            {
                "version": "0",
                "id": "event-1",
                "detail-type": "AWS API Call via CloudTrail",
                "source": "aws.organizations",
                "account": "111111111111",
                "time": "2024-01-01T00:00:00Z",
                "region": "us-east-1",
                "resources": [],
                "detail": {
                    "eventSource": "organizations.amazonaws.com",
                    "eventName": event_name,
                },
            }
        )
        return self

    def with_field(self, key: str, value: Any) -> EventBuilder:
        """Set an arbitrary top-level field."""
        self._event[key] = value
        return self

    def build(self) -> dict[str, Any]:
        """Build and return the event dictionary."""
        return self._event


def _account_page(account_ids: list[str], next_token: str | None = None) -> dict:
    """Build one ListAccountsForParent response page."""
    page: dict[str, Any] = {
        "Accounts": [
            {"Id": account_id, "Status": "ACTIVE", "Name": f"acct-{account_id}"}
            for account_id in account_ids
        ]
    }
    if next_token:
        page["NextToken"] = next_token
    return page


def _call_names(client: Mock) -> list[str]:
    """Method names invoked on a mock client, in call order."""
    return [name for name, _args, _kwargs in client.mock_calls]


@dataclass
class FakeLambdaContext:
    function_name: str = "UpdateMatchingRuleLambda"
    function_version: str = "$LATEST"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:us-east-1:111111111111:function:UpdateMatchingRuleLambda"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


# Shared fixtures


@pytest.fixture
def event_builder():
    """Fixture that returns a new EventBuilder."""
    return EventBuilder()


@pytest.fixture
def config():
    """Configuration with the Update fallthrough enabled (default)."""
    return Config(
        organization_unit_id=OU_ID,
        sns_topic_arn=SNS_TOPIC_ARN,
        region="us-east-1",
        event_bus_name=EVENT_BUS_NAME,
    )


@pytest.fixture
def organizations_client():
    """Factory for mock Organizations clients serving the given pages.

    Example:
        org = organizations_client(
            account_page(["111", "222"], next_token="t1"),
            account_page(["333"]),
        )
    """

    def _create_mock(*pages: dict) -> Mock:
        mock = Mock()
        mock.list_accounts_for_parent.side_effect = list(pages) or [_account_page([])]
        return mock

    return _create_mock


@pytest.fixture
def events_client():
    """Mock EventBridge client whose target calls report no failures."""
    mock = Mock()
    mock.put_targets.return_value = {"FailedEntryCount": 0, "FailedEntries": []}
    mock.remove_targets.return_value = {"FailedEntryCount": 0, "FailedEntries": []}
    return mock


@pytest.fixture
def lambda_context():
    """Minimal LambdaContext for Powertools decorators."""
    return FakeLambdaContext()


@pytest.fixture
def account_page():
    """Factory for ListAccountsForParent response pages."""
    return _account_page


@pytest.fixture
def call_names():
    """Helper returning the ordered method names called on a mock client."""
    return _call_names
