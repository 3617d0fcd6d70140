"""Fixtures specific to e2e tests."""

import pytest


@pytest.fixture(autouse=True)
def _mark_as_e2e(request):
    """Automatically mark all tests in e2e/ as e2e tests."""
    request.node.add_marker(pytest.mark.e2e)


@pytest.fixture
def handler_env(monkeypatch):
    """Set the function's environment and reload cached configuration."""
    from org_event_rule_sync.handler import load_config

    monkeypatch.setenv("ORGANIZATION_UNIT_ID", "ou-abcd-11112222")
    monkeypatch.setenv(
        "SNS_TOPIC_ARN", "arn:aws:sns:us-east-1:111111111111:EventBridgeTopic"
    )
    monkeypatch.setenv("REGION", "us-east-1")
    monkeypatch.setenv("EVENT_BUS_NAME", "CentralEventBus")
    monkeypatch.delenv("CENTRAL_EVENT_BRIDGE_RULE_NAME", raising=False)
    monkeypatch.delenv("REMOVE_RULE_ON_UPDATE", raising=False)
    load_config.cache_clear()
    yield monkeypatch
    load_config.cache_clear()
