"""Fixtures specific to integration tests."""

import pytest


@pytest.fixture(autouse=True)
def _mark_as_integration(request):
    """Automatically mark all tests in integration/ as integration tests."""
    request.node.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _clear_metrics():
    """Drop metrics buffered by reconciler calls made outside the handler."""
    from org_event_rule_sync.handler import metrics

    yield
    metrics.clear_metrics()
