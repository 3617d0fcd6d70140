"""Organizational unit membership enumeration."""

from __future__ import annotations
from typing import Any

from ..utils import get_logger

logger = get_logger()


def list_accounts(organizations_client: Any, parent_id: str) -> list[str]:
    """List member account IDs directly under an organizational unit.

    Pages are requested one after another, each carrying the NextToken from
    the previous response, until a response comes back without one. Account
    IDs are returned in API order. Errors from Organizations propagate so the
    invocation never converges on a partial membership.

    Args:
        organizations_client: boto3 Organizations client
        parent_id: OU (or root) identifier

    Returns:
        Account IDs, empty when the OU has no members
    """
    account_ids: list[str] = []
    params: dict[str, str] = {"ParentId": parent_id}
    page_count = 0

    while True:
        response = organizations_client.list_accounts_for_parent(**params)
        page_count += 1
        account_ids.extend(account["Id"] for account in response.get("Accounts", []))

        next_token = response.get("NextToken")
        if not next_token:
            break
        params["NextToken"] = next_token

    logger.info(
        "Enumerated organizational unit members",
        extra={
            "parent_id": parent_id,
            "account_count": len(account_ids),
            "pages": page_count,
        },
    )
    return account_ids
