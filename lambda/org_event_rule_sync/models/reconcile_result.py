"""ReconcileAction data class."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any

UPSERT = "UPSERT_RULE"
REMOVE = "REMOVE_RULE"
SKIP = "SKIP_NO_ACCOUNTS"


@dataclass
class ReconcileAction:
    """Represents one convergence step taken against EventBridge."""

    action: str
    rule_name: str
    trigger: str
    account_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
