"""Routing rule and target data classes."""

from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RuleDefinition:
    """Desired state of the central routing rule."""

    name: str
    description: str
    accounts: tuple[str, ...]
    sources: tuple[str, ...] = field(default_factory=tuple)

    @property
    def event_pattern(self) -> dict[str, list[str]]:
        return {"account": list(self.accounts), "source": list(self.sources)}

    def event_pattern_json(self) -> str:
        """Serialize the event pattern the way PutRule expects it."""
        return json.dumps(self.event_pattern)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "event_pattern": self.event_pattern,
        }


@dataclass(frozen=True)
class RuleTarget:
    """The single destination attached to the rule."""

    rule_name: str
    target_id: str
    arn: str

    def to_api(self) -> dict[str, str]:
        return {"Id": self.target_id, "Arn": self.arn}
