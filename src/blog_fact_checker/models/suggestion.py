"""Pydantic model for a parsed fact-check suggestion."""

from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["high", "medium", "low"]
SuggestionType = Literal["factual", "grammar", "clarity", "style", "other"]

SEVERITY_ORDER: dict[str, int] = {"high": 0, "medium": 1, "low": 2}

SEVERITY_LABELS: dict[str, str] = {
    "high": "High Priority",
    "medium": "Medium Priority",
    "low": "Low Priority",
}

# Rich color names used by the CLI table
SEVERITY_COLORS: dict[str, str] = {
    "high": "red",
    "medium": "dark_orange",
    "low": "blue",
}


class Suggestion(BaseModel):
    """A single proposed text edit extracted from an assistant reply."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    original: str
    suggested: str
    reason: str = ""
    severity: Severity = "medium"
    type: SuggestionType = "other"

    @property
    def severity_label(self) -> str:
        return SEVERITY_LABELS[self.severity]

    @property
    def severity_color(self) -> str:
        return SEVERITY_COLORS[self.severity]

    def meets_severity(self, minimum: Severity) -> bool:
        """True if this suggestion is at least as urgent as ``minimum``."""
        return SEVERITY_ORDER[self.severity] <= SEVERITY_ORDER[minimum]
