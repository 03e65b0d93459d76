"""Response envelope for machine-readable CLI output."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class AgentResponse:
    """Standardized envelope for every --json command.

    Callers check success first, then read data. Errors and suggestions
    are plain strings meant to be shown to a user as-is.
    """

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def error_response(
    command: str,
    error: str,
    suggestions: Optional[list[str]] = None,
) -> AgentResponse:
    """Create an error response.

    Args:
        command: The command that failed
        error: Error message
        suggestions: Suggestions for fixing the error

    Returns:
        AgentResponse with success=False
    """
    return AgentResponse(
        success=False,
        command=command,
        errors=[error],
        suggestions=suggestions or [],
        human_summary=f"Error: {error}",
    )
