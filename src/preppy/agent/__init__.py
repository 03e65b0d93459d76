"""JSON response envelope for scripted and LLM-agent callers."""

from __future__ import annotations

from preppy.agent.response import AgentResponse, error_response

__all__ = ["AgentResponse", "error_response"]
