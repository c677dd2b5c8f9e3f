"""AI Agents package."""

from trackwise.agents.ai_agents import Suggestion, SuggestionAgent, SuggestionError

__all__ = [
    "Suggestion",
    "SuggestionAgent",
    "SuggestionError",
]
