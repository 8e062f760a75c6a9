"""AI agents package."""

from financa_facil.agents.insight_agent import (
    CONNECTION_ERROR_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    MISSING_KEY_MESSAGE,
    InsightAgent,
    InsightError,
    build_insight_payload,
)

__all__ = [
    "CONNECTION_ERROR_MESSAGE",
    "EMPTY_RESPONSE_MESSAGE",
    "MISSING_KEY_MESSAGE",
    "InsightAgent",
    "InsightError",
    "build_insight_payload",
]
