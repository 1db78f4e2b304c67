"""Prose insights about feeding patterns using LLMs."""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from pydantic import ValidationError

from bottle_tracker.domain.feeding import AnalysisResult
from bottle_tracker.domain.insights import FeedingInsights
from bottle_tracker.payloads import (
    daily_stat_payload,
    time_slot_payload,
    trend_payload,
)

UNAVAILABLE_MESSAGE = "Unable to generate insights at this time."

INSIGHTS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "weekSummary": {"type": "string"},
        "dayComparison": {"type": "string"},
        "milestones": {"type": "string"},
    },
    "required": ["weekSummary", "dayComparison", "milestones"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


class InsightsClient(Protocol):
    """Interface for LLM text generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> str:
        """Return the raw generated text."""


@dataclass
class InsightsService:
    """Service that summarizes an analysis result in prose."""

    client: InsightsClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate(self, result: AnalysisResult) -> FeedingInsights:
        """Generate insights, degrading to placeholder text on failure."""
        prompt = build_prompt(build_insights_context(result))
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=INSIGHTS_SCHEMA,
            )
        except Exception as exc:
            _logger.exception("Insight generation failed")
            return FeedingInsights(
                week_summary=UNAVAILABLE_MESSAGE,
                error=str(exc) or type(exc).__name__,
                timestamp=datetime.now(tz=UTC),
            )
        insights = parse_insights(raw)
        return insights.model_copy(update={"timestamp": datetime.now(tz=UTC)})


def build_insights_context(result: AnalysisResult) -> dict[str, object]:
    """Project the parts of a result the model needs."""
    return {
        "lastSevenDays": [daily_stat_payload(day) for day in result.daily_stats],
        "recentTrend": trend_payload(result.recent_trend),
        "timeStats": [time_slot_payload(slot) for slot in result.time_stats],
        "babyWeight": result.baby_weight,
        "recommendedIntake": result.recommended_intake,
    }


def build_prompt(context: dict[str, object]) -> str:
    """Render the insight prompt for a context."""
    return (
        "Based on this baby bottle feeding data for the past week:\n"
        f"{json.dumps(context['lastSevenDays'])}\n\n"
        f"Recent trend: {json.dumps(context['recentTrend'])}\n"
        f"Time patterns: {json.dumps(context['timeStats'])}\n"
        f"Baby's weight: {context['babyWeight']}kg\n"
        f"Recommended daily intake: {context['recommendedIntake']}ml\n\n"
        "Please provide three short insights:\n"
        "1. A brief weekly summary (2-3 sentences)\n"
        "2. A comparison with the previous day (1-2 sentences)\n"
        "3. Any notable milestones or patterns (1-2 sentences)\n\n"
        "Format as JSON with keys: weekSummary, dayComparison, milestones"
    )


def parse_insights(raw: str) -> FeedingInsights:
    """Parse model output, keeping unstructured text as the week summary."""
    try:
        return FeedingInsights.model_validate(json.loads(raw.strip()))
    except (json.JSONDecodeError, ValidationError):
        _logger.warning("Insight output was not structured JSON")
        return FeedingInsights(week_summary=raw)
