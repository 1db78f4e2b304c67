"""Models for generated feeding insights."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FeedingInsights(BaseModel):
    """Prose insights generated from a feeding summary."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    week_summary: str
    day_comparison: str = ""
    milestones: str = ""
    timestamp: datetime | None = None
    error: str | None = None
