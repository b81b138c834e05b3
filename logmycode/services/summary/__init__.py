"""Daily summary generation service."""

from logmycode.services.summary.generator import (
    DailyLogInput,
    DailySummaryGenerator,
    SummaryOutcome,
    SummaryResult,
    daily_summary_generator,
)

__all__ = [
    "DailyLogInput",
    "DailySummaryGenerator",
    "SummaryOutcome",
    "SummaryResult",
    "daily_summary_generator",
]
