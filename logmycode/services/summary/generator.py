"""AI-powered daily work summary using Claude.

Turns a day's commits (grouped by repository) plus optional manual notes into
the LogMyCode daily summary text.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import anthropic

from logmycode.config import settings
from logmycode.services.commits.grouping import RepoGroup

logger = logging.getLogger(__name__)

NOT_CONFIGURED_TEXT = "Error: ANTHROPIC_API_KEY not configured. Cannot generate AI summary."
SERVICE_UNAVAILABLE_TEXT = "Error generating summary via AI."
GENERATION_FAILED_TEXT = "Failed to generate summary."

PREFERRED_VERBS = ("Added", "Updated", "Fixed", "Refactored", "Optimized")


class SummaryOutcome(str, Enum):
    """How a summary request ended."""

    GENERATED = "generated"
    NOT_CONFIGURED = "not_configured"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GENERATION_FAILED = "generation_failed"


FALLBACK_TEXTS: dict[SummaryOutcome, str] = {
    SummaryOutcome.NOT_CONFIGURED: NOT_CONFIGURED_TEXT,
    SummaryOutcome.SERVICE_UNAVAILABLE: SERVICE_UNAVAILABLE_TEXT,
    SummaryOutcome.GENERATION_FAILED: GENERATION_FAILED_TEXT,
}


@dataclass
class DailyLogInput:
    """Input data for daily summary generation."""

    user_id: str
    date: str  # YYYY-MM-DD
    repos: list[RepoGroup]  # Commits grouped by repository, unique by hash
    template: str | None = None  # Custom output format; default format if None
    manual_log: str | None = None  # Free-text notes on work outside git


@dataclass
class SummaryResult:
    """Output from daily summary generation.

    `text` is always usable: on failure it holds the fallback text for
    `outcome`.
    """

    text: str
    outcome: SummaryOutcome

    @property
    def ok(self) -> bool:
        return self.outcome is SummaryOutcome.GENERATED


def default_format(date: str) -> str:
    """Output format used when the caller supplies no template."""
    return f"""LogMyCode – Daily Summary ({date})

Repos:
• [Repo Name]
• [Summary point 1]
• [Summary point 2]
...
• [Repo Name 2]
...

Total commits: [Total Count]"""


class DailySummaryGenerator:
    """Generates a developer's daily work summary from git commits.

    Makes exactly one completion call per request. Never raises from
    generate(): failures become a SummaryResult carrying fallback text.
    """

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key if api_key is not None else settings.anthropic_api_key
        self.model = settings.summary_model
        self.max_tokens = settings.summary_max_tokens
        self.temperature = settings.summary_temperature
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    def get_system_prompt(self) -> str:
        return "You are a helpful assistant that summarizes code changes."

    def format_input(self, input_data: DailyLogInput) -> str:
        """Build the prompt: preamble, commits, manual notes, instructions."""
        commits_text = "\n\n".join(
            f"Repo: {group.name}\n" + "\n".join(f"- {c.message}" for c in group.commits)
            for group in input_data.repos
        )
        manual_text = (input_data.manual_log or "").strip() or "None"
        output_format = input_data.template or default_format(input_data.date)
        verbs = ", ".join(PREFERRED_VERBS)

        return f"""You are an AI assistant for a developer tool called "LogMyCode".
Your task is to generate a daily work summary based on the following git commits for User "{input_data.user_id}" on Date "{input_data.date}".

Input Commits:
{commits_text}

Manual Activity Log:
{manual_text}

Instructions:
1. Group the work by repository.
2. For each repository, summarize the changes in 3-4 concise bullet points.
3. CRITICAL: Describe ACTIONS, not impact.
   - Strip phrases like "resulting in...", "which allows...", "improving...", "enhancing...".
   - Start specific points with preferred verbs: {verbs}.
   - Do NOT explain the outcome or benefit (e.g., "to improve performance"). Just state what was done (e.g., "Optimized database queries").
4. Combine related commits where appropriate but keep points purely action-oriented.
5. If the Manual Activity Log is not "None", fold each entry into the repository it relates to, or into a "General" section when it fits no repository.
6. Calculate the total number of commits.
7. Format the output EXACTLY as follows:

{output_format}

Do not add any other text before or after this format."""

    async def complete(self, input_data: DailyLogInput) -> str:
        """Send the prompt in one messages call and return the first text block verbatim."""
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=self.get_system_prompt(),
            messages=[{"role": "user", "content": self.format_input(input_data)}],
        )

        if not response.content:
            return ""
        first_block = response.content[0]
        return first_block.text if hasattr(first_block, "text") else str(first_block)

    async def generate(self, input_data: DailyLogInput) -> SummaryResult:
        """Generate the summary, converting every failure into a named outcome."""
        if not self.api_key:
            logger.warning("ANTHROPIC_API_KEY not found. Returning fallback summary.")
            return self._fallback(SummaryOutcome.NOT_CONFIGURED)

        try:
            text = await self.complete(input_data)
        except Exception:
            logger.exception(
                f"Summary generation failed for {input_data.user_id} on {input_data.date}"
            )
            return self._fallback(SummaryOutcome.SERVICE_UNAVAILABLE)

        if not text or not text.strip():
            logger.warning(f"Empty completion for {input_data.user_id} on {input_data.date}")
            return self._fallback(SummaryOutcome.GENERATION_FAILED)

        return SummaryResult(text=text, outcome=SummaryOutcome.GENERATED)

    @staticmethod
    def _fallback(outcome: SummaryOutcome) -> SummaryResult:
        return SummaryResult(text=FALLBACK_TEXTS[outcome], outcome=outcome)


# Singleton instance
daily_summary_generator = DailySummaryGenerator()
