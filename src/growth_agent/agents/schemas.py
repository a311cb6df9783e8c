"""Strict Pydantic output contracts, one per agent.

Each model is handed to the generator as the response schema and used again
by the task runner to validate what came back. The orchestration layer only
stores the dumped JSON; nothing downstream inspects these fields.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StrictModel(BaseModel):
    """Base model for strict schema validation."""

    model_config = ConfigDict(extra="forbid")


SearchPotential = Literal["🟢 High", "🟡 Typical", "🔵 Cool"]
Confidence = Literal["High", "Medium"]


# insight: summary + discovery phrases + keywords


class KeywordItem(StrictModel):
    keyword: str
    category: Literal["Main Topic", "SEO Search", "Community Language"]
    search_potential: SearchPotential
    semantic_note: str | None = None


class InsightOutput(StrictModel):
    episode_summary: str = Field(min_length=1)
    key_discovery_phrases: list[str] = Field(min_length=3, max_length=3)
    keywords: list[KeywordItem] = Field(min_length=5, max_length=5)


# hook: title options


class TitleOption(StrictModel):
    title: str = Field(min_length=1, max_length=60)
    style: Literal["Authority", "Conversational", "Curiosity-Driven"]
    primary_keyword: str
    search_potential: SearchPotential


class HookOutput(StrictModel):
    title_options: list[TitleOption] = Field(min_length=3, max_length=3)


# spotlight: quotes + caption


class ShareableQuote(StrictModel):
    quote: str = Field(min_length=1, max_length=280)
    timestamp: str = Field(pattern=r"^\d{2}:\d{2}:\d{2}$")
    hashtags: list[str] = Field(min_length=2, max_length=2)
    platform_notes: str


class SpotlightOutput(StrictModel):
    shareable_quotes: list[ShareableQuote] = Field(min_length=3, max_length=3)
    ready_to_post_caption: str = Field(min_length=1, max_length=500)


# amplify: outreach targets


class PodcastMatch(StrictModel):
    podcast_name: str
    host_name: str
    contact_info: str
    why_collaborate: str
    suggested_approach: str


class Community(StrictModel):
    name: str
    platform: Literal["Reddit", "Facebook", "LinkedIn", "Discord"]
    url: str
    member_size: str
    why_this_fits: str
    engagement_tip: str


class AmplifyOutput(StrictModel):
    podcast_match: PodcastMatch
    communities: list[Community] = Field(min_length=1, max_length=4)


# pulse: trend matches, every slot nullable


class DurableTrend(StrictModel):
    trend_or_hashtag: str
    why_it_connects: str
    best_platforms: list[str]
    timing_strategy: str
    confidence: Confidence


class ViralMoment(StrictModel):
    trend_or_hashtag: str
    why_it_connects: str
    best_platforms: list[str]
    timing_window: str
    confidence: Confidence


class PulseOutput(StrictModel):
    durable_trend: DurableTrend | None
    viral_moment: ViralMoment | None
    dad_joke: str | None
