"""Transcript checks applied at the API boundary before any agent runs."""

from __future__ import annotations

import logging
import re

from growth_agent.config.settings import Settings
from growth_agent.orchestration.errors import TranscriptValidationError

logger = logging.getLogger(__name__)

_ALNUM_RE = re.compile(r"[A-Za-z0-9]")


def validate_transcript(transcript: str, settings: Settings) -> str:
    """Return the stripped transcript or raise TranscriptValidationError."""
    text = transcript.strip()
    if not text:
        raise TranscriptValidationError("transcript is required")

    length = len(text)
    if length > settings.max_transcript_chars:
        raise TranscriptValidationError(
            f"Transcript too long: {length} characters, "
            f"maximum is {settings.max_transcript_chars}."
        )

    alnum_ratio = len(_ALNUM_RE.findall(text)) / length
    if alnum_ratio < settings.min_alnum_ratio:
        raise TranscriptValidationError(
            "Transcript appears to contain mostly non-alphanumeric characters."
        )

    if length < settings.recommended_min_chars:
        logger.warning(
            "transcript_validation event=short_transcript chars=%d recommended_min=%d",
            length,
            settings.recommended_min_chars,
        )
    return text
