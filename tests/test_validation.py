from __future__ import annotations

import logging

import pytest

from growth_agent.config.settings import Settings
from growth_agent.orchestration.errors import TranscriptValidationError
from growth_agent.validation import validate_transcript

from .conftest import TRANSCRIPT


@pytest.fixture
def limits() -> Settings:
    return Settings(max_transcript_chars=2_000, recommended_min_chars=500)


def test_valid_transcript_is_stripped(limits: Settings) -> None:
    assert validate_transcript(f"\n  {TRANSCRIPT}\t", limits) == TRANSCRIPT.strip()


@pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
def test_blank_transcript_is_rejected(limits: Settings, blank: str) -> None:
    with pytest.raises(TranscriptValidationError, match="transcript is required"):
        validate_transcript(blank, limits)


def test_transcript_over_limit_is_rejected(limits: Settings) -> None:
    with pytest.raises(TranscriptValidationError, match="maximum is 2000"):
        validate_transcript("word " * 500, limits)


def test_mostly_symbols_is_rejected(limits: Settings) -> None:
    with pytest.raises(TranscriptValidationError, match="non-alphanumeric"):
        validate_transcript("... --- *** ??? !!! ok", limits)


def test_short_transcript_only_warns(limits: Settings, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="growth_agent.validation"):
        text = validate_transcript("A short but real episode about habits.", limits)

    assert text == "A short but real episode about habits."
    assert "event=short_transcript" in caplog.text


def test_validation_error_is_a_value_error() -> None:
    assert issubclass(TranscriptValidationError, ValueError)
