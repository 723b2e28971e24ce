"""
tests/unit/test_feedback_enhancer.py

Tests for LLMFeedbackEnhancer and summarize_employer_feedback.
All LLM calls are mocked. No network, no API keys required.
"""
import pytest
from unittest.mock import MagicMock, patch

from pollen.feedback import FeedbackSummary
from pollen.llm.enhancer import (
    FeedbackEnhancerError,
    LLMFeedbackEnhancer,
    summarize_employer_feedback,
)


def _summary() -> FeedbackSummary:
    return FeedbackSummary(
        overall_score=72,
        strengths=["Positive and engaging interview experience"],
        improvement_areas=["Response time to candidates"],
        recommended_actions=["Set up automated acknowledgment emails and commit to response timeframes"],
    )


def _ratings() -> dict:
    return {
        "responseTimeRating": 2,
        "interviewStyleRating": 5,
        "communicationRating": 3,
        "processTransparencyRating": 4,
        "overallExperienceRating": 4,
    }


def _valid_note() -> str:
    """~60-word note that passes word-count validation."""
    return (
        "Your team scored 72 out of 100 for candidate experience. Candidates described your "
        "interviews as positive and engaging, which is a real strength worth protecting. The "
        "main thing holding the score back is response time. Setting up automated acknowledgment "
        "emails and committing to a clear response timeframe would help candidates feel informed "
        "while they wait to hear back from you."
    )


def _anthropic_message(text):
    block = MagicMock()
    block.type = "text"
    block.text = text
    message = MagicMock()
    message.content = [block]
    return message


# ------------------------------------------------------------------
# Anthropic path
# ------------------------------------------------------------------

def test_anthropic_enhancer_returns_text():
    mock_client = MagicMock()
    mock_client.messages.create.return_value = _anthropic_message(_valid_note())

    with patch("pollen.llm.enhancer.anthropic") as mock_anthropic:
        mock_anthropic.Anthropic.return_value = mock_client
        mock_anthropic.APITimeoutError = Exception
        mock_anthropic.APIError = Exception

        enhancer = LLMFeedbackEnhancer(api_key="sk-fake", provider="anthropic", model="claude-sonnet-4-6")
        result = enhancer.enhance(summary=_summary(), employer_name="Acme")

    assert result == _valid_note()
    mock_client.messages.create.assert_called_once()
    kwargs = mock_client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-sonnet-4-6"
    assert "Acme" in kwargs["messages"][0]["content"]


def test_anthropic_timeout_raises_enhancer_error():
    class FakeTimeoutError(Exception):
        pass

    mock_client = MagicMock()
    mock_client.messages.create.side_effect = FakeTimeoutError("timeout")

    with patch("pollen.llm.enhancer.anthropic") as mock_anthropic:
        mock_anthropic.Anthropic.return_value = mock_client
        mock_anthropic.APITimeoutError = FakeTimeoutError
        mock_anthropic.APIError = Exception

        enhancer = LLMFeedbackEnhancer(api_key="sk-fake", provider="anthropic")
        with pytest.raises(FeedbackEnhancerError, match="timed out"):
            enhancer.enhance(summary=_summary())


def test_anthropic_no_text_block():
    message = MagicMock()
    message.content = []
    mock_client = MagicMock()
    mock_client.messages.create.return_value = message

    with patch("pollen.llm.enhancer.anthropic") as mock_anthropic:
        mock_anthropic.Anthropic.return_value = mock_client
        mock_anthropic.APITimeoutError = Exception
        mock_anthropic.APIError = Exception

        enhancer = LLMFeedbackEnhancer(api_key="sk-fake", provider="anthropic")
        with pytest.raises(FeedbackEnhancerError, match="no text content"):
            enhancer.enhance(summary=_summary())


# ------------------------------------------------------------------
# OpenAI path
# ------------------------------------------------------------------

def test_openai_enhancer_returns_text():
    choice = MagicMock()
    choice.message.content = _valid_note()
    response = MagicMock()
    response.choices = [choice]
    mock_client = MagicMock()
    mock_client.chat.completions.create.return_value = response

    with patch("pollen.llm.enhancer.openai") as mock_openai:
        mock_openai.OpenAI.return_value = mock_client
        mock_openai.APITimeoutError = Exception
        mock_openai.APIError = Exception

        enhancer = LLMFeedbackEnhancer(api_key="sk-openai-fake", provider="openai", model="gpt-4o-mini")
        assert enhancer.enhance(summary=_summary()) == _valid_note()


# ------------------------------------------------------------------
# Validation + construction
# ------------------------------------------------------------------

def test_output_too_short_raises():
    mock_client = MagicMock()
    mock_client.messages.create.return_value = _anthropic_message("Too short.")

    with patch("pollen.llm.enhancer.anthropic") as mock_anthropic:
        mock_anthropic.Anthropic.return_value = mock_client
        mock_anthropic.APITimeoutError = Exception
        mock_anthropic.APIError = Exception

        enhancer = LLMFeedbackEnhancer(api_key="sk-fake")
        with pytest.raises(FeedbackEnhancerError, match="too short"):
            enhancer.enhance(summary=_summary())


def test_output_too_long_raises():
    mock_client = MagicMock()
    mock_client.messages.create.return_value = _anthropic_message(" ".join(["word"] * 250))

    with patch("pollen.llm.enhancer.anthropic") as mock_anthropic:
        mock_anthropic.Anthropic.return_value = mock_client
        mock_anthropic.APITimeoutError = Exception
        mock_anthropic.APIError = Exception

        enhancer = LLMFeedbackEnhancer(api_key="sk-fake")
        with pytest.raises(FeedbackEnhancerError, match="too long"):
            enhancer.enhance(summary=_summary())


def test_empty_api_key_raises():
    with pytest.raises(FeedbackEnhancerError, match="must not be empty"):
        LLMFeedbackEnhancer(api_key="", provider="anthropic")


def test_unsupported_provider_raises():
    with pytest.raises(FeedbackEnhancerError, match="Unsupported provider"):
        LLMFeedbackEnhancer(api_key="sk-fake", provider="gemini")


# ------------------------------------------------------------------
# summarize_employer_feedback
# ------------------------------------------------------------------

class _StaticEnhancer:
    def enhance(self, *, summary, employer_name=None):
        return f"note for {employer_name}: {summary.overall_score}"


class _BrokenEnhancer:
    def enhance(self, *, summary, employer_name=None):
        raise FeedbackEnhancerError("boom")


def test_summarize_without_enhancer_is_deterministic():
    report = summarize_employer_feedback(_ratings(), employer_name="Acme")
    assert report.enhanced is False
    assert report.summary.overall_score == 72
    assert report.narrative.startswith("Acme scored 72/100")
    d = report.to_dict()
    assert d["overallScore"] == 72
    assert d["enhanced"] is False


def test_summarize_uses_enhancer():
    report = summarize_employer_feedback(_ratings(), enhancer=_StaticEnhancer(), employer_name="Acme")
    assert report.enhanced is True
    assert report.narrative == "note for Acme: 72"


def test_summarize_falls_back_and_warns(capsys):
    report = summarize_employer_feedback(_ratings(), enhancer=_BrokenEnhancer())
    assert report.enhanced is False
    assert report.narrative.startswith("Your team scored 72/100")
    assert "[Pollen]" in capsys.readouterr().err
