"""
pollen/llm/enhancer.py

Optional LLM rewrite of an employer feedback summary into a short note.

- One call per note, 10-second hard timeout
- Notes must land between 30 and 200 words
- Every failure surfaces as FeedbackEnhancerError; summarize_employer_feedback
  then uses the template narrative instead
- API keys never appear in exception messages or report output
"""
from __future__ import annotations

import random
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple, Union

import anthropic
import openai

from pollen import config as _config
from pollen.feedback import FeedbackSummary, generate_feedback_for_employer
from pollen.llm.prompt import _SYSTEM_PROMPT, build_feedback_prompt, deterministic_narrative
from pollen.models import EmployerRatings

SUPPORTED_PROVIDERS = ("anthropic", "openai")

MIN_NOTE_WORDS = 30
MAX_NOTE_WORDS = 200
REQUEST_TIMEOUT_SECONDS = 10
MAX_OUTPUT_TOKENS = 300

# Substrings of (sanitized) error messages worth retrying on the same model
RETRYABLE_MARKERS = (
    "rate limit",
    "ratelimit",
    "too many requests",
    "overloaded",
    "timeout",
    "timed out",
    "try again",
    "server error",
    "internalserver",
    "503",
    "529",
)

Candidate = Tuple[str, str]


class FeedbackEnhancerError(Exception):
    """Any failure while producing an LLM feedback note."""


class FeedbackEnhancer(Protocol):
    def enhance(self, *, summary: FeedbackSummary, employer_name: Optional[str] = None) -> str:
        ...


class LLMFeedbackEnhancer:
    """One provider, one model."""

    def __init__(
            self,
            *,
            api_key: str,
            provider: str = "anthropic",
            model: Optional[str] = None,
    ) -> None:
        if not api_key:
            raise FeedbackEnhancerError("LLM API key must not be empty.")
        provider = (provider or "").strip().lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise FeedbackEnhancerError(
                f"Unsupported provider '{provider}'. Expected one of: {', '.join(SUPPORTED_PROVIDERS)}."
            )
        self._api_key = api_key
        self.provider = provider
        self.model = (model or _config.POLLEN_LLM_MODEL).strip()

    def enhance(self, *, summary: FeedbackSummary, employer_name: Optional[str] = None) -> str:
        prompt = build_feedback_prompt(summary, employer_name=employer_name)
        send = self._ask_anthropic if self.provider == "anthropic" else self._ask_openai
        try:
            note = send(prompt)
        except FeedbackEnhancerError:
            raise
        except Exception as exc:
            # Only the exception class name survives; SDK messages can echo headers
            raise FeedbackEnhancerError(f"LLM call failed: {type(exc).__name__}") from None
        return _check_note_length(note)

    def _ask_anthropic(self, prompt: str) -> str:
        client = anthropic.Anthropic(api_key=self._api_key)
        try:
            reply = client.messages.create(
                model=self.model,
                max_tokens=MAX_OUTPUT_TOKENS,
                timeout=REQUEST_TIMEOUT_SECONDS,
                system=_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APITimeoutError:
            raise FeedbackEnhancerError(
                f"Anthropic API timed out after {REQUEST_TIMEOUT_SECONDS} seconds."
            ) from None
        except anthropic.APIError as exc:
            raise FeedbackEnhancerError(f"Anthropic API error: {type(exc).__name__}") from None

        texts = [block.text for block in reply.content if block.type == "text"]
        if not texts:
            raise FeedbackEnhancerError("Anthropic returned no text content.")
        return texts[0]

    def _ask_openai(self, prompt: str) -> str:
        client = openai.OpenAI(api_key=self._api_key, timeout=REQUEST_TIMEOUT_SECONDS)
        try:
            completion = client.chat.completions.create(
                model=self.model,
                max_tokens=MAX_OUTPUT_TOKENS,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.APITimeoutError:
            raise FeedbackEnhancerError(
                f"OpenAI API timed out after {REQUEST_TIMEOUT_SECONDS} seconds."
            ) from None
        except openai.APIError as exc:
            raise FeedbackEnhancerError(f"OpenAI API error: {type(exc).__name__}") from None

        text = completion.choices[0].message.content if completion.choices else None
        if not text:
            raise FeedbackEnhancerError("OpenAI returned empty content.")
        return text


def _check_note_length(text: Optional[str]) -> str:
    note = (text or "").strip()
    if not note:
        raise FeedbackEnhancerError("LLM returned an empty response.")
    words = len(note.split())
    if words < MIN_NOTE_WORDS:
        raise FeedbackEnhancerError(f"LLM output too short: {words} words (need at least {MIN_NOTE_WORDS}).")
    if words > MAX_NOTE_WORDS:
        raise FeedbackEnhancerError(f"LLM output too long: {words} words (limit {MAX_NOTE_WORDS}).")
    return note


def _is_retryable(err: Exception) -> bool:
    text = str(err).lower()
    return any(marker in text for marker in RETRYABLE_MARKERS)


def _sleep_backoff(attempt: int) -> None:
    # 0.8s, 1.6s, 3.2s ... plus up to 250ms jitter
    time.sleep(0.8 * (2 ** attempt) + random.uniform(0.0, 0.25))


@dataclass
class ChainHealth:
    """Mutable breaker state for one FailoverFeedbackEnhancer."""
    failures_in_a_row: int = 0
    tripped_because: Optional[str] = None
    last_good: Optional[Candidate] = None
    errors: List[str] = field(default_factory=list)

    @property
    def tripped(self) -> bool:
        return self.tripped_because is not None


class FailoverFeedbackEnhancer:
    """
    Walks a provider/model chain. Retryable errors are retried on the same
    model with backoff; anything else moves to the next candidate. After
    `breaker_consecutive_fails` candidates fail in a row the enhancer turns
    itself off for the rest of its life, so use one instance per batch.
    The last model that worked is tried first on the next call.
    """

    def __init__(
            self,
            *,
            api_key_resolver: Callable[[str], Optional[str]],
            candidates: List[Candidate],
            max_retries: int = 2,
            breaker_consecutive_fails: int = 2,
    ) -> None:
        self._key_for = api_key_resolver
        self._candidates = list(candidates)
        self._max_retries = max(0, max_retries)
        self._trip_after = max(1, breaker_consecutive_fails)
        self._health = ChainHealth()

    @classmethod
    def from_config(cls) -> "FailoverFeedbackEnhancer":
        cfg = _config.load_llm_failover_config()
        return cls(
            api_key_resolver=_config.resolve_llm_api_key,
            candidates=cfg.chain,
            max_retries=cfg.max_retries,
            breaker_consecutive_fails=cfg.breaker_consecutive_fails,
        )

    def is_disabled(self) -> bool:
        return self._health.tripped

    def enhance(self, *, summary: FeedbackSummary, employer_name: Optional[str] = None) -> str:
        health = self._health
        if health.tripped:
            raise FeedbackEnhancerError(f"LLM enhancement disabled: {health.tripped_because}")

        failure: Optional[Exception] = None
        for provider, model in self._chain():
            key = self._key_for(provider)
            if not key:
                failure = FeedbackEnhancerError(f"Missing API key for provider: {provider}")
                continue

            single = LLMFeedbackEnhancer(api_key=key, provider=provider, model=model)
            try:
                note = self._with_retries(single, summary, employer_name)
            except Exception as exc:
                failure = exc
                health.errors.append(f"{provider}/{model}: {type(exc).__name__}")
                health.failures_in_a_row += 1
                if health.failures_in_a_row >= self._trip_after:
                    health.tripped_because = (
                        f"circuit-breaker tripped after {health.failures_in_a_row} failures"
                    )
                    break
                continue

            health.failures_in_a_row = 0
            health.last_good = (provider, model)
            return note

        raise failure or FeedbackEnhancerError("LLM enhancement failed: no candidates available")

    def _with_retries(
            self,
            single: LLMFeedbackEnhancer,
            summary: FeedbackSummary,
            employer_name: Optional[str],
    ) -> str:
        attempt = 0
        while True:
            try:
                return single.enhance(summary=summary, employer_name=employer_name)
            except Exception as exc:
                if attempt >= self._max_retries or not _is_retryable(exc):
                    raise
                _sleep_backoff(attempt)
                attempt += 1

    def _chain(self) -> List[Candidate]:
        preferred = self._health.last_good
        if preferred is None:
            return list(self._candidates)
        return [preferred] + [c for c in self._candidates if c != preferred]


@dataclass(frozen=True)
class FeedbackReport:
    summary: FeedbackSummary
    narrative: str
    enhanced: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out = self.summary.to_dict()
        out.update(narrative=self.narrative, enhanced=self.enhanced)
        return out


def summarize_employer_feedback(
        ratings: Union[EmployerRatings, Mapping[str, Any]],
        *,
        enhancer: Optional[FeedbackEnhancer] = None,
        employer_name: Optional[str] = None,
) -> FeedbackReport:
    """
    Deterministic summary plus a narrative note. With an enhancer the note is
    LLM-written; any enhancer failure falls back to the template note.
    """
    summary = generate_feedback_for_employer(ratings)

    if enhancer is not None:
        try:
            note = enhancer.enhance(summary=summary, employer_name=employer_name)
        except Exception as exc:
            print(
                f"[Pollen] LLM feedback enhancement failed ({type(exc).__name__}), using deterministic fallback.",
                file=sys.stderr,
            )
        else:
            return FeedbackReport(summary=summary, narrative=note, enhanced=True)

    return FeedbackReport(
        summary=summary,
        narrative=deterministic_narrative(summary, employer_name=employer_name),
        enhanced=False,
    )
