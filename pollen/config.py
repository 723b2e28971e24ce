# pollen/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

# Scoring weights and neutral values are deliberately NOT configurable:
# they live as literals in pollen/compatibility/scoring.py.

# --- Ranking ---

DEFAULT_RANK_TOP_N = 10


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class RankingConfig:
    top_n: int
    require_practical_fit: bool


def load_ranking_config() -> RankingConfig:
    return RankingConfig(
        top_n=max(1, _env_int("POLLEN_RANK_TOP_N", DEFAULT_RANK_TOP_N)),
        require_practical_fit=_env_bool("POLLEN_REQUIRE_PRACTICAL_FIT", False),
    )


# --- LLM feedback narratives (optional) ---

def _parse_llm_chain(raw: str | None) -> List[Tuple[str, str]]:
    """
    Parses: "anthropic/claude-sonnet-4-6,openai/gpt-4o-mini"
    -> [("anthropic","claude-sonnet-4-6"), ("openai","gpt-4o-mini")]
    """
    if not raw:
        return []
    items: List[Tuple[str, str]] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if "/" not in part:
            # Bare model name -> assume anthropic
            items.append(("anthropic", part))
            continue
        provider, model = part.split("/", 1)
        provider = provider.strip().lower()
        model = model.strip()
        if provider and model:
            items.append((provider, model))
    return items


@dataclass(frozen=True)
class LLMFailoverConfig:
    chain: List[Tuple[str, str]]
    max_retries: int
    breaker_consecutive_fails: int


def load_llm_failover_config() -> LLMFailoverConfig:
    chain_raw = os.getenv(
        "POLLEN_LLM_CHAIN",
        "anthropic/claude-sonnet-4-6,openai/gpt-4o-mini",
    )
    return LLMFailoverConfig(
        chain=_parse_llm_chain(chain_raw),
        max_retries=_env_int("POLLEN_LLM_MAX_RETRIES", 2),
        breaker_consecutive_fails=_env_int("POLLEN_LLM_CIRCUIT_BREAKER_FAILS", 2),
    )


# "anthropic" | "openai"
POLLEN_LLM_PROVIDER: str = os.environ.get("POLLEN_LLM_PROVIDER", "anthropic").strip().lower()

_DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-6",
    "openai": "gpt-4o-mini",
}
POLLEN_LLM_MODEL: str = (
        os.environ.get("POLLEN_LLM_MODEL", "").strip()
        or _DEFAULT_MODELS.get(POLLEN_LLM_PROVIDER, "claude-sonnet-4-6")
)


def resolve_llm_api_key(provider: str) -> Optional[str]:
    """
    Provider-specific key first, then the shared POLLEN_LLM_KEY.
    Keys are read on every call and never logged.
    """
    provider = (provider or "").strip().lower()
    if provider == "anthropic":
        specific = os.getenv("POLLEN_ANTHROPIC_KEY") or os.getenv("ANTHROPIC_API_KEY")
    elif provider == "openai":
        specific = os.getenv("POLLEN_OPENAI_KEY") or os.getenv("OPENAI_API_KEY")
    else:
        specific = None
    return specific or os.getenv("POLLEN_LLM_KEY") or None


def llm_configured() -> bool:
    return bool(
        os.getenv("POLLEN_ANTHROPIC_KEY")
        or os.getenv("POLLEN_OPENAI_KEY")
        or os.getenv("POLLEN_LLM_KEY")
        or os.getenv("ANTHROPIC_API_KEY")
        or os.getenv("OPENAI_API_KEY")
    )
