"""Central config: env vars, model names and per-action timeouts for the scraper agent."""
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from the working directory; system env vars still take precedence
load_dotenv(override=False)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_MAX_ATTEMPTS = 50
DEFAULT_TRANSCRIPT_PATH = "output.md"

FALLBACK_MODELS = [
    "claude-haiku-4-5-20251001",
    "claude-sonnet-4-5",
    "claude-3-7-sonnet-latest",
    "claude-3-5-sonnet-latest",
    "claude-3-5-haiku-latest",
]


def get_api_key() -> str:
    return os.getenv("ANTHROPIC_API_KEY") or os.getenv("API-KEY") or ""


def get_model_candidates() -> List[str]:
    env_model = (os.getenv("SCRAPER_MODEL") or "").strip()
    candidates = []
    if env_model:
        candidates.append(env_model)
    candidates += FALLBACK_MODELS
    seen = set()
    out = []
    for c in candidates:
        if c and c not in seen:
            out.append(c)
            seen.add(c)
    return out


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _to_positive_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _to_non_negative_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


@dataclass
class AgentSettings:
    """Runtime settings for one agent; every field has an env var override."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    headless: bool = False
    slow_mo_ms: int = 0
    transcript_path: str = DEFAULT_TRANSCRIPT_PATH
    temperature: float = 0.0
    max_tokens: int = 1000
    click_timeout_ms: int = 3000
    visibility_timeout_ms: int = 1000
    network_idle_timeout_ms: int = 30000
    dismiss_consent: bool = False

    @classmethod
    def from_env(cls) -> "AgentSettings":
        return cls(
            max_attempts=_to_positive_int(os.getenv("SCRAPER_MAX_ATTEMPTS"), DEFAULT_MAX_ATTEMPTS),
            headless=_to_bool(os.getenv("SCRAPER_HEADLESS"), default=False),
            slow_mo_ms=_to_non_negative_int(os.getenv("SCRAPER_SLOW_MO_MS"), 0),
            transcript_path=os.getenv("SCRAPER_TRANSCRIPT") or DEFAULT_TRANSCRIPT_PATH,
            click_timeout_ms=_to_positive_int(os.getenv("SCRAPER_CLICK_TIMEOUT_MS"), 3000),
            visibility_timeout_ms=_to_positive_int(os.getenv("SCRAPER_VISIBILITY_TIMEOUT_MS"), 1000),
            network_idle_timeout_ms=_to_positive_int(
                os.getenv("SCRAPER_NETWORK_IDLE_TIMEOUT_MS"), 30000
            ),
            dismiss_consent=_to_bool(os.getenv("SCRAPER_DISMISS_CONSENT"), default=False),
        )
