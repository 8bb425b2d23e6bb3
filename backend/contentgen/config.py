import os
import logging
from dataclasses import dataclass
from typing import List, Optional
import pathlib
import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    openai_model: str
    cors_allow_origins: List[str]
    fallback_chunk_delay: float
    log_level: str
    prompts: dict

    @property
    def live_mode(self) -> bool:
        return bool(self.openai_api_key)


def load_settings() -> Settings:
    cors_env = os.getenv("CORS_ALLOW_ORIGINS", "*")
    cors = [o.strip() for o in cors_env.split(",") if o.strip()] or ["*"]
    model = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    delay_env = os.getenv("FALLBACK_CHUNK_DELAY_MS")
    try:
        delay_ms = int(delay_env) if delay_env else 20
    except ValueError:
        delay_ms = 20
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=model,
        cors_allow_origins=cors,
        fallback_chunk_delay=max(delay_ms, 0) / 1000.0,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        prompts=_load_prompts(),
    )


def _load_prompts() -> dict:
    # prompts.yml lives in the backend root (parent of contentgen/)
    backend_root = pathlib.Path(__file__).resolve().parents[1]
    prompts_path = backend_root / "prompts.yml"
    try:
        with open(prompts_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Could not read %s, using built-in prompts: %s", prompts_path, exc)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Built-in prompts used when prompts.yml lacks an entry
DEFAULT_SYSTEM_PROMPT = "You are an expert content writer."

DEFAULT_USER_PROMPTS = {
    "blog": (
        "Write a {length} {tone} blog post about: {prompt}\n"
        "Make it engaging, informative, and well-structured."
    ),
    "social": (
        "Create {length} {tone} social media content about: {prompt}\n"
        "Include hashtags and make it engaging."
    ),
    "email": (
        "Write a {length} {tone} email about: {prompt}\n"
        "Include a subject line and professional closing."
    ),
    "product": (
        "Write a {length} {tone} product description for: {prompt}\n"
        "Highlight benefits and USPs."
    ),
}
