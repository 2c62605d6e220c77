"""OpenAI client construction for plan generation."""
from __future__ import annotations

from typing import Optional

import openai
from fastapi import Depends

from cycle_planner.core.config import Settings, get_settings


def build_openai_client(settings: Settings) -> openai.OpenAI:
    # single attempt per request; the SDK default is two retries
    return openai.OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_seconds,
        max_retries=0,
    )


def get_generation_client(settings: Settings = Depends(get_settings)) -> Optional[openai.OpenAI]:
    """FastAPI dependency returning a client, or None when no key is configured."""
    if not settings.openai_api_key:
        return None
    return build_openai_client(settings)
