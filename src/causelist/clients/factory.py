from __future__ import annotations

from causelist.clients.base import CauseListSource
from causelist.clients.gemini import GeminiCauseListClient
from causelist.clients.mock import FixtureCauseListClient
from causelist.config import Settings


def build_source(settings: Settings) -> CauseListSource:
    """Return the configured cause-list source. Raises ValueError if Gemini has no API key."""

    if settings.data_source == "fixture":
        return FixtureCauseListClient(settings.fixture_path)
    return GeminiCauseListClient(
        settings.api_key or "",
        base_url=settings.api_base_url,
        model=settings.model,
        timeout=settings.api_timeout,
        user_agent=settings.user_agent,
    )
