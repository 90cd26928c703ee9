from .base import FETCH_FAILED_MESSAGE, CauseListSource, FetchError
from .gemini import GeminiCauseListClient
from .mock import FixtureCauseListClient
from .factory import build_source

__all__ = [
    "CauseListSource",
    "FETCH_FAILED_MESSAGE",
    "FetchError",
    "FixtureCauseListClient",
    "GeminiCauseListClient",
    "build_source",
]
