from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, TypeVar

import httpx

from causelist.clients.base import CauseListSource, FetchError
from causelist.types import CauseList, cause_list_from_payload, string_list_from_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")

STRING_ARRAY_SCHEMA: dict[str, Any] = {"type": "ARRAY", "items": {"type": "STRING"}}

CAUSE_LIST_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "courtName": {"type": "STRING"},
            "cases": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "serialNumber": {"type": "INTEGER"},
                        "caseNumber": {"type": "STRING"},
                        "parties": {"type": "STRING"},
                        "petitionerAdvocate": {"type": "STRING"},
                        "respondentAdvocate": {"type": "STRING"},
                        "pdfAvailable": {"type": "BOOLEAN"},
                    },
                    "required": [
                        "serialNumber",
                        "caseNumber",
                        "parties",
                        "petitionerAdvocate",
                        "respondentAdvocate",
                        "pdfAvailable",
                    ],
                },
            },
        },
        "required": ["courtName", "cases"],
    },
}


def states_prompt() -> str:
    return "List all states and union territories of India as a JSON array of strings."


def districts_prompt(state: str) -> str:
    return f"Generate a JSON array of 15 major district names for the Indian state of '{state}'."


def court_complexes_prompt(district: str) -> str:
    return (
        f"Generate a JSON array of 5 realistic court complex names for '{district}' district, India. "
        f"For example: 'District Court Complex, {district}', 'Civil Court, {district}', "
        "or 'Patiala House Courts'."
    )


def cause_list_prompt(complex_name: str, date: str) -> str:
    return f"""
You are a legal data simulator for the Indian eCourts system.
For the court complex "{complex_name}" on date "{date}", generate a realistic cause list.
The output must be a JSON array of court objects.
- Generate data for 4 to 6 courts.
- Each court object must have a "courtName" (e.g., "Hon'ble Mr. Justice R.K. Singh, Court No. 5") and a "cases" array.
- Each case object in the "cases" array must have:
  - "serialNumber": A number, starting from 1 for each court.
  - "caseNumber": A string (e.g., "Crl.A. 123/2024" or "CS(OS) 45/2023").
  - "parties": A string (e.g., "State of Delhi vs. Anil Kumar").
  - "petitionerAdvocate": A realistic Indian advocate name.
  - "respondentAdvocate": Another realistic Indian advocate name.
  - "pdfAvailable": A boolean, randomly assigned.
- Each court should have between 5 and 10 cases.
- Ensure the data is varied, realistic, and strictly follows the provided schema.
""".strip()


class GeminiCauseListClient(CauseListSource):
    """
    Cause-list source that asks Gemini to fabricate eCourts data.

    Every operation is one `generateContent` call with a JSON response schema. Nothing is
    retried or cached, and identical calls may return different content.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        user_agent: str = "ecourts-causelist/0.1",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("A Gemini API key is required")

        self._model = model
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"x-goog-api-key": api_key, "User-Agent": user_agent},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GeminiCauseListClient":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def fetch_state_list(self) -> list[str]:
        return self._generate(states_prompt(), STRING_ARRAY_SCHEMA, string_list_from_payload)

    def fetch_district_list(self, state: str) -> list[str]:
        return self._generate(districts_prompt(state), STRING_ARRAY_SCHEMA, string_list_from_payload)

    def fetch_court_complex_list(self, district: str) -> list[str]:
        return self._generate(
            court_complexes_prompt(district), STRING_ARRAY_SCHEMA, string_list_from_payload
        )

    def fetch_docket(self, complex_name: str, date: str) -> CauseList:
        return self._generate(
            cause_list_prompt(complex_name, date), CAUSE_LIST_SCHEMA, cause_list_from_payload
        )

    def _generate(self, prompt: str, schema: dict[str, Any], convert: Callable[[Any], T]) -> T:
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        try:
            response = self._client.post(f"/models/{self._model}:generateContent", json=body)
            response.raise_for_status()
            result = response.json()
            text = extract_text(result)
            if text is None:
                raise ValueError(describe_error(result))
            return convert(parse_json_text(text))
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as exc:
            logger.error(
                "Gemini API call failed",
                extra={"model": self._model, "error": str(exc), "error_type": type(exc).__name__},
            )
            raise FetchError() from exc


def extract_text(result: Any) -> str | None:
    """Return the first candidate's text part, or None when the response carries none."""

    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (IndexError, KeyError, TypeError):
        return None
    return text if isinstance(text, str) else None


def describe_error(result: Any) -> str:
    if isinstance(result, Mapping) and "error" in result:
        error = result["error"]
        if isinstance(error, Mapping):
            return f"Code {error.get('code')}: {error.get('message')}"
        return f"API error: {error}"
    return "Invalid response structure or empty content"


def parse_json_text(text: str) -> Any:
    """
    Parse model output as JSON.

    Models occasionally wrap JSON in a markdown code fence even when a JSON mime type was
    requested, so a leading ```json / trailing ``` pair is dropped before decoding.
    """

    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Response is not valid JSON: {exc}") from exc
