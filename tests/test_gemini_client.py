from __future__ import annotations

import json

import httpx
import pytest

from causelist.clients import FETCH_FAILED_MESSAGE, FetchError, GeminiCauseListClient
from causelist.clients.gemini import (
    CAUSE_LIST_SCHEMA,
    STRING_ARRAY_SCHEMA,
    describe_error,
    extract_text,
    parse_json_text,
)
from causelist.controller import CauseListController

COURTS_PAYLOAD = [
    {
        "courtName": "Hon'ble Mr. Justice R.K. Singh, Court No. 5",
        "cases": [
            {
                "serialNumber": 1,
                "caseNumber": "CS(OS) 45/2023",
                "parties": "Anita Sharma vs. Rajesh Verma",
                "petitionerAdvocate": "Meera Iyer",
                "respondentAdvocate": "Vikram Malhotra",
                "pdfAvailable": True,
            }
        ],
    }
]


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def _client(handler) -> GeminiCauseListClient:
    return GeminiCauseListClient("test-key", transport=httpx.MockTransport(handler))


def test_fetch_state_list_sends_prompt_and_schema():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_candidate('["Delhi", "Punjab"]'))

    with _client(handler) as client:
        assert client.fetch_state_list() == ["Delhi", "Punjab"]

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert request.headers["x-goog-api-key"] == "test-key"
    body = json.loads(request.content)
    assert body["generationConfig"] == {
        "responseMimeType": "application/json",
        "responseSchema": STRING_ARRAY_SCHEMA,
    }
    assert "states and union territories of India" in body["contents"][0]["parts"][0]["text"]


def test_district_and_complex_prompts_embed_selection():
    prompts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        prompts.append(json.loads(request.content)["contents"][0]["parts"][0]["text"])
        return httpx.Response(200, json=_candidate('["A"]'))

    with _client(handler) as client:
        client.fetch_district_list("Maharashtra")
        client.fetch_court_complex_list("Pune")

    assert "'Maharashtra'" in prompts[0]
    assert "'Pune' district" in prompts[1]


def test_fetch_docket_parses_courts():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["generationConfig"]["responseSchema"] == CAUSE_LIST_SCHEMA
        assert '"Patiala House Courts" on date "2024-05-01"' in body["contents"][0]["parts"][0]["text"]
        return httpx.Response(200, json=_candidate(json.dumps(COURTS_PAYLOAD)))

    with _client(handler) as client:
        courts = client.fetch_docket("Patiala House Courts", "2024-05-01")

    assert len(courts) == 1
    court = courts[0]
    assert court.court_name == "Hon'ble Mr. Justice R.K. Singh, Court No. 5"
    assert court.cases[0].case_number == "CS(OS) 45/2023"
    assert court.cases[0].pdf_available is True


def test_fenced_json_is_accepted():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_candidate('```json\n["Delhi"]\n```'))

    with _client(handler) as client:
        assert client.fetch_state_list() == ["Delhi"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": {"code": 500, "message": "internal"}}),
        httpx.Response(403, json={"error": {"code": 403, "message": "API key not valid"}}),
        httpx.Response(200, json=_candidate("not json at all")),
        httpx.Response(200, json=_candidate('{"states": ["Delhi"]}')),
        httpx.Response(200, json={"candidates": []}),
        httpx.Response(200, json={"error": "quota exceeded"}),
        httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": 5}]}}]}),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, text="<html>gateway</html>"),
    ],
)
def test_every_failure_collapses_to_fetch_error(response):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with _client(handler) as client:
        with pytest.raises(FetchError) as excinfo:
            client.fetch_state_list()

    assert excinfo.value.message == FETCH_FAILED_MESSAGE


def test_transport_failure_collapses_to_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(FetchError):
            client.fetch_district_list("Delhi")


def test_schema_mismatch_in_docket_is_a_fetch_error():
    broken = [{"courtName": "Court 1", "cases": [{"serialNumber": "one"}]}]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_candidate(json.dumps(broken)))

    with _client(handler) as client:
        with pytest.raises(FetchError):
            client.fetch_docket("Patiala House Courts", "2024-05-01")


def test_api_key_is_required():
    with pytest.raises(ValueError):
        GeminiCauseListClient("   ")


def test_parse_json_text_rejects_garbage():
    with pytest.raises(ValueError):
        parse_json_text("```\n```")


def test_non_string_text_part_is_treated_as_missing():
    assert extract_text({"candidates": [{"content": {"parts": [{"text": 5}]}}]}) is None
    assert extract_text(_candidate('["Delhi"]')) == '["Delhi"]'


def test_describe_error_handles_plain_string_errors():
    assert describe_error({"error": "quota exceeded"}) == "API error: quota exceeded"
    assert describe_error({"error": {"code": 429, "message": "slow down"}}) == "Code 429: slow down"
    assert describe_error(["unexpected"]) == "Invalid response structure or empty content"


def test_controller_shows_banner_when_service_returns_string_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "quota exceeded"})

    with _client(handler) as client:
        controller = CauseListController(client, initial_date="2024-05-01")
        controller.load_states()

    assert controller.error == FETCH_FAILED_MESSAGE
    assert controller.states == []
    assert controller.can_retry
