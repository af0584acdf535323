"""Unit tests for interview_agent/agents/fact_extractor_agent"""
from __future__ import annotations
from unittest.mock import patch, MagicMock

import pytest

from interview_agent.agents.fact_extractor_agent import extract_facts, normalise_facts


def _make_mock_response(content) -> MagicMock:
    m = MagicMock()
    m.choices[0].message.content = content
    return m


@pytest.fixture
def mock_client():
    with patch("interview_agent.agents.fact_extractor_agent.fact_agent.get_client") as mock_get:
        client = MagicMock()
        mock_get.return_value = client
        yield client


class TestExtractFacts:

    def test_parses_json_object(self, mock_client):
        mock_client.chat.completions.create.return_value = _make_mock_response(
            '{"user_name": "Priya", "user_company": "100x"}'
        )
        assert extract_facts("I'm Priya from 100x", "Nice to meet you!") == {
            "user_name": "Priya",
            "user_company": "100x",
        }

    def test_requests_json_mode(self, mock_client):
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        extract_facts("Q", "A")
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert 'User: "Q"' in kwargs["messages"][1]["content"]

    def test_unparseable_is_empty(self, mock_client):
        mock_client.chat.completions.create.return_value = _make_mock_response("not json at all")
        assert extract_facts("Q", "A") == {}

    def test_array_is_empty(self, mock_client):
        mock_client.chat.completions.create.return_value = _make_mock_response('["a fact"]')
        assert extract_facts("Q", "A") == {}

    def test_missing_content_is_empty(self, mock_client):
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        assert extract_facts("Q", "A") == {}


class TestNormaliseFacts:

    def test_values_become_strings(self):
        assert normalise_facts({"years_experience": 5, "remote": True}) == {
            "years_experience": "5",
            "remote": "True",
        }

    def test_drops_null_and_blank(self):
        assert normalise_facts({"a": None, "b": "  ", " ": "x", "c": "ok"}) == {"c": "ok"}

    def test_nested_values_kept_as_json(self):
        assert normalise_facts({"skills": ["python", "rag"]}) == {"skills": '["python", "rag"]'}
