"""Tests for TutorClient against a mocked OpenAI client."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest
from openai import APIConnectionError, AuthenticationError

from conftest import QUIZ_PAYLOAD
from study_space.config import LlmSettings
from study_space.errors import AIServiceError, AINotConfiguredError, InvalidCredentialsError
from study_space.llm import OptionLetter, PerformanceStats, TutorClient

SETTINGS = LlmSettings(api_key="sk-test", model="gpt-4o-mini", base_url=None, timeout_seconds=5.0)


def _client_returning(content):
    client = MagicMock()
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    client.chat.completions.create.return_value = MagicMock(choices=[choice])
    return client


def _tutor(content):
    client = _client_returning(content)
    return TutorClient(SETTINGS, client=client), client


class TestTutorClient:
    def test_ask_uses_tutor_persona(self):
        tutor, client = _tutor("Consideration is the price of a promise.")
        assert tutor.ask("What is consideration?") == "Consideration is the price of a promise."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][-1]["content"] == "What is consideration?"
        assert "response_format" not in kwargs

    def test_solution_strips_dollar_signs(self):
        tutor, _ = _tutor("Answer: $x = 2$")
        assert tutor.solve_problem("Solve x + 1 = 3") == "Answer: x = 2"

    def test_balance_equation_strips_backticks(self):
        tutor, _ = _tutor("`2H2 + O2 -> 2H2O`")
        assert tutor.balance_equation("H2 + O2 -> H2O") == "2H2 + O2 -> 2H2O"

    def test_generate_quiz_parses_json(self):
        tutor, client = _tutor(json.dumps(QUIZ_PAYLOAD))
        quiz = tutor.generate_quiz()
        assert quiz.title == "Daily Law Mix"
        assert [q.correct_option for q in quiz.questions] == [OptionLetter.A, OptionLetter.B]
        assert client.chat.completions.create.call_args.kwargs["response_format"] == {"type": "json_object"}

    def test_generate_quiz_accepts_fenced_json(self):
        tutor, _ = _tutor("```json\n" + json.dumps(QUIZ_PAYLOAD) + "\n```")
        assert len(tutor.generate_quiz().questions) == 2

    def test_invalid_json(self):
        tutor, _ = _tutor("not json at all")
        with pytest.raises(AIServiceError, match="invalid JSON"):
            tutor.generate_quiz()

    def test_quiz_without_questions(self):
        tutor, _ = _tutor(json.dumps({"title": "Empty", "questions": []}))
        with pytest.raises(AIServiceError, match="invalid data structure"):
            tutor.generate_quiz()

    def test_amendment_points_keep_order(self):
        tutor, _ = _tutor(json.dumps({"points": ["first", "second", "third"]}))
        assert tutor.summarize_amendments("Tax", "GST").points == ["first", "second", "third"]

    def test_empty_response(self):
        tutor, _ = _tutor("   ")
        with pytest.raises(AIServiceError, match="empty response"):
            tutor.section_summary("Section 420 IPC")

    def test_insights_include_stats(self):
        tutor, client = _tutor("Practice torts.")
        stats = PerformanceStats(
            overall_accuracy=50.0,
            total_solved=4,
            subject_accuracy={"Torts": 25.0},
            average_score_percentage=60.0,
            total_challenges=2,
        )
        assert tutor.performance_insights(stats) == "Practice torts."
        assert "Torts" in client.chat.completions.create.call_args.kwargs["messages"][-1]["content"]

    def test_authentication_error(self):
        tutor, client = _tutor("unused")
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        response = httpx.Response(401, request=request)
        client.chat.completions.create.side_effect = AuthenticationError("bad key", response=response, body=None)
        with pytest.raises(InvalidCredentialsError):
            tutor.ask("hi")

    def test_connection_error(self):
        tutor, client = _tutor("unused")
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client.chat.completions.create.side_effect = APIConnectionError(request=request)
        with pytest.raises(AIServiceError, match="Failed to connect to AI service"):
            tutor.ask("hi")

    def test_missing_api_key(self):
        tutor = TutorClient(LlmSettings(api_key=None, model="gpt-4o-mini", base_url=None, timeout_seconds=5.0))
        with pytest.raises(AINotConfiguredError, match="OPENAI_API_KEY"):
            tutor.ask("hi")
