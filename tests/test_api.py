"""End-to-end tests of the registered API functions through the FastAPI app."""

from __future__ import annotations

import inspect

import pytest
from fastapi.testclient import TestClient

from conftest import FakeWorld
from study_space.api import ApiState, call_api, get_api_functions, get_api_state, set_api_state
from study_space.services.http import app


@pytest.fixture
def world():
    previous = get_api_state()
    fake = FakeWorld(seed={"profiles": [{"id": 1, "username": "asha"}]})
    set_api_state(ApiState(context=fake.context))
    yield fake
    set_api_state(previous)


@pytest.fixture
def client(world):
    return TestClient(app)


def _call(client, function_name, /, **arguments):
    return client.post(f"/api/functions/{function_name}", json={"arguments": arguments})


class TestRegistry:
    def test_functions_are_listed_with_parameters(self, client):
        response = client.get("/api/functions")
        assert response.status_code == 200
        functions = {item["name"]: item for item in response.json()["functions"]}
        assert {"add_task", "timer_status", "start_daily_challenge", "read_note"} <= set(functions)
        assert functions["add_task"]["parameters"]["text"] == {"type": "string", "required": True}
        assert functions["set_task_completed"]["parameters"]["task_id"]["type"] == "integer"
        assert functions["delete_subject"]["parameters"]["remove_note"] == {"type": "boolean", "default": False}

    def test_sorted_by_category(self):
        keys = [(func.category, func.name) for func in get_api_functions()]
        assert keys == sorted(keys)

    def test_call_api_passes_name_through(self, world):
        assert call_api("add_subject", name="Evidence")["subject"]["name"] == "Evidence"

    def test_call_api_unknown(self):
        with pytest.raises(KeyError):
            call_api("does_not_exist")

    def test_list_available_tools(self, world):
        tools = call_api("list_available_tools")["tools"]
        assert any(tool["name"] == "balance_equation" for tool in tools)


class TestHttpEndpoints:
    def test_handlers_run_on_the_event_loop(self):
        from study_space.services.http import invoke_api_function, list_api_functions

        assert inspect.iscoroutinefunction(invoke_api_function)
        assert inspect.iscoroutinefunction(list_api_functions)

    def test_functions_taking_a_name_argument(self, client):
        subject = _call(client, "add_subject", name="Equity")
        assert subject.status_code == 200
        subject_id = subject.json()["result"]["subject"]["id"]
        renamed = _call(client, "rename_subject", subject_id=subject_id, name="Equity & Trusts")
        assert renamed.json()["result"]["subject"]["name"] == "Equity & Trusts"

        exam = _call(client, "add_exam", name="Finals", date="2099-05-01T09:00:00Z")
        assert exam.status_code == 200
        exam_id = exam.json()["result"]["exam"]["id"]
        updated = _call(client, "update_exam", exam_id=exam_id, name="Final exams")
        assert updated.json()["result"]["exam"]["name"] == "Final exams"

    def test_unknown_function(self, client):
        assert _call(client, "nope").status_code == 404

    def test_task_round_trip(self, client, world):
        created = _call(client, "add_task", text="Brief Donoghue", subject="Torts")
        assert created.status_code == 200
        task = created.json()["result"]["task"]
        assert task["text"] == "Brief Donoghue"

        listed = _call(client, "list_tasks").json()["result"]["tasks"]
        assert [item["id"] for item in listed] == [task["id"]]

        _call(client, "set_task_completed", task_id=task["id"], completed=True)
        pending = _call(client, "list_tasks", include_completed=False).json()["result"]["tasks"]
        assert pending == []

    def test_delete_missing_row_is_404(self, client):
        response = _call(client, "delete_task", task_id=42)
        assert response.status_code == 404
        assert "with id 42" in response.json()["detail"]

    def test_validation_errors_are_400(self, client):
        assert _call(client, "add_task", text="   ").status_code == 400
        assert _call(client, "add_exam", name="Finals", date="soon").status_code == 400
        assert _call(client, "add_task").status_code == 400

    def test_read_new_note_is_empty(self, client):
        response = _call(client, "read_note", subject_id=5)
        assert response.json()["result"] == {"subject_id": 5, "content": ""}
        _call(client, "save_note", subject_id=5, content="Duty, breach, damage")
        assert _call(client, "read_note", subject_id=5).json()["result"]["content"] == "Duty, breach, damage"

    def test_exam_countdowns(self, client):
        _call(client, "add_exam", name="Finals", date="2099-01-01T00:00:00Z")
        exams = _call(client, "exam_countdowns").json()["result"]["exams"]
        assert exams[0]["exam"]["name"] == "Finals"
        assert exams[0]["countdown"]["is_past"] is False

    def test_ask_doubt(self, client, world):
        doubt = _call(client, "ask_doubt", question="What is an offer?").json()["result"]["doubt"]
        assert doubt["answer"] == world.tutor.ask.return_value
        diary = _call(client, "doubt_diary").json()["result"]["doubts"]
        assert [item["id"] for item in diary] == [doubt["id"]]

    def test_daily_challenge_hides_answers_until_finished(self, client):
        started = _call(client, "start_daily_challenge").json()["result"]
        for question in started["quiz"]["questions"]:
            assert "correctOption" not in question
        assert started["time_left"] == 30 * 60

        _call(client, "answer_challenge_question", index=0, option="a")
        _call(client, "answer_challenge_question", index=1, option="b")
        finished = _call(client, "finish_daily_challenge").json()["result"]
        assert finished["result"]["score"] == 2
        assert finished["answers"] == ["A", "B"]
        assert finished["quiz"]["questions"][0]["correctOption"] == "A"

        history = _call(client, "challenge_history").json()["result"]["history"]
        assert history[0]["score"] == 2

    def test_answer_without_challenge(self, client):
        assert _call(client, "answer_challenge_question", index=0, option="A").status_code == 400

    def test_problem_ai_solution(self, client):
        problem = _call(client, "add_problem", question="Q", subject="S", topic="T").json()["result"]["problem"]
        solved = _call(client, "solve_problem_with_ai", problem_id=problem["id"]).json()["result"]
        assert solved["ai_solution"] == "Step 1: identify the offer."

    def test_insights_without_data(self, client):
        insights = _call(client, "performance_insights").json()["result"]["insights"]
        assert insights.startswith("There's not enough data")

    def test_profile(self, client):
        assert _call(client, "get_profile").json()["result"]["profile"]["username"] == "asha"
        renamed = _call(client, "update_username", username="Asha K").json()["result"]["profile"]
        assert renamed["username"] == "Asha K"

    def test_timer(self, client):
        status = _call(client, "timer_status").json()["result"]
        assert status["mode"] == "work"
        assert status["running"] is False
        assert _call(client, "timer_start").json()["result"]["running"] is True
        assert _call(client, "timer_pause").json()["result"]["running"] is False
        configured = _call(client, "timer_configure", work_seconds=3000, break_seconds=600).json()["result"]
        assert configured["remaining"] == 3000
        assert _call(client, "timer_configure", work_seconds=-1, break_seconds=600).status_code == 400


class TestCli:
    def test_parse_arguments(self):
        from study_space.cli import parse_arguments

        assert parse_arguments(["task_id=3", "completed=true", "text=Read ch. 2"]) == {
            "task_id": 3,
            "completed": True,
            "text": "Read ch. 2",
        }
        with pytest.raises(ValueError):
            parse_arguments(["oops"])

    def test_call_prints_json(self, world, capsys):
        from study_space.cli import main

        assert main(["call", "add_subject", "name=Equity"]) == 0
        assert '"name": "Equity"' in capsys.readouterr().out

    def test_call_reports_errors(self, world, capsys):
        from study_space.cli import main

        assert main(["call", "delete_task", "task_id=99"]) == 1
        assert "with id 99" in capsys.readouterr().err


class TestTimerNotifier:
    def test_expiry_seen_by_a_poll_fires_the_notifier(self):
        from unittest.mock import MagicMock

        from study_space.domain import TimerMode

        notifier = MagicMock()
        fake = FakeWorld(notifier=notifier)
        previous = get_api_state()
        set_api_state(ApiState(context=fake.context))
        try:
            call_api("timer_configure", work_seconds=0, break_seconds=60)
            call_api("timer_start")
            status = call_api("timer_status")
        finally:
            set_api_state(previous)
        assert status["mode"] == "break"
        notifier.notify.assert_called_once_with(TimerMode.WORK)
