from __future__ import annotations

from typing import Any, Dict, Optional

from ..core import ChallengeSession
from .registry import register_api
from .serializers import serialize, serialize_many, serialize_quiz
from .state import get_api_state


def _state():
    state = get_api_state()
    state.ensure_loaded()
    return state


# ------------------------------------------------------------------ problems


@register_api("list_problems", description="List tracked problems.", category="problems")
def list_problems(bookmarked_only: bool = False) -> Dict[str, Any]:
    return {"problems": serialize_many(_state().problems.list_problems(bookmarked_only=bookmarked_only))}


@register_api("add_problem", description="Track a new unsolved problem.", category="problems")
def add_problem(question: str, subject: str, topic: str) -> Dict[str, Any]:
    return {"problem": serialize(_state().problems.add(question, subject, topic))}


@register_api(
    "set_problem_status",
    description="Set a problem's status to correct, incorrect or unsolved.",
    category="problems",
)
def set_problem_status(problem_id: int, status: str) -> Dict[str, Any]:
    problem = _state().problems.set_status(problem_id, status)
    return {"problem": serialize(problem) if problem else None}


@register_api("toggle_problem_bookmark", description="Bookmark or un-bookmark a problem.", category="problems")
def toggle_problem_bookmark(problem_id: int) -> Dict[str, Any]:
    problem = _state().problems.toggle_bookmark(problem_id)
    return {"problem": serialize(problem) if problem else None}


@register_api("save_problem_solution", description="Save your own solution to a problem.", category="problems")
def save_problem_solution(problem_id: int, solution: str) -> Dict[str, Any]:
    problem = _state().problems.save_user_solution(problem_id, solution)
    return {"problem": serialize(problem) if problem else None}


@register_api(
    "solve_problem_with_ai",
    description="Get (and store) a step-by-step AI solution for a problem.",
    category="problems",
)
def solve_problem_with_ai(problem_id: int) -> Dict[str, Any]:
    return {"problem_id": problem_id, "ai_solution": _state().problems.request_ai_solution(problem_id)}


@register_api("delete_problem", description="Delete a problem by its identifier.", category="problems")
def delete_problem(problem_id: int) -> Dict[str, Any]:
    _state().problems.delete(problem_id)
    return {"deleted": True, "problem_id": problem_id}


# ------------------------------------------------------------------ tutor


@register_api("ask_doubt", description="Ask the AI tutor a question and log it in the diary.", category="tutor")
def ask_doubt(question: str) -> Dict[str, Any]:
    return {"doubt": serialize(_state().doubts.ask(question))}


@register_api("chat_with_tutor", description="Chat with the AI tutor without logging.", category="tutor")
def chat_with_tutor(message: str) -> Dict[str, Any]:
    return {"reply": _state().doubts.chat(message)}


@register_api("doubt_diary", description="Doubts asked in the last 24 hours.", category="tutor")
def doubt_diary() -> Dict[str, Any]:
    return {"doubts": serialize_many(_state().doubts.diary())}


@register_api("lookup_section", description="Plain-language summary of a section of an act.", category="tutor")
def lookup_section(query: str) -> Dict[str, Any]:
    return {"query": query, "summary": _state().context.tutor.section_summary(query)}


@register_api("balance_equation", description="Balance a chemical equation with the AI.", category="tutor")
def balance_equation(equation: str) -> Dict[str, Any]:
    return {"equation": equation, "balanced": _state().context.tutor.balance_equation(equation)}


# ------------------------------------------------------------------ daily challenge


def _session() -> ChallengeSession:
    session = _state().challenges.session
    if session is None:
        raise RuntimeError("No daily challenge is in progress. Call start_daily_challenge first.")
    return session


@register_api(
    "start_daily_challenge",
    description="Generate today's 10-question quiz and start its 30 minute clock.",
    category="challenge",
)
def start_daily_challenge() -> Dict[str, Any]:
    state = _state()
    quiz = state.challenges.generate()
    state.challenges.session.begin()
    return {"quiz": serialize_quiz(quiz, reveal_answers=False), "time_left": state.challenges.session.time_left()}


@register_api(
    "answer_challenge_question",
    description="Choose option A-D for a question (0-based index) of the running challenge.",
    category="challenge",
)
def answer_challenge_question(index: int, option: str) -> Dict[str, Any]:
    session = _session()
    session.answer(index, option)
    return {"index": index, "option": option.upper(), "time_left": session.time_left()}


@register_api(
    "finish_daily_challenge",
    description="Finish the running challenge, save the score and reveal the answers.",
    category="challenge",
)
def finish_daily_challenge() -> Dict[str, Any]:
    session = _session()
    quiz = session.quiz
    answers = [answer.value if answer else None for answer in session.answers]
    result = _state().challenges.record_session()
    return {"result": serialize(result), "answers": answers, "quiz": serialize_quiz(quiz, reveal_answers=True)}


@register_api("challenge_history", description="Past daily challenge scores, newest first.", category="challenge")
def challenge_history() -> Dict[str, Any]:
    return {"history": serialize_many(_state().challenges.history)}


# ------------------------------------------------------------------ amendments


@register_api(
    "fetch_amendments",
    description="Summarize amendments for a subject and topic with the AI and save them.",
    category="amendments",
)
def fetch_amendments(subject: str, topic: str) -> Dict[str, Any]:
    return {"amendment": serialize(_state().amendments.fetch_and_save(subject, topic))}


@register_api("list_amendments", description="Saved amendment summaries, newest first.", category="amendments")
def list_amendments() -> Dict[str, Any]:
    return {"amendments": serialize_many(_state().amendments.list_amendments())}


@register_api("delete_amendment", description="Delete a saved amendment summary.", category="amendments")
def delete_amendment(amendment_id: int) -> Dict[str, Any]:
    _state().amendments.delete(amendment_id)
    return {"deleted": True, "amendment_id": amendment_id}


# ------------------------------------------------------------------ analytics and profile


@register_api("performance_summary", description="Problem accuracy and challenge score statistics.", category="analytics")
def performance_summary() -> Dict[str, Any]:
    return {"summary": _state().analytics.summary().to_dict()}


@register_api("performance_insights", description="AI coaching based on your statistics.", category="analytics")
def performance_insights() -> Dict[str, Any]:
    return {"insights": _state().analytics.insights()}


@register_api("get_profile", description="Return the user profile.", category="profile")
def get_profile() -> Dict[str, Any]:
    profile = _state().profile.profile
    return {"profile": serialize(profile) if profile else None}


@register_api("update_username", description="Change the profile username.", category="profile")
def update_username(username: str) -> Dict[str, Any]:
    profile = _state().profile.rename(username)
    return {"profile": serialize(profile) if profile else None}


@register_api(
    "upload_avatar",
    description="Upload an image file from disk as the profile avatar.",
    category="profile",
)
def upload_avatar(path: str, content_type: Optional[str] = None) -> Dict[str, Any]:
    import mimetypes
    from pathlib import Path

    source = Path(path)
    guessed = content_type or mimetypes.guess_type(source.name)[0] or "application/octet-stream"
    url = _state().profile.upload_avatar(source.name, source.read_bytes(), content_type=guessed)
    return {"avatar_url": url}
