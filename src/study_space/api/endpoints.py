from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .registry import register_api
from .serializers import serialize, serialize_countdown, serialize_many
from .state import get_api_state


def _state():
    state = get_api_state()
    state.ensure_loaded()
    return state


@register_api(
    "refresh_dashboard",
    description="Reload every collection from Supabase and return the row counts.",
    category="dashboard",
)
def refresh_dashboard() -> Dict[str, Any]:
    return {"counts": get_api_state().reload()}


# ------------------------------------------------------------------ tasks


@register_api("list_tasks", description="List all tasks, most recently added first.", category="tasks")
def list_tasks(subject: Optional[str] = None, include_completed: bool = True) -> Dict[str, Any]:
    tasks = _state().tasks.list_tasks()
    if subject:
        tasks = [task for task in tasks if task.subject == subject]
    if not include_completed:
        tasks = [task for task in tasks if not task.completed]
    return {"tasks": serialize_many(tasks)}


@register_api("add_task", description="Create a new task for a subject.", category="tasks")
def add_task(text: str, subject: str = "") -> Dict[str, Any]:
    return {"task": serialize(_state().tasks.add(text, subject))}


@register_api("set_task_completed", description="Mark a task as completed or reopen it.", category="tasks")
def set_task_completed(task_id: int, completed: bool = True) -> Dict[str, Any]:
    task = _state().tasks.set_completed(task_id, completed)
    return {"task": serialize(task) if task else None}


@register_api("delete_task", description="Delete a task permanently by its identifier.", category="tasks")
def delete_task(task_id: int) -> Dict[str, Any]:
    _state().tasks.delete(task_id)
    return {"deleted": True, "task_id": task_id}


# ------------------------------------------------------------------ exams


@register_api("list_exams", description="List exams ordered by exam date.", category="exams")
def list_exams() -> Dict[str, Any]:
    return {"exams": serialize_many(_state().exams.list_exams())}


@register_api(
    "exam_countdowns",
    description="Return the live time remaining until every exam.",
    category="exams",
)
def exam_countdowns() -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    pairs = _state().exams.countdowns(now)
    return {"now": now.isoformat(), "exams": [serialize_countdown(exam, countdown) for exam, countdown in pairs]}


@register_api("add_exam", description="Add an exam with an ISO date; preparation starts now.", category="exams")
def add_exam(name: str, date: str) -> Dict[str, Any]:
    return {"exam": serialize(_state().exams.add(name, date))}


@register_api("update_exam", description="Change an exam's name, date or progress.", category="exams")
def update_exam(
    exam_id: int,
    name: Optional[str] = None,
    date: Optional[str] = None,
    progress: Optional[int] = None,
) -> Dict[str, Any]:
    changes = {key: value for key, value in {"name": name, "date": date, "progress": progress}.items() if value is not None}
    if not changes:
        raise ValueError("Nothing to update.")
    exam = _state().exams.update(exam_id, **changes)
    return {"exam": serialize(exam) if exam else None}


@register_api("delete_exam", description="Delete an exam by its identifier.", category="exams")
def delete_exam(exam_id: int) -> Dict[str, Any]:
    _state().exams.delete(exam_id)
    return {"deleted": True, "exam_id": exam_id}


# ------------------------------------------------------------------ subjects and notes


@register_api("list_subjects", description="List all subjects.", category="subjects")
def list_subjects() -> Dict[str, Any]:
    return {"subjects": serialize_many(_state().subjects.list_subjects())}


@register_api("add_subject", description="Create a subject.", category="subjects")
def add_subject(name: str) -> Dict[str, Any]:
    return {"subject": serialize(_state().subjects.add(name))}


@register_api("rename_subject", description="Rename a subject.", category="subjects")
def rename_subject(subject_id: int, name: str) -> Dict[str, Any]:
    subject = _state().subjects.rename(subject_id, name)
    return {"subject": serialize(subject) if subject else None}


@register_api(
    "delete_subject",
    description="Delete a subject. Its note is kept unless remove_note is true.",
    category="subjects",
)
def delete_subject(subject_id: int, remove_note: bool = False) -> Dict[str, Any]:
    _state().subjects.delete(subject_id, remove_note=remove_note)
    return {"deleted": True, "subject_id": subject_id, "note_removed": remove_note}


@register_api("read_note", description="Read the note for a subject; empty for a new note.", category="subjects")
def read_note(subject_id: int) -> Dict[str, Any]:
    return {"subject_id": subject_id, "content": _state().notes.load(subject_id)}


@register_api("save_note", description="Overwrite the note for a subject.", category="subjects")
def save_note(subject_id: int, content: str) -> Dict[str, Any]:
    _state().notes.save(subject_id, content)
    return {"subject_id": subject_id, "saved": True, "length": len(content)}
