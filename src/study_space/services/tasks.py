from __future__ import annotations

from dataclasses import dataclass

from ..domain import Task
from .context import ServiceContext


@dataclass(slots=True)
class TaskService:
    context: ServiceContext

    def list_tasks(self) -> list[Task]:
        return self.context.tasks.items

    def add(self, text: str, subject: str = "") -> Task:
        if not text.strip():
            raise ValueError("Task text must not be empty.")
        return self.context.tasks.create(text=text.strip(), subject=subject, completed=False)

    def set_completed(self, task_id: int, completed: bool) -> Task | None:
        return self.context.tasks.update(task_id, completed=completed)

    def delete(self, task_id: int) -> None:
        self.context.tasks.delete(task_id)
