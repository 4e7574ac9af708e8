from typing import Optional, Protocol
from scorebot.domain.models import Task, TaskResult, User

class ScoreStore(Protocol):
    """Read side of the grading database plus the subscribe-time write."""

    async def lookup_user_by_handle(self, handle: str) -> Optional[User]:
        ...

    async def set_push_target(self, handle: str, target: str) -> None:
        """Raises LookupError when the handle has no user row."""
        ...

    async def list_results_for_user_and_module(self, handle: str, module_id: str) -> list[TaskResult]:
        ...

    async def list_tasks_for_module(self, module_id: str) -> list[Task]:
        ...

    async def list_unnotified_checked_results(self) -> list[TaskResult]:
        """Graded results (checktime set) whose student has not been notified yet."""
        ...

    async def mark_notified(self, result: TaskResult) -> None:
        ...
