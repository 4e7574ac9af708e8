from __future__ import annotations

class UnsupportedTaskKind(ValueError):
    """Task kind outside homework/lab/test; a data-integrity problem, not a user error."""

    def __init__(self, kind: str, task_id: str | None = None):
        self.kind = kind
        self.task_id = task_id
        where = f" (task {task_id!r})" if task_id else ""
        super().__init__(f"Unsupported task type {kind!r}{where}")
