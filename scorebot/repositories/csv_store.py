from __future__ import annotations
import asyncio
import logging
import os
from typing import Optional

from scorebot.domain.models import Task, TaskResult, User
from scorebot.repositories.csv_repo import CsvTable
from scorebot.utils.time import now_iso

USER_COLUMNS = ["username", "fullname", "group_id", "student_id", "telegram_id"]
TASK_COLUMNS = ["id", "module_id", "type", "title", "score", "is_extra", "is_published"]
RESULT_COLUMNS = ["username", "course", "task", "updtime", "source", "commit",
                  "checktime", "comment", "score", "notified_at"]

# one row per check of a commit; identifies the row for notified_at
RESULT_KEY = ("username", "course", "task", "commit", "checktime")

log = logging.getLogger(__name__)

def _flag(v: str) -> bool:
    return str(v).strip().lower() in ("1", "true", "yes", "y")

def _float(v: str) -> Optional[float]:
    s = str(v).strip()
    return float(s) if s else None

def _opt(v: str) -> Optional[str]:
    s = str(v).strip()
    return s or None

def _user(row: dict) -> User:
    sid = str(row.get("student_id", "")).strip()
    return User(
        username=row["username"],
        fullname=row.get("fullname", ""),
        group_id=row.get("group_id", ""),
        student_id=int(sid) if sid.isdigit() else None,
        telegram_id=_opt(row.get("telegram_id", "")),
    )

def _task(row: dict) -> Task:
    return Task(
        id=row["id"],
        module_id=row["module_id"],
        kind=row["type"],
        title=row.get("title", ""),
        score=_float(row.get("score", "")) or 0,
        is_extra=_flag(row.get("is_extra", "")),
        is_published=_flag(row.get("is_published", "")),
    )

def _result(row: dict) -> TaskResult:
    return TaskResult(
        username=row["username"],
        course=row["course"],
        task=row["task"],
        score=_float(row.get("score", "")),
        comment=_opt(row.get("comment", "")),
        updtime=row.get("updtime", ""),
        source=row.get("source", ""),
        commit=row.get("commit", ""),
        checktime=_opt(row.get("checktime", "")),
    )

class CsvScoreStore:
    """ScoreStore over users.csv / tasks.csv / results.csv in data_dir."""

    def __init__(self, data_dir: str):
        self.users = CsvTable(os.path.join(data_dir, "users.csv"), USER_COLUMNS)
        self.tasks = CsvTable(os.path.join(data_dir, "tasks.csv"), TASK_COLUMNS)
        self.results = CsvTable(os.path.join(data_dir, "results.csv"), RESULT_COLUMNS)

    # ── Queries ────────────────────────────────────────────────────────────────
    async def lookup_user_by_handle(self, handle: str) -> Optional[User]:
        df = await asyncio.to_thread(self.users.find, username=handle)
        return _user(df.iloc[0].to_dict()) if len(df) else None

    async def list_tasks_for_module(self, module_id: str) -> list[Task]:
        df = await asyncio.to_thread(self.tasks.find, module_id=module_id)
        return [_task(r) for r in df.to_dict("records")]

    async def list_results_for_user_and_module(self, handle: str, module_id: str) -> list[TaskResult]:
        df = await asyncio.to_thread(self.results.find, username=handle, course=module_id)
        if df.empty:
            return []
        # latest checked submission per task; latest submission if none is checked yet
        df = df.assign(_checked=df["checktime"].str.strip() != "")
        df = df.sort_values(["_checked", "checktime", "updtime"], ascending=False, kind="stable")
        df = df.drop_duplicates("task")
        return [_result(r) for r in df.to_dict("records")]

    async def list_unnotified_checked_results(self) -> list[TaskResult]:
        df = await asyncio.to_thread(self.results.read)
        if df.empty:
            return []
        pending = df[(df["checktime"].str.strip() != "") & (df["notified_at"].str.strip() == "")]
        return [_result(r) for r in pending.sort_values("checktime", kind="stable").to_dict("records")]

    # ── Mutations ─────────────────────────────────────────────────────────────
    async def set_push_target(self, handle: str, target: str) -> None:
        hits = await asyncio.to_thread(self.users.update, {"username": handle}, {"telegram_id": target})
        if not hits:
            raise LookupError(f"user {handle!r} not found")
        log.info("Push target for @%s set to %s", handle, target)

    async def mark_notified(self, result: TaskResult) -> None:
        where = {k: getattr(result, k) or "" for k in RESULT_KEY}
        await asyncio.to_thread(self.results.update, where, {"notified_at": now_iso()})
