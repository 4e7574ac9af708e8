from __future__ import annotations
import asyncio
import logging
from typing import Any

from aiogram.enums import ParseMode

from scorebot.domain.models import TaskResult
from scorebot.reports.notifications import render_checked_message
from scorebot.repositories.base import ScoreStore

log = logging.getLogger(__name__)

class NotificationService:
    """Pushes "your task was checked" messages to subscribed students.

    `bot` only needs an aiogram-compatible `send_message` coroutine.
    """

    def __init__(self, bot: Any, store: ScoreStore, base_url: str):
        self.bot = bot
        self.store = store
        self.base_url = base_url

    async def notify_checked(self, result: TaskResult) -> bool:
        """Send one notification; False when there is nobody or nothing to notify about."""
        user = await self.store.lookup_user_by_handle(result.username)
        if not user or not user.telegram_id:
            log.info("Skip notification for @%s: not subscribed", result.username)
            return False
        tasks = await self.store.list_tasks_for_module(result.course)
        task = next((t for t in tasks if t.id == result.task), None)
        if task is None:
            log.warning("Skip notification for @%s: no task %s/%s", result.username, result.course, result.task)
            return False
        text = render_checked_message(task, result, self.base_url)
        await self.bot.send_message(chat_id=user.telegram_id, text=text, parse_mode=ParseMode.MARKDOWN)
        log.info("Notified @%s about %s/%s", result.username, result.course, result.task)
        return True

    async def run_once(self) -> int:
        """Process every pending checked result; returns how many were marked."""
        marked = 0
        for result in await self.store.list_unnotified_checked_results():
            try:
                await self.notify_checked(result)
            except Exception:
                # left unmarked, retried on the next tick
                log.exception("Notification for @%s %s/%s failed", result.username, result.course, result.task)
                continue
            try:
                await self.store.mark_notified(result)
            except Exception:
                log.exception("Could not mark @%s %s/%s as notified", result.username, result.course, result.task)
                continue
            marked += 1
        return marked

    async def watch(self, interval: float) -> None:
        log.info("Grading watcher started, interval=%ss", interval)
        while True:
            try:
                await self.run_once()
            except Exception:
                log.exception("Grading watcher tick failed")
            await asyncio.sleep(interval)
