"""
Chat command dispatch.

COMMANDS is the ordered source of truth for both routing and the help
listing. CommandRouter.dispatch never talks to Telegram: it returns a reply
object and lets the transport deliver it. Errors are not caught here.
"""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from scorebot.integrations.images.base import ImageSource
from scorebot.reports.markdown import NEW_LINE, PARAGRAPH, bold
from scorebot.reports.module_report import build_module_report
from scorebot.repositories.base import ScoreStore

log = logging.getLogger(__name__)

CommandKind = Literal["subscribe", "module_report", "random_image", "help"]

@dataclass(frozen=True)
class BotCommand:
    token: str
    description: str
    kind: CommandKind

COMMANDS: tuple[BotCommand, ...] = (
    BotCommand("/start", "subscribe for my notifications", "subscribe"),
    BotCommand("/progbase", "get all your scores report of Progbase module", "module_report"),
    BotCommand("/progbase2", "get all your scores report of Progbase2 module", "module_report"),
    BotCommand("/webprogbase", "get all your scores report of WebProgbase module", "module_report"),
    BotCommand("/cat", "get random cat image :3", "random_image"),
    BotCommand("/help", "get my help", "help"),
)
HELP_TOKEN = "/help"
CAT_CAPTION = "Meow"

@dataclass(frozen=True)
class TextReply:
    text: str

@dataclass(frozen=True)
class PhotoReply:
    photo_url: str
    caption: str = CAT_CAPTION

Reply = Union[TextReply, PhotoReply]

def find_command(token: str) -> Optional[BotCommand]:
    return next((c for c in COMMANDS if c.token == token), None)

def module_id_for(token: str) -> str:
    return token[1:]

def not_registered_text(handle: str) -> str:
    return f"User with Telegram username {bold(handle)} is not registered on Progbase."

def help_text(handle: str, token: str) -> str:
    text = ""
    if token != HELP_TOKEN:
        text += f"I can't understand your command {bold(f'Master {handle}')}.{NEW_LINE}"
    text += f"What can I do for you?{NEW_LINE}"
    for cmd in COMMANDS:
        text += f"{cmd.token} - {cmd.description}{NEW_LINE}"
    return text

class CommandRouter:
    def __init__(self, store: ScoreStore, images: ImageSource, base_url: str):
        self.store = store
        self.images = images
        self.base_url = base_url

    async def dispatch(self, token: str, handle: str, chat_id: str) -> Reply:
        handle = handle or ""
        cmd = find_command(token)
        kind = cmd.kind if cmd else "help"
        log.debug("Dispatch %r from @%s -> %s", token, handle, kind)
        if kind == "subscribe":
            return TextReply(await self.subscribe(handle, chat_id))
        if kind == "module_report":
            return TextReply(await self.module_report(handle, module_id_for(token)))
        if kind == "random_image":
            return PhotoReply(await self.images.random_image_url())
        return TextReply(help_text(handle, token))

    async def subscribe(self, handle: str, chat_id: str) -> str:
        user = await self.store.lookup_user_by_handle(handle) if handle else None
        if not user:
            return not_registered_text(handle)
        await self.store.set_push_target(handle, chat_id)
        return (f"Hello, {bold(f'Master {handle}')}! Now you are subscribed to my notifications"
                f"{PARAGRAPH}Use /help for my help.")

    async def module_report(self, handle: str, module_id: str) -> str:
        user = await self.store.lookup_user_by_handle(handle) if handle else None
        if not user:
            return not_registered_text(handle)
        results, tasks = await asyncio.gather(
            self.store.list_results_for_user_and_module(handle, module_id),
            self.store.list_tasks_for_module(module_id),
        )
        published = [t for t in tasks if t.is_published]
        return build_module_report(module_id, results, published, self.base_url)
