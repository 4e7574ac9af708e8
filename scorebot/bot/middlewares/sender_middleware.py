from __future__ import annotations
import logging
from typing import Any, Awaitable, Callable, Dict
from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

log = logging.getLogger(__name__)

class SenderMiddleware(BaseMiddleware):
    """Injects sender_handle / chat_id taken from the chat into handler data."""
    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any]
    ) -> Any:
        chat = getattr(event, "chat", None)
        data["sender_handle"] = getattr(chat, "username", None) or ""
        data["chat_id"] = str(chat.id) if chat is not None else ""
        if isinstance(event, Message):
            log.info("Got command: '%s' from @%s", event.text, data["sender_handle"])
        return await handler(event, data)
