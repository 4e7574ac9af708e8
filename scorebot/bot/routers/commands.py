from __future__ import annotations
import logging
from aiogram import Router, F
from aiogram.enums import ParseMode
from aiogram.types import Message

from scorebot.bot.command_router import CommandRouter, PhotoReply, Reply

router = Router(name="commands")
log = logging.getLogger(__name__)

APOLOGY_TEXT = "Something went wrong. Try again later."

async def deliver(message: Message, reply: Reply) -> None:
    if isinstance(reply, PhotoReply):
        await message.answer_photo(photo=reply.photo_url, caption=reply.caption)
    else:
        await message.answer(reply.text, parse_mode=ParseMode.MARKDOWN)

@router.message(F.text)
async def on_command(message: Message, commands: CommandRouter, sender_handle: str, chat_id: str):
    try:
        reply = await commands.dispatch(message.text, sender_handle, chat_id)
        await deliver(message, reply)
    except Exception:
        log.exception("Failed to handle %r from @%s", message.text, sender_handle)
        await message.answer(APOLOGY_TEXT, parse_mode=ParseMode.MARKDOWN)
