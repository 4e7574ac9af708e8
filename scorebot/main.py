from __future__ import annotations
import asyncio, contextlib, logging
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from scorebot.config import load_config
from scorebot.logger import setup_logging

from scorebot.bot.command_router import CommandRouter
from scorebot.bot.middlewares.sender_middleware import SenderMiddleware
from scorebot.bot.routers.commands import router as commands_router
from scorebot.integrations.images.random_cat import RandomCatImages
from scorebot.repositories.csv_store import CsvScoreStore
from scorebot.services.notify_service import NotificationService

async def main() -> None:
    cfg = load_config()
    setup_logging(cfg.log_level)
    log = logging.getLogger("main")

    bot = Bot(token=cfg.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.MARKDOWN))
    dp = Dispatcher()

    store = CsvScoreStore(cfg.data_dir)
    images = RandomCatImages(cfg.cat_api_url)
    notifications = NotificationService(bot, store, cfg.site_base_url)

    dp.message.middleware(SenderMiddleware())

    # DI
    dp["commands"] = CommandRouter(store, images, cfg.site_base_url)

    dp.include_router(commands_router)

    watcher = None
    if cfg.notify_poll_seconds > 0:
        watcher = asyncio.create_task(notifications.watch(cfg.notify_poll_seconds))

    me = await bot.get_me()
    log.info("Starting bot as @%s id=%s", me.username, me.id)
    try:
        await dp.start_polling(bot, polling_timeout=60, allowed_updates=["message"])
    finally:
        if watcher is not None:
            watcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await watcher
        log.info("Bot stopped")

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
