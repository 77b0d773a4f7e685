# main.py
"""
Application entrypoint. Runs the Discord bot next to a small HTTP app.
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from roomshuffle.chat import bot as chat_bot
from roomshuffle.config.logging import setup_logging
from roomshuffle.config.settings import settings
from roomshuffle.services.shuffle_service import get_coordinator

logger = logging.getLogger(__name__)


def _log_bot_exit(task: asyncio.Task):
    if not task.cancelled() and task.exception() is not None:
        logger.error("Bot stopped with an error", exc_info=task.exception())


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting bot")
    bot_task = asyncio.create_task(chat_bot.start_bot())
    bot_task.add_done_callback(_log_bot_exit)

    try:
        yield
    finally:
        logger.info("Shutting down bot...")
        if chat_bot.bot is not None and not chat_bot.bot.is_closed():
            await chat_bot.bot.close()
        bot_task.cancel()
        await asyncio.gather(bot_task, return_exceptions=True)
        logger.info("Bot shutdown complete.")


app = FastAPI(title="Room Shuffle Bot", lifespan=lifespan)


@app.get("/")
async def index():
    """Health / basic info endpoint."""
    run = get_coordinator().current_run
    return {
        "status": "ok",
        "service": "room-shuffle",
        "env": settings.ENV,
        "shuffle_running": run is not None,
        "shuffle_started_at": run.started_at.isoformat() if run else None,
    }
