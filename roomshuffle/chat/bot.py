# roomshuffle/chat/bot.py
import logging

import discord

from roomshuffle.config.settings import settings
from roomshuffle.chat.handlers import shuffle_commands

logger = logging.getLogger(__name__)

bot: discord.Bot | None = None


def get_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.members = True
    intents.voice_states = True
    return intents


def create_bot() -> discord.Bot:
    """Create the Bot and register the command handlers."""
    new_bot = discord.Bot(intents=get_intents())
    shuffle_commands.setup(new_bot)

    @new_bot.event
    async def on_ready():
        logger.info("%s is connected!", new_bot.user)

    return new_bot


def init_bot() -> discord.Bot:
    global bot
    if bot is None:
        bot = create_bot()
    return bot


async def start_bot():
    """Connect to Discord and run until the connection closes."""
    if not settings.discord_token:
        raise RuntimeError("Expected DISCORD_TOKEN in the environment")

    bot = init_bot()
    try:
        await bot.start(settings.discord_token)
    finally:
        if not bot.is_closed():
            await bot.close()
        logger.info("Bot stopped.")
