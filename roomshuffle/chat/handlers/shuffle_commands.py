# roomshuffle/chat/handlers/shuffle_commands.py
import logging
from enum import Enum
from typing import Optional

import discord

from roomshuffle.adapters.discord_guild import DiscordGuildPlatform
from roomshuffle.config.settings import settings
from roomshuffle.domain.errors import ShuffleError
from roomshuffle.services.platform import VoicePlatform
from roomshuffle.services.shuffle_service import ShuffleCoordinator, get_coordinator

logger = logging.getLogger(__name__)


class Command(str, Enum):
    SHUFFLE = "shuffle"


# Central command list (help)
COMMANDS = {
    Command.SHUFFLE: "Shuffle everyone in voice channels in the speed friending category",
}

GUILD_ONLY_MESSAGE = "This command can only be used inside a server"
FAILURE_MESSAGE = "Something went wrong while shuffling, check the bot logs"


async def handle_shuffle(
    ctx,
    category_id: Optional[str] = None,
    room_size: Optional[int] = None,
    coordinator: Optional[ShuffleCoordinator] = None,
    platform: Optional[VoicePlatform] = None,
):
    """
    /shuffle [category_id] [room_size]
    Replies with a short status; the acknowledgment is sent right before
    people start moving.
    """
    logger.info("Shuffle command")
    coordinator = coordinator or get_coordinator()

    if platform is None:
        if ctx.guild is None:
            await ctx.respond(GUILD_ONLY_MESSAGE)
            return
        platform = DiscordGuildPlatform(ctx.guild)

    role_ids = [role.id for role in getattr(ctx.author, "roles", [])]

    try:
        await coordinator.shuffle(
            platform,
            role_ids,
            category_id=category_id,
            room_size=room_size,
            on_start=ctx.respond,
        )
    except ShuffleError as e:
        await ctx.respond(e.message)
    except Exception:
        logger.exception("Error while processing shuffle")
        await ctx.respond(FAILURE_MESSAGE)


def setup(bot: discord.Bot):
    """Register the shuffle slash command, described by COMMANDS, on the bot."""
    guild_ids = settings.guild_ids or None

    @bot.slash_command(
        name=Command.SHUFFLE.value,
        description=COMMANDS[Command.SHUFFLE],
        guild_ids=guild_ids,
    )
    @discord.option("category_id", str, description="The ID of the category to shuffle", required=False, default=None)
    @discord.option("room_size", int, description="The number of people in each room", required=False, default=None, min_value=1)
    async def shuffle(ctx: discord.ApplicationContext, category_id: Optional[str] = None, room_size: Optional[int] = None):
        await handle_shuffle(ctx, category_id, room_size)
