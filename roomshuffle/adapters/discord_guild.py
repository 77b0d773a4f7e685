# roomshuffle/adapters/discord_guild.py
"""
Discord guild adapter (py-cord) for the shuffle service.

Maps a discord.Guild onto the VoicePlatform protocol:
- categories -> RoomGroup
- guild channels -> Room (voice channels are the only shuffle targets)
- voice channel members -> Participant
- Member.move_to -> relocation

Channel and member lookups read the gateway cache, so the bot needs the
guilds, members and voice_states intents.
"""

import logging
from typing import List

import discord

from roomshuffle.domain.errors import RelocationFailed
from roomshuffle.domain.models import Participant, Room, RoomGroup, RoomKind

logger = logging.getLogger(__name__)

MOVE_REASON = "Room shuffle"


def room_kind(channel) -> RoomKind:
    if isinstance(channel, discord.VoiceChannel):
        return RoomKind.VOICE
    if isinstance(channel, discord.TextChannel):
        return RoomKind.TEXT
    return RoomKind.OTHER


def to_participant(member: discord.Member) -> Participant:
    voice = member.voice
    return Participant(
        id=member.id,
        name=member.display_name,
        room_id=voice.channel.id if voice and voice.channel else None,
    )


class DiscordGuildPlatform:
    def __init__(self, guild: discord.Guild):
        self.guild = guild

    def room_groups(self) -> List[RoomGroup]:
        return [RoomGroup(id=c.id, name=c.name) for c in self.guild.categories]

    def rooms(self) -> List[Room]:
        return [
            Room(id=c.id, name=c.name, kind=room_kind(c), group_id=c.category_id)
            for c in self.guild.channels
            if not isinstance(c, discord.CategoryChannel)
        ]

    async def occupants(self, room: Room) -> List[Participant]:
        channel = self.guild.get_channel(room.id)
        if channel is None:
            raise LookupError(f"Channel {room.name} ({room.id}) no longer exists")
        return [to_participant(m) for m in channel.members]

    async def move(self, participant: Participant, room: Room) -> None:
        member = self.guild.get_member(participant.id)
        if member is None:
            raise RelocationFailed(f"{participant.name} is no longer in the server")
        if member.voice is None:
            raise RelocationFailed(f"{participant.name} left voice")

        channel = self.guild.get_channel(room.id)
        if channel is None:
            raise RelocationFailed(f"Channel {room.name} no longer exists")

        try:
            await member.move_to(channel, reason=MOVE_REASON)
        except discord.DiscordException as e:
            raise RelocationFailed(f"Could not move {participant.name}: {e}") from e
