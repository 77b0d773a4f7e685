# roomshuffle/services/platform.py
from typing import List, Protocol

from roomshuffle.domain.models import Participant, Room, RoomGroup


class VoicePlatform(Protocol):
    """
    What the shuffle service needs from a chat server.

    room_groups() and rooms() read the current server state; occupants()
    and move() may hit the network. move() raises RelocationFailed when a
    single participant cannot be moved.
    """

    def room_groups(self) -> List[RoomGroup]: ...

    def rooms(self) -> List[Room]: ...

    async def occupants(self, room: Room) -> List[Participant]: ...

    async def move(self, participant: Participant, room: Room) -> None: ...
