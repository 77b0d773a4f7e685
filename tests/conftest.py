# tests/conftest.py
import asyncio
from typing import Dict, List, Optional

import pytest

from roomshuffle.domain.errors import RelocationFailed
from roomshuffle.domain.models import Participant, Room, RoomGroup, RoomKind
from roomshuffle.services.shuffle_service import ShuffleCoordinator

ORGANIZER_ROLE = 42


class FakePlatform:
    """In-memory chat server: records every call the service makes."""

    def __init__(self, groups: List[RoomGroup], rooms: List[Room], occupants: Dict[int, List[Participant]]):
        self.groups = groups
        self.channel_list = rooms
        self.by_room = occupants
        self.calls: List[str] = []
        self.moves: List[tuple] = []
        self.fail_for: set[int] = set()
        self.broken_rooms: set[int] = set()
        self.move_gate: Optional[asyncio.Event] = None

    def room_groups(self):
        self.calls.append("room_groups")
        return list(self.groups)

    def rooms(self):
        self.calls.append("rooms")
        return list(self.channel_list)

    async def occupants(self, room):
        self.calls.append(f"occupants:{room.id}")
        if room.id in self.broken_rooms:
            raise LookupError(f"cannot read {room.name}")
        return list(self.by_room.get(room.id, []))

    async def move(self, participant, room):
        self.calls.append(f"move:{participant.id}")
        if self.move_gate is not None:
            await self.move_gate.wait()
        if participant.id in self.fail_for:
            raise RelocationFailed(f"{participant.name} left voice")
        self.moves.append((participant.id, room.id))


def build_server(room_names: List[str], people_per_room: List[int], group_name: str = "Speed Friending") -> FakePlatform:
    """One category with voice rooms, plus an unrelated category and text channel."""
    group = RoomGroup(id=100, name=group_name)
    other = RoomGroup(id=200, name="General")
    rooms = [Room(id=101 + i, name=name, group_id=group.id) for i, name in enumerate(room_names)]
    extra = [
        Room(id=199, name="chat", kind=RoomKind.TEXT, group_id=group.id),
        Room(id=201, name="hangout", group_id=other.id),
    ]
    occupants: Dict[int, List[Participant]] = {}
    next_id = 1
    for room, count in zip(rooms, people_per_room):
        occupants[room.id] = [
            Participant(id=next_id + k, name=f"user{next_id + k}", room_id=room.id) for k in range(count)
        ]
        next_id += count
    occupants[201] = [Participant(id=999, name="bystander", room_id=201)]
    return FakePlatform([group, other], rooms + extra, occupants)


@pytest.fixture
def server():
    # lobby + three rooms, ten people total
    return build_server(["Lobby", "Room 1", "Room 2", "Room 3"], [4, 2, 2, 2])


@pytest.fixture
def coordinator():
    return ShuffleCoordinator(authorized_role_ids=[ORGANIZER_ROLE], relocation_delay=0)
