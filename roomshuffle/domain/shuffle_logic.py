# roomshuffle/domain/shuffle_logic.py
"""
Pure domain logic for room shuffling.

This module contains only pure functions operating on the domain models.
Service-layer code talks to the chat platform and calls these functions
with the data it read from there.

Functions included:
- resolve_room_group
- eligible_rooms
- destination_rooms
- compute_room_count
- partition_participants
"""
import random
from typing import List, Optional, Sequence

from roomshuffle.domain.errors import (
    AmbiguousGroup,
    GroupNotFound,
    NoEligibleRooms,
    PartitionInfeasible,
)
from roomshuffle.domain.models import (
    Assignment,
    Participant,
    Room,
    RoomGroup,
    RoomKind,
)

DEFAULT_GROUP_NAME = "speed friending"
LOBBY_ROOM_NAME = "lobby"


def normalize_name(name: str) -> str:
    return name.strip().lower()


# ----------------------------
# Room group resolution
# ----------------------------

def resolve_room_group(
    groups: Sequence[RoomGroup],
    group_id: Optional[int] = None,
    name: str = DEFAULT_GROUP_NAME,
) -> RoomGroup:
    """
    Find the group to shuffle.

    With an explicit group_id only that group matches. Otherwise groups are
    matched case-insensitively against `name`; several matches raise
    AmbiguousGroup instead of guessing.

    Example:
    >>> groups = [RoomGroup(id=1, name="General"), RoomGroup(id=2, name="Speed Friending")]
    >>> resolve_room_group(groups).id
    2
    """
    if group_id is not None:
        for group in groups:
            if group.id == group_id:
                return group
        raise GroupNotFound(f"There is no category with ID {group_id}")

    wanted = normalize_name(name)
    matches = [g for g in groups if normalize_name(g.name) == wanted]
    if not matches:
        raise GroupNotFound(f"There is no category called '{name}'")
    if len(matches) > 1:
        raise AmbiguousGroup(name, [g.id for g in matches])
    return matches[0]


# ----------------------------
# Room filtering
# ----------------------------

def eligible_rooms(rooms: Sequence[Room], group: RoomGroup) -> List[Room]:
    """Voice rooms inside `group`, lobby included."""
    return [r for r in rooms if r.group_id == group.id and r.kind == RoomKind.VOICE]


def is_lobby(room: Room, lobby_name: str = LOBBY_ROOM_NAME) -> bool:
    return normalize_name(room.name) == normalize_name(lobby_name)


def destination_rooms(rooms: Sequence[Room], lobby_name: str = LOBBY_ROOM_NAME) -> List[Room]:
    """Rooms people may be shuffled into: everything but the lobby."""
    return [r for r in rooms if not is_lobby(r, lobby_name)]


# ----------------------------
# Partitioning
# ----------------------------

def compute_room_count(participant_count: int, destination_count: int, room_size: Optional[int] = None) -> int:
    """
    Number of rooms to fill.

    Without a room size every destination room is used; with one, as many
    full rooms as the participants allow. Never more than destination_count.
    """
    if room_size is None:
        wanted = destination_count
    else:
        wanted = participant_count // room_size
    return min(wanted, destination_count)


def partition_participants(
    participants: Sequence[Participant],
    rooms: Sequence[Room],
    room_size: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Assignment]:
    """
    Randomly spread participants over rooms, round-robin.

    Both lists are shuffled independently, then participant i goes to
    room i % room_count. Room loads differ by at most one.
    """
    if not rooms:
        raise NoEligibleRooms()

    shuffle = rng.shuffle if rng is not None else random.shuffle
    people = list(participants)
    targets = list(rooms)
    shuffle(people)
    shuffle(targets)

    room_count = compute_room_count(len(people), len(targets), room_size)
    if room_count == 0:
        raise PartitionInfeasible(
            f"Not enough people to fill a room of {room_size} "
            f"({len(people)} in the channels)"
        )

    return [
        Assignment(participant=p, room=targets[i % room_count])
        for i, p in enumerate(people)
    ]
