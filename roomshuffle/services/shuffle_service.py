# roomshuffle/services/shuffle_service.py
import asyncio
import logging
import threading
from typing import Awaitable, Callable, Iterable, List, Optional

from roomshuffle.config.settings import settings
from roomshuffle.domain import shuffle_logic as domain
from roomshuffle.domain.errors import NoEligibleRooms, ShuffleBusy, Unauthorized
from roomshuffle.domain.models import (
    Participant,
    Room,
    ShuffleReport,
    ShuffleRequest,
    ShuffleRun,
)
from roomshuffle.services.platform import VoicePlatform
from roomshuffle.services.relocation import RelocationQueue

logger = logging.getLogger(__name__)

OnStart = Callable[[str], Awaitable[None]]

START_MESSAGE = "Shuffling rooms!"


class SingleFlightGuard:
    """Exclusive flag that is either taken immediately or not at all."""

    def __init__(self):
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    @property
    def held(self) -> bool:
        return self._lock.locked()


async def collect_participants(platform: VoicePlatform, rooms: Iterable[Room]) -> List[Participant]:
    """
    Everyone currently in `rooms`, read concurrently.
    Fails as a whole if any single room cannot be read; the reads still
    in flight are cancelled.
    """
    reads = [asyncio.create_task(platform.occupants(room)) for room in rooms]
    try:
        per_room = await asyncio.gather(*reads)
    except BaseException:
        for read in reads:
            read.cancel()
        await asyncio.gather(*reads, return_exceptions=True)
        raise
    return [p for occupants in per_room for p in occupants]


class ShuffleCoordinator:
    """
    Runs one shuffle at a time.

    shuffle() checks the invoker's roles, takes the guard without waiting,
    plans the new layout and hands it to a RelocationQueue. The guard is
    released on every exit path.
    """

    def __init__(
        self,
        authorized_role_ids: Optional[Iterable[int]] = None,
        group_name: Optional[str] = None,
        lobby_name: Optional[str] = None,
        relocation_delay: Optional[float] = None,
    ):
        self.authorized_role_ids = set(
            settings.AUTHORIZED_ROLE_IDS if authorized_role_ids is None else authorized_role_ids
        )
        self.group_name = group_name or settings.DEFAULT_GROUP_NAME
        self.lobby_name = lobby_name or settings.LOBBY_ROOM_NAME
        self.relocation_delay = relocation_delay
        self.guard = SingleFlightGuard()
        self.current_run: Optional[ShuffleRun] = None

    @property
    def running(self) -> bool:
        return self.guard.held

    def is_authorized(self, role_ids: Iterable[int]) -> bool:
        return any(role_id in self.authorized_role_ids for role_id in role_ids)

    async def shuffle(
        self,
        platform: VoicePlatform,
        actor_role_ids: Iterable[int],
        category_id: Optional[str] = None,
        room_size: Optional[int] = None,
        on_start: Optional[OnStart] = None,
    ) -> ShuffleReport:
        if not self.is_authorized(actor_role_ids):
            logger.info("Shuffle rejected: no authorized role")
            raise Unauthorized()

        request = ShuffleRequest.from_options(category_id, room_size)

        if not self.guard.try_acquire():
            logger.info("Shuffle rejected: another shuffle is running")
            raise ShuffleBusy()

        self.current_run = ShuffleRun(request=request)
        try:
            return await self._run(platform, request, on_start)
        finally:
            self.current_run = None
            self.guard.release()

    async def _run(self, platform: VoicePlatform, request: ShuffleRequest, on_start: Optional[OnStart]) -> ShuffleReport:
        group = domain.resolve_room_group(platform.room_groups(), request.group_id, self.group_name)
        logger.info("Shuffling category %s (%s)", group.name, group.id)

        rooms = domain.eligible_rooms(platform.rooms(), group)
        logger.info("Found %d channels", len(rooms))
        for room in rooms:
            logger.info("-- %s", room.name)

        destinations = domain.destination_rooms(rooms, self.lobby_name)
        if not destinations:
            raise NoEligibleRooms()

        participants = await collect_participants(platform, rooms)
        logger.info("Found %d speakers", len(participants))
        for participant in participants:
            logger.info("-- %s", participant.name)

        assignments = domain.partition_participants(participants, destinations, request.room_size)
        rooms_used = len({a.room.id for a in assignments})

        if on_start is not None:
            await on_start(START_MESSAGE)

        results = await RelocationQueue(platform, self.relocation_delay).run(assignments)
        report = ShuffleReport(
            group=group,
            participants=len(participants),
            rooms_used=rooms_used,
            results=results,
        )
        logger.info(
            "Done shuffle: %d moved, %d already in place, %d failed across %d rooms",
            report.moved, report.skipped, report.failed, report.rooms_used,
        )
        return report


coordinator: ShuffleCoordinator | None = None


def get_coordinator() -> ShuffleCoordinator:
    """Process-wide coordinator, created on first use."""
    global coordinator
    if coordinator is None:
        coordinator = ShuffleCoordinator()
    return coordinator
