# roomshuffle/services/relocation.py
"""
Sequential, rate-limited relocation of participants.

Assignments are pushed onto a queue drained by a single worker. The worker
waits `delay` seconds between two relocation requests so the chat platform
never sees a burst of moves. A failed move is logged and recorded; it never
stops the rest of the queue and is never retried.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List

from roomshuffle.config.settings import settings
from roomshuffle.domain.models import (
    Assignment,
    RelocationResult,
    RelocationStatus,
)
from roomshuffle.services.platform import VoicePlatform

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RelocationQueue:
    def __init__(self, platform: VoicePlatform, delay: float | None = None, sleep: Sleep = asyncio.sleep):
        self.platform = platform
        self.delay = settings.RELOCATION_DELAY_SECONDS if delay is None else delay
        self._sleep = sleep

    async def run(self, assignments: Iterable[Assignment]) -> List[RelocationResult]:
        """Move everyone in assignment order and return one result per assignment."""
        queue: asyncio.Queue[Assignment] = asyncio.Queue()
        for assignment in assignments:
            queue.put_nowait(assignment)

        results: List[RelocationResult] = []
        worker = asyncio.create_task(self._worker(queue, results))
        drained = asyncio.create_task(queue.join())
        try:
            # the worker only finishes on its own when it crashed
            await asyncio.wait({drained, worker}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            drained.cancel()
            worker.cancel()
            await asyncio.gather(drained, worker, return_exceptions=True)

        if not worker.cancelled() and worker.exception() is not None:
            raise worker.exception()
        return results

    async def _worker(self, queue: asyncio.Queue, results: List[RelocationResult]) -> None:
        requests_sent = 0
        while True:
            assignment = await queue.get()
            try:
                participant, room = assignment.participant, assignment.room
                if participant.room_id == room.id:
                    logger.info("%s is already in %s", participant.name, room.name)
                    results.append(RelocationResult(
                        participant=participant, room=room, status=RelocationStatus.SKIPPED
                    ))
                    continue

                if requests_sent and self.delay > 0:
                    await self._sleep(self.delay)
                requests_sent += 1

                results.append(await self._relocate(assignment))
            finally:
                queue.task_done()

    async def _relocate(self, assignment: Assignment) -> RelocationResult:
        participant, room = assignment.participant, assignment.room
        try:
            await self.platform.move(participant, room)
        except Exception as e:
            logger.warning("Error moving %s to %s: %s", participant.name, room.name, e)
            return RelocationResult(
                participant=participant, room=room, status=RelocationStatus.FAILED, error=str(e)
            )
        logger.info("Moved %s to %s", participant.name, room.name)
        return RelocationResult(participant=participant, room=room, status=RelocationStatus.MOVED)
