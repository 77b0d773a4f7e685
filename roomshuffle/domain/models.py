from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from roomshuffle.domain.errors import InvalidShuffleRequest


class RoomKind(str, Enum):
    VOICE = "voice"
    TEXT = "text"
    OTHER = "other"


class RoomGroup(BaseModel):
    id: int
    name: str


class Room(BaseModel):
    id: int
    name: str
    kind: RoomKind = RoomKind.VOICE
    group_id: Optional[int] = None


class Participant(BaseModel):
    id: int
    name: str
    room_id: Optional[int] = None


class ShuffleRequest(BaseModel):
    group_id: Optional[int] = None
    room_size: Optional[int] = Field(default=None, gt=0)

    @classmethod
    def from_options(cls, category_id: Optional[str] = None, room_size: Optional[int] = None) -> "ShuffleRequest":
        """
        Build a request from raw command options.
        Blank category ids count as absent.
        """
        if category_id is not None and not str(category_id).strip():
            category_id = None
        try:
            return cls(group_id=category_id, room_size=room_size)
        except ValidationError as e:
            fields = ", ".join(
                "category_id" if err["loc"][0] == "group_id" else str(err["loc"][0])
                for err in e.errors()
            )
            raise InvalidShuffleRequest(f"Invalid value for {fields}") from e


class Assignment(BaseModel):
    participant: Participant
    room: Room


class RelocationStatus(str, Enum):
    MOVED = "moved"
    SKIPPED = "skipped"
    FAILED = "failed"


class RelocationResult(BaseModel):
    participant: Participant
    room: Room
    status: RelocationStatus
    error: Optional[str] = None


class ShuffleReport(BaseModel):
    group: RoomGroup
    participants: int
    rooms_used: int
    results: List[RelocationResult] = Field(default_factory=list)

    def count(self, status: RelocationStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def moved(self) -> int:
        return self.count(RelocationStatus.MOVED)

    @property
    def skipped(self) -> int:
        return self.count(RelocationStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(RelocationStatus.FAILED)


@dataclass
class ShuffleRun:
    """State of the shuffle currently holding the guard."""
    request: ShuffleRequest
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
