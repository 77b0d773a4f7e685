# roomshuffle/domain/errors.py
"""
Errors raised while planning or running a room shuffle.

Every error carries a short message that is safe to show to the person
who invoked the command. RelocationFailed is the exception: it is
raised per participant by the platform binding and only ever logged.
"""


class ShuffleError(Exception):
    message = "The shuffle could not be completed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(ShuffleError):
    message = "You do not have an authorized role to use this command!"


class ShuffleBusy(ShuffleError):
    message = "A shuffle is already in progress"


class InvalidShuffleRequest(ShuffleError):
    message = "Invalid shuffle options"


class GroupNotFound(ShuffleError):
    message = "There is no matching category"


class AmbiguousGroup(GroupNotFound):
    """More than one category matches the fallback name."""

    def __init__(self, name: str, group_ids: list[int]):
        self.group_ids = group_ids
        ids = ", ".join(str(i) for i in group_ids)
        super().__init__(
            f"There are several categories called '{name}' ({ids}); "
            "pass category_id to pick one"
        )


class NoEligibleRooms(ShuffleError):
    message = "There are no voice channels to shuffle people into"


class PartitionInfeasible(ShuffleError):
    message = "Not enough people to fill a single room"


class RelocationFailed(ShuffleError):
    message = "Could not move participant"
