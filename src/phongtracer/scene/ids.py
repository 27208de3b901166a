"""Identity allocation for scene objects.

Scene objects are compared by identity rather than by geometry, so each one
carries an integer id. Ids come from an explicit allocator owned by whoever
assembles the scene (usually a World), which keeps construction deterministic:
two scenes built the same way get the same ids.

Objects built elsewhere can join a scene; reserving their ids moves the
allocator past them so later allocations never collide.
"""


class ObjectIdAllocator:
    """Hands out increasing integer ids starting at ``start``."""

    def __init__(self, start: int = 0) -> None:
        self._next = start
        self._last: int | None = None

    def allocate(self) -> int:
        """Return the next unused id."""
        self._last = self._next
        self._next += 1
        return self._last

    def reserve(self, used_id: int) -> None:
        """Mark an externally assigned id as taken."""
        if used_id >= self._next:
            self._next = used_id + 1

    @property
    def last(self) -> int | None:
        """The most recently allocated id, or None before the first call."""
        return self._last

    def __repr__(self) -> str:
        return f"ObjectIdAllocator(last={self._last}, next={self._next})"
