"""
ResourcePool: reuse expensive render resources by approximate size.

Resources (matplotlib artists, meshes, ...) are created by a factory taking
a size. Released resources go on a free list keyed by the quantized size
bucket, and a later acquire() of a similar size reuses one instead of
building a new object. Ownership is tracked per handle (an index into the
pool), never by flags on the resource itself.
"""

from __future__ import annotations
import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourcePool(Generic[T]):
    """
    Free-list pool keyed by size bucket.

    Two sizes share a bucket when round(size / bucket_size) matches.
    """

    def __init__(self, factory: Callable[[float], T], bucket_size: float = 0.1):
        if bucket_size <= 0:
            msg = f"bucket_size must be positive, got {bucket_size}"
            raise ValueError(msg)
        self.factory = factory
        self.bucket_size = bucket_size
        self._items: list[T] = []
        self._sizes: list[float] = []
        self._owned: list[bool] = []
        self._free: dict[int, list[int]] = {}
        self.created = 0
        self.reused = 0

    def bucket(self, size: float) -> int:
        """Quantized bucket for a size."""
        return int(round(size / self.bucket_size))

    def acquire(self, size: float) -> int:
        """
        Take a resource of roughly the given size.

        Returns:
            Handle for get() and release()
        """
        free = self._free.get(self.bucket(size))
        if free:
            handle = free.pop()
            self._owned[handle] = True
            self.reused += 1
            return handle

        self._items.append(self.factory(size))
        self._sizes.append(size)
        self._owned.append(True)
        self.created += 1
        logger.debug("Pool created resource #%d (size=%.3f)", len(self._items) - 1, size)
        return len(self._items) - 1

    def get(self, handle: int) -> T:
        """Resource behind an owned handle."""
        self._check_owned(handle)
        return self._items[handle]

    def release(self, handle: int) -> None:
        """Return a resource to the free list."""
        self._check_owned(handle)
        self._owned[handle] = False
        self._free.setdefault(self.bucket(self._sizes[handle]), []).append(handle)

    def is_owned(self, handle: int) -> bool:
        return 0 <= handle < len(self._owned) and self._owned[handle]

    def free_items(self) -> list[T]:
        """Resources currently on the free lists."""
        return [self._items[h] for h in range(len(self._items)) if not self._owned[h]]

    @property
    def owned(self) -> int:
        """Number of handles currently in use."""
        return sum(self._owned)

    @property
    def free_count(self) -> int:
        return len(self._items) - self.owned

    def __len__(self) -> int:
        return len(self._items)

    def _check_owned(self, handle: int) -> None:
        if not self.is_owned(handle):
            msg = f"Handle {handle} is not owned by this pool"
            raise ValueError(msg)
