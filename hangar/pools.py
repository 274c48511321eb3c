"""Fixed-frame memory pools whose slots are tracked by 64-bit occupancy words."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hangar.bitmask import (
    BITMASK_SIZE,
    change_bit,
    claim_bit_run,
    claim_first_bit,
    next_power_of_two,
    round_up,
)

logger = logging.getLogger(__name__)

WORD_BYTES = BITMASK_SIZE // 8
GROW_THRESHOLD = 0.75


class PoolError(Exception):
    """Raised when a pool is misused or cannot satisfy a request."""


@dataclass
class MemoryStats:
    """Running totals of bytes held by pools and of allocation events."""

    busy: int = 0
    busy_times: int = 0
    clear_times: int = 0

    def allocate(self, size: int) -> None:
        """Record an allocation of ``size`` bytes; zero-sized requests are ignored."""
        if size <= 0:
            return
        self.busy += size
        self.busy_times += 1
        logger.debug("allocated %d bytes, total %d", size, self.busy)

    def reallocate(self, old_size: int, new_size: int) -> None:
        """Record a block changing from ``old_size`` to ``new_size`` bytes."""
        if new_size <= 0:
            return
        self.busy = max(0, self.busy - old_size + new_size)
        self.busy_times += 1

    def release(self, size: int) -> None:
        """Record freeing ``size`` bytes; the total never drops below zero."""
        self.busy = 0 if self.busy < size else self.busy - size
        self.clear_times += 1
        logger.debug("freed %d bytes, total %d", size, self.busy)


MEMORY = MemoryStats()


class _FramePool:
    """Storage and occupancy words shared by both pool kinds."""

    def __init__(self, size: int, frame: int) -> None:
        if size <= 0 or frame <= 0 or size < frame:
            raise PoolError(f"invalid pool parameters: size={size}, frame={frame}")
        size = max(size, frame * BITMASK_SIZE)
        self.stats = MEMORY
        self._frame = frame
        self.size = next_power_of_two(size - 1, 2)
        self.capacity = round_up(self.size // frame, BITMASK_SIZE)
        self.cell_count = 0
        self.memory = bytearray(self.size)
        self.words = [0] * self.capacity
        self.stats.allocate(self.size)
        self.stats.allocate(WORD_BYTES * self.capacity)
        self.is_active = True

    def _check_active(self) -> None:
        if not self.is_active:
            raise PoolError("pool has been cleared")

    def _is_used(self, index: int) -> bool:
        word_index, bit = divmod(index, BITMASK_SIZE)
        return word_index < len(self.words) and bool((self.words[word_index] >> bit) & 1)

    def _check_index(self, index: int) -> None:
        if index < 0 or index * self._frame >= self.size:
            raise PoolError(f"slot {index} is out of range")

    def _resize(self, grow: bool) -> None:
        self._check_active()
        new_size = self.size * 2 if grow else self.size // 2
        if new_size < self._frame:
            raise PoolError("pool cannot shrink below one frame")
        old_size, old_capacity = self.size, self.capacity
        self.size = new_size
        self.capacity = round_up(new_size // self._frame, BITMASK_SIZE)
        if new_size > old_size:
            self.memory.extend(bytes(new_size - old_size))
        else:
            del self.memory[new_size:]
        if self.capacity > old_capacity:
            self.words.extend([0] * (self.capacity - old_capacity))
        else:
            del self.words[self.capacity:]
        self.stats.reallocate(old_size, self.size)
        self.stats.reallocate(WORD_BYTES * old_capacity, WORD_BYTES * self.capacity)
        logger.debug(
            "pool resized: size %d -> %d, capacity %d -> %d",
            old_size, self.size, old_capacity, self.capacity,
        )

    def _clear(self) -> None:
        if not self.is_active:
            return
        self.stats.release(self.size)
        self.stats.release(WORD_BYTES * self.capacity)
        self.memory = bytearray()
        self.words = []
        self.cell_count = 0
        self.is_active = False


class BitmaskPool(_FramePool):
    """Pool of equally sized frames, one bit per frame, growing when 3/4 full."""

    def __init__(self, size: int, size_per_frame: int) -> None:
        super().__init__(size, size_per_frame)
        self.size_per_frame = size_per_frame

    def resize(self, grow: bool) -> "BitmaskPool":
        """Double (``grow``) or halve the pool's storage; returns the pool."""
        self._resize(grow)
        return self

    def clear(self) -> None:
        """Release the pool's storage; the pool cannot be used afterwards."""
        self._clear()

    def add(self, data: bytes) -> int:
        """Store ``data`` in the first free frame and return that frame's index."""
        self._check_active()
        data = bytes(data)
        if not data:
            raise PoolError("cannot add empty data")
        if len(data) > self.size_per_frame:
            raise PoolError("data does not fit in one frame")
        if self.cell_count * self.size_per_frame > self.size * GROW_THRESHOLD:
            self.resize(True)
        index = claim_first_bit(self.words, self.capacity, True)
        if index is None:
            raise PoolError("no free frames available")
        offset = index * self.size_per_frame
        if offset + self.size_per_frame > self.size:
            change_bit(self.words, index, False)
            raise PoolError("no free frames available")
        self.memory[offset:offset + self.size_per_frame] = data.ljust(
            self.size_per_frame, b"\0"
        )
        self.cell_count += 1
        return index

    def remove(self, index: int) -> None:
        """Free the frame at ``index`` and zero its contents."""
        self._check_active()
        self._check_index(index)
        change_bit(self.words, index, False)
        self.cell_count = max(0, self.cell_count - 1)
        offset = index * self.size_per_frame
        self.memory[offset:offset + self.size_per_frame] = bytes(self.size_per_frame)

    def get(self, index: int) -> bytes:
        """Return the contents of the occupied frame at ``index``."""
        self._check_active()
        self._check_index(index)
        if not self._is_used(index):
            raise PoolError(f"slot {index} is free")
        offset = index * self.size_per_frame
        return bytes(self.memory[offset:offset + self.size_per_frame])


class UniquePool(_FramePool):
    """Pool whose entries may span several consecutive frames."""

    def __init__(self, size: int, size_per_free_frame: int) -> None:
        super().__init__(size, size_per_free_frame)
        self.size_per_free_frame = size_per_free_frame

    def resize(self, grow: bool) -> "UniquePool":
        """Double (``grow``) or halve the pool's storage; returns the pool."""
        self._resize(grow)
        return self

    def clear(self) -> None:
        """Release the pool's storage; the pool cannot be used afterwards."""
        self._clear()

    def _blocks(self, size: int) -> int:
        return round_up(size, self.size_per_free_frame)

    def add(self, data: bytes) -> int:
        """Store ``data`` across as many frames as needed; return the first index."""
        self._check_active()
        data = bytes(data)
        size = len(data)
        if size == 0:
            raise PoolError("cannot add empty data")
        blocks = self._blocks(size)
        if size > self.size_per_free_frame:
            index = claim_bit_run(self.words, self.capacity, True, blocks)
        else:
            index = claim_first_bit(self.words, self.capacity, True)
        if index is None:
            raise PoolError("no free slots available")
        offset = index * self.size_per_free_frame
        if offset + size > self.size:
            for block in range(blocks):
                change_bit(self.words, index + block, False)
            raise PoolError("entry would run past the end of the pool")
        self.memory[offset:offset + size] = data
        self.cell_count += blocks
        return index

    def remove(self, index: int, size: int) -> int:
        """Free the ``size`` bytes stored at ``index`` and return the index."""
        self._check_active()
        if size <= 0:
            raise PoolError("size must be positive")
        if index < 0:
            raise PoolError(f"slot {index} is out of range")
        offset = index * self.size_per_free_frame
        if offset + size > self.size:
            raise PoolError("entry runs past the end of the pool")
        blocks = self._blocks(size)
        for block in range(blocks):
            change_bit(self.words, index + block, False)
        self.memory[offset:offset + size] = bytes(size)
        self.cell_count = max(0, self.cell_count - blocks)
        return index

    def get(self, index: int, size: int) -> bytes:
        """Return ``size`` bytes of the entry stored at ``index``."""
        self._check_active()
        if size <= 0:
            raise PoolError("size must be positive")
        self._check_index(index)
        offset = index * self.size_per_free_frame
        if offset + size > self.size:
            raise PoolError("entry runs past the end of the pool")
        if not self._is_used(index):
            raise PoolError(f"slot {index} is free")
        return bytes(self.memory[offset:offset + size])