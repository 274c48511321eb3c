# hangar

The core of a small flight game engine: slot pools, a scene tree of objects and parts, and plane model lookup.

- `hangar.bitmask` has helpers for 64-bit occupancy words:
  - `claim_first_bit` claims the first free slot.
  - `change_bit` sets or clears a single slot.
  - `claim_bit_run` claims a run of adjacent slots, which may cross word boundaries.
  - `first_clear_bit` finds the lowest zero bit of a word.
  - `next_power_of_two` and `round_up` do size arithmetic.
  - `format_bits` renders a word as a string of 0s and 1s.
- `hangar.pools` has two pool classes. Both are backed by a `bytearray` and a list of occupancy words. Both can be resized by hand with `resize(grow)` and released with `clear()`. Invalid use raises `PoolError`.
  - `BitmaskPool` holds fixed-size frames. It doubles its storage when more than three quarters full.
  - `UniquePool` holds entries that may span several adjacent frames. It does not grow on its own.

  Allocation totals for all pools are kept in the shared `MemoryStats` instance `hangar.pools.MEMORY`.
- `hangar.hierarchy` has the scene tree. A `Workspace` owns a root node (`ws.root`), one `BitmaskPool` per shape kind, and a `UniquePool` for part records. It creates and destroys objects and parts. A part's shape is a cube, sphere, cylinder or mesh. Zero or NaN dimensions become 1.0, and zero cylinder slices become 1.
- `hangar.plane` has two things:
  - the `PlaneShape` record;
  - `make_plane_path(plane_type, root)`, which returns `root/include/models/<plane_type>.obj` if that file exists, and `None` otherwise.

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Usage

```python
from hangar.pools import BitmaskPool, UniquePool

pool = BitmaskPool(1024, 4)
slot = pool.add(b"\x01\x02\x03\x04")
assert pool.get(slot) == b"\x01\x02\x03\x04"
pool.remove(slot)

blocks = UniquePool(2048, 16)
index = blocks.add(b"x" * 40)          # spans three adjacent 16-byte frames
blocks.remove(index, 40)
```

`instance_part` does not register the part with its parent. Call `add_child` to do that:

```python
from hangar.hierarchy import ObjectType, PartSphere, Workspace, add_child

ws = Workspace()
group = ws.instance_object(ws.root)    # registered as a child of the root
ball = ws.instance_part(group, ObjectType.SPHERE, PartSphere(radius=2.5))
add_child(group, ball)
ws.destroy(group)                      # frees the object, its parts and their pool slots
```

```python
from hangar.plane import make_plane_path

path = make_plane_path("plane", ".")   # ./include/models/plane.obj, or None if missing
```

## What it does not do

There is no window, rendering, camera or game loop, and no command to start a game. Model files are only located, never loaded. `PlaneShape` is a plain record with no flight behaviour.

## Tests

```
pytest
```