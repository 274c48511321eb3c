"""Scene hierarchy of objects and parts whose data lives in frame pools."""

from __future__ import annotations

import math
import struct
from dataclasses import astuple, dataclass, field
from enum import IntEnum, IntFlag

from hangar.pools import BitmaskPool, PoolError, UniquePool

FLAG_ANCHORED = 1 << 0
FLAG_CANCOLLIDE = 1 << 1

INIT_POOL_SIZE_CUBE = 1024
INIT_POOL_SIZE_SPHERE = 1024
INIT_POOL_SIZE_CYLINDER = 1024
INIT_POOL_SIZE_MESHPART = 1024
INIT_PART_STRUCT_POOL_SIZE = 2048

WORKSPACE_NAME = "workspace"


class ObjectType(IntEnum):
    """Shape kinds a part can take."""

    CUBE = 0
    SPHERE = 1
    CYLINDER = 2
    MESHPART = 3


class KindType(IntEnum):
    """What a hierarchy node is."""

    OBJECT = 0
    PART = 1
    NULL = 2


class MaterialType(IntEnum):
    """Surface material of a part."""

    PLASTIC = 0
    BRICK = 1


class CollisionGroup(IntFlag):
    """Collision groups a part can belong to."""

    ONE = 1 << 0
    TWO = 1 << 1
    THREE = 1 << 2
    FOUR = 1 << 3
    FIVE = 1 << 4
    SIX = 1 << 5
    SEVEN = 1 << 6
    EIGHT = 1 << 7
    NINE = 1 << 8
    TEN = 1 << 9
    ELEVEN = 1 << 10
    TWELVE = 1 << 11


@dataclass(eq=False)
class BaseNode:
    """A node in the hierarchy: name, parent, children and scratch variables."""

    kind: KindType = KindType.NULL
    name: str = ""
    parent: BaseNode | None = None
    children: list[BaseNode] = field(default_factory=list)
    variables: bytearray = field(default_factory=lambda: bytearray(8))


@dataclass
class PartCube:
    """Cube shape data."""

    live: int = 0


@dataclass
class PartSphere:
    """Sphere shape data."""

    radius: float = 0.0


@dataclass
class PartCylinder:
    """Cylinder shape data."""

    radius_top: float = 0.0
    radius_bottom: float = 0.0
    height: float = 0.0
    slices: int = 0


@dataclass
class PartMesh:
    """Mesh shape data: handles of the mesh, its texture and its path."""

    mesh: int = 0
    texture: int = 0
    mesh_path: int = 0


@dataclass(eq=False)
class PartStruct(BaseNode):
    """A part: common appearance and physics settings plus one shape."""

    kind: KindType = KindType.PART
    transparency: int = 255
    flags: int = 0
    pool_index: int | None = None
    shape_pool_index: int | None = None
    shape: PartCube | PartSphere | PartCylinder | PartMesh | None = None
    part_type: ObjectType | None = None
    brick_color: tuple[int, int, int, int] = (127, 127, 127, 255)
    material: MaterialType = MaterialType.PLASTIC
    collision_group: CollisionGroup = CollisionGroup.ONE
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    orientation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    size: tuple[float, float, float] = (2.0, 2.0, 2.0)


@dataclass(eq=False)
class ObjectSpace(BaseNode):
    """A grouping node that holds other objects and parts."""

    kind: KindType = KindType.OBJECT
    part_data: object = None


_SHAPE_FORMATS = {
    ObjectType.CUBE: struct.Struct("<b"),
    ObjectType.SPHERE: struct.Struct("<f"),
    ObjectType.CYLINDER: struct.Struct("<fffB3x"),
    ObjectType.MESHPART: struct.Struct("<HHH"),
}

_RECORD = struct.Struct("<BBBBH4B9f")


def _pack_record(part: PartStruct) -> bytes:
    return _RECORD.pack(
        part.transparency,
        part.flags,
        int(part.part_type) if part.part_type is not None else 0,
        int(part.material),
        int(part.collision_group),
        *part.brick_color,
        *part.position,
        *part.orientation,
        *part.size,
    )


def _or_one(value: float) -> float:
    return 1.0 if value == 0.0 or math.isnan(value) else value


def is_workspace(node: BaseNode | None) -> bool:
    """True when ``node`` is a workspace root."""
    return node is not None and node.name == WORKSPACE_NAME


def kind_of(node: BaseNode | None) -> KindType:
    """The node's kind, or ``KindType.NULL`` for no node."""
    return KindType.NULL if node is None else node.kind


def add_child(parent: BaseNode | None, child: BaseNode | None) -> None:
    """Append ``child`` to ``parent``'s children; missing nodes are ignored."""
    if parent is None or child is None:
        return
    parent.children.append(child)


def _detach(node: BaseNode) -> None:
    parent = node.parent
    if parent is not None and node in parent.children:
        parent.children.remove(node)


def _clear_node(node: BaseNode) -> None:
    node.variables = bytearray()


class Workspace:
    """Root of the hierarchy, owning the pools that hold part data."""

    def __init__(self) -> None:
        self._shape_pools = {
            ObjectType.CUBE: BitmaskPool(
                INIT_POOL_SIZE_CUBE, _SHAPE_FORMATS[ObjectType.CUBE].size
            ),
            ObjectType.SPHERE: BitmaskPool(
                INIT_POOL_SIZE_SPHERE, _SHAPE_FORMATS[ObjectType.SPHERE].size
            ),
            ObjectType.CYLINDER: BitmaskPool(
                INIT_POOL_SIZE_CYLINDER, _SHAPE_FORMATS[ObjectType.CYLINDER].size
            ),
            ObjectType.MESHPART: BitmaskPool(
                INIT_POOL_SIZE_MESHPART, _SHAPE_FORMATS[ObjectType.MESHPART].size
            ),
        }
        self.part_pool = UniquePool(INIT_PART_STRUCT_POOL_SIZE, _RECORD.size)
        self.root = ObjectSpace(name=WORKSPACE_NAME)

    def pool_for(self, kind: ObjectType) -> BitmaskPool | None:
        """The pool holding shapes of ``kind``, or None for an unknown kind."""
        try:
            return self._shape_pools.get(ObjectType(kind))
        except ValueError:
            return None

    def instance_object(self, parent: BaseNode | None) -> ObjectSpace:
        """Create an object under ``parent`` and register it as a child."""
        if parent is None:
            raise ValueError("an object needs a parent")
        obj = ObjectSpace(parent=parent)
        add_child(parent, obj)
        return obj

    def remove_object(self, obj: ObjectSpace | None) -> None:
        """Remove ``obj`` and everything beneath it."""
        if obj is None:
            return
        self._remove_children(obj)
        _clear_node(obj)
        _detach(obj)

    def _build_shape(self, kind: ObjectType, params):
        if kind is ObjectType.CUBE:
            return PartCube()
        if kind is ObjectType.SPHERE:
            source = params if params is not None else PartSphere()
            return PartSphere(_or_one(source.radius))
        if kind is ObjectType.CYLINDER:
            source = params if params is not None else PartCylinder()
            return PartCylinder(
                _or_one(source.radius_top),
                _or_one(source.radius_bottom),
                _or_one(source.height),
                source.slices if source.slices > 0 else 1,
            )
        source = params if params is not None else PartMesh()
        return PartMesh(source.mesh, source.texture)

    def instance_part(self, parent: BaseNode | None, kind: ObjectType, params=None) -> PartStruct:
        """Create a part of shape ``kind``; ``params`` supplies the shape settings.

        Zero or NaN dimensions become 1.0 and zero slices become 1. A missing
        parent means the workspace root. The part is not added to the parent's
        children; use ``add_child`` for that.
        """
        kind = ObjectType(kind)
        owner = parent if parent is not None else self.root
        part = PartStruct(parent=owner, part_type=kind)
        part.pool_index = self.part_pool.add(_pack_record(part))
        shape = self._build_shape(kind, params)
        try:
            part.shape_pool_index = self._shape_pools[kind].add(
                _SHAPE_FORMATS[kind].pack(*astuple(shape))
            )
        except PoolError:
            self.remove_part(part)
            raise
        part.shape = shape
        return part

    def remove_part(self, part: PartStruct | None) -> None:
        """Release the part's pool slots and remove everything beneath it."""
        if part is None:
            return
        pool = self.pool_for(part.part_type) if part.part_type is not None else None
        if pool is not None and part.shape is not None:
            pool.remove(part.shape_pool_index)
            part.shape = None
            part.shape_pool_index = None
        self._remove_children(part)
        _clear_node(part)
        if part.pool_index is not None:
            self.part_pool.remove(part.pool_index, _RECORD.size)
            part.pool_index = None
        _detach(part)

    def destroy(self, node: BaseNode | None) -> None:
        """Remove ``node`` according to its kind; other nodes are left alone."""
        if node is None:
            return
        if node.kind is KindType.OBJECT:
            self.remove_object(node)
        elif node.kind is KindType.PART:
            self.remove_part(node)

    def _remove_children(self, node: BaseNode) -> None:
        for child in list(node.children):
            if child is not None:
                self.destroy(child)
        node.children.clear()