"""
Value types shared by every stage of the packing pipeline.

Sprites are addressed by a dense zero-based id equal to their position in the
caller's input list. The id is the join key between the packer's placements,
the pixel data used by the compositor and the alias table built during
deduplication.
"""

from dataclasses import dataclass, field, replace
from typing import List, Tuple

Dimensions = Tuple[int, int]
Position = Tuple[int, int]


@dataclass(frozen=True)
class InputSprite:
    """Raw decoded pixels of one sprite. The stride is supplied by the caller."""
    bytes: bytes
    dimensions: Dimensions

    @property
    def width(self) -> int:
        return self.dimensions[0]

    @property
    def height(self) -> int:
        return self.dimensions[1]

    def expected_length(self, stride: int) -> int:
        """Number of bytes a tightly packed buffer of this size holds."""
        return self.dimensions[0] * self.dimensions[1] * stride


@dataclass(frozen=True)
class SpriteData:
    """Lightweight handle handed to the packers: just an id and a size."""
    id: int
    dimensions: Dimensions


@dataclass(frozen=True)
class Sprite:
    bytes: bytes
    data: SpriteData

    @classmethod
    def from_input(cls, index: int, sprite: InputSprite) -> 'Sprite':
        return cls(bytes(sprite.bytes), SpriteData(index, sprite.dimensions))

    @property
    def id(self) -> int:
        return self.data.id

    @property
    def dimensions(self) -> Dimensions:
        return self.data.dimensions


@dataclass(frozen=True)
class SpriteAnchor:
    """Placement of one sprite: top-left corner and size within its sheet."""
    id: int
    position: Position
    dimensions: Dimensions

    def aliased(self, sprite_id: int) -> 'SpriteAnchor':
        """Same placement, recorded for another sprite id."""
        return replace(self, id=sprite_id)

    @property
    def max_x(self) -> int:
        return self.position[0] + self.dimensions[0]

    @property
    def max_y(self) -> int:
        return self.position[1] + self.dimensions[1]


def bounding_dimensions(anchors: List[SpriteAnchor]) -> Dimensions:
    """Tight bounding box over the far corners of all anchors; (0, 0) when empty."""
    width = max((anchor.max_x for anchor in anchors), default=0)
    height = max((anchor.max_y for anchor in anchors), default=0)
    return width, height


@dataclass
class PackerResult:
    """One packed sheet as decided by a packer, before any pixels exist."""
    dimensions: Dimensions
    anchors: List[SpriteAnchor] = field(default_factory=list)


@dataclass
class SpriteSheet:
    bytes: bytearray
    stride: int
    dimensions: Dimensions
    anchors: List[SpriteAnchor] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.dimensions[0]

    @property
    def height(self) -> int:
        return self.dimensions[1]

    def efficiency(self) -> float:
        """Fraction of the sheet area covered by distinct placements, in [0, 1]."""
        total = self.dimensions[0] * self.dimensions[1]
        if total == 0:
            return 0.0
        # aliases share a rectangle, count each rectangle once
        placed = {(a.position, a.dimensions) for a in self.anchors}
        used = sum(dims[0] * dims[1] for _, dims in placed)
        return used / total
