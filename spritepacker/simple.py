from typing import List, Sequence, Tuple

from .rect import Rect
from .sprite import PackerResult, SpriteAnchor, SpriteData, bounding_dimensions

Point = Tuple[int, int]


def _area(sprite: SpriteData) -> int:
    return sprite.dimensions[0] * sprite.dimensions[1]


def _corner_distance(point: Point) -> int:
    # Strongly favours anchors close to the origin on both axes
    return point[0] ** 4 + point[1] ** 4


class SimplePacker:
    """
    Greedy corner packer: one sheet, no size limit.

    Sprites go largest first onto a list of free anchor points. Each placement
    consumes one anchor and offers two new ones, to the right of and below the
    sprite. The anchor list is kept sorted so the corner nearest the origin is
    always tried first.
    """

    name = "simple"

    @staticmethod
    def default_options() -> None:
        return None

    @classmethod
    def pack(cls, sprites: Sequence[SpriteData], options: None = None) -> List[PackerResult]:
        ordered = sorted(sprites, key=_area, reverse=True)
        free: List[Point] = [(0, 0)]
        placed: List[Rect] = []
        anchors: List[SpriteAnchor] = []

        for sprite in ordered:
            width, height = sprite.dimensions
            x, y = cls._take_anchor(free, placed, width, height)
            placed.append(Rect.xywh(x, y, width, height))
            anchors.append(SpriteAnchor(sprite.id, (x, y), (width, height)))

            free = cls._add_anchors(free, (x, y), (x + width, y), (x, y + height))

        anchors.sort(key=lambda anchor: anchor.id)
        return [PackerResult(bounding_dimensions(anchors), anchors)]

    @staticmethod
    def _take_anchor(free: List[Point], placed: List[Rect], width: int, height: int) -> Point:
        """Pop the first free anchor where the sprite does not cover an earlier placement."""
        for index, (x, y) in enumerate(free):
            candidate = Rect.xywh(x, y, width, height)
            if all(candidate.no_intersection(rect) for rect in placed):
                del free[index]
                return x, y

        # Nothing to the right of the current extent is ever occupied
        return max((rect.max_x for rect in placed), default=0), 0

    @staticmethod
    def _add_anchors(free: List[Point], origin: Point, right: Point, bottom: Point) -> List[Point]:
        """
        Merge the two anchors offered by a placement into the free list.

        An existing anchor whose x lies within the placed sprite's columns is
        absorbed by the right anchor, which takes the smaller y of the two.
        Otherwise an anchor whose y lies within the sprite's rows is absorbed by
        the bottom anchor, which takes the smaller x.
        """
        right_x, right_y = right
        bottom_x, bottom_y = bottom
        kept: List[Point] = []

        for x, y in free:
            if origin[0] <= x <= right_x:
                right_y = min(right_y, y)
            elif origin[1] <= y <= bottom_y:
                bottom_x = min(bottom_x, x)
            else:
                kept.append((x, y))

        for point in ((right_x, right_y), (bottom_x, bottom_y)):
            if point not in kept:
                kept.append(point)

        kept.sort(key=_corner_distance)
        return kept

