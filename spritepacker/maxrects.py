from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .config import DEFAULT_MAX_HEIGHT, DEFAULT_MAX_WIDTH
from .errors import ConfigurationError, GeometryInvariantViolation
from .log import debug_log
from .rect import Rect
from .sprite import PackerResult, SpriteAnchor, SpriteData, bounding_dimensions


@dataclass(frozen=True)
class MaxRectsOptions:
    preferred_width: int = DEFAULT_MAX_WIDTH
    preferred_height: int = DEFAULT_MAX_HEIGHT

    def __post_init__(self):
        if self.preferred_width <= 0 or self.preferred_height <= 0:
            raise ConfigurationError(
                f"Preferred sheet size must be positive, got {self.preferred_width}×{self.preferred_height}"
            )


class RectScore(NamedTuple):
    """Leftover space of a candidate placement, lower is better on both scores."""
    placement: Rect
    primary: int
    secondary: int


def remove_redundant_rects(rects: List[Rect]) -> None:
    """
    Remove free rectangles that are completely contained within another one, in place.

    Removal swaps the last rectangle into the freed slot, so the current index
    is checked again before moving on.
    """
    i = 0
    while i < len(rects):
        current = rects[i]
        if any(other.contains(current) for other in rects[i + 1:]):
            rects[i] = rects[-1]
            rects.pop()
            continue

        for j in range(len(rects) - 1, i, -1):
            if current.contains(rects[j]):
                rects[j] = rects[-1]
                rects.pop()

        i += 1


class MaxRectsBin:
    """Implementation of the Maximal Rectangles algorithm for a single sheet."""

    def __init__(self, width: int, height: int):
        self.bin_width = width
        self.bin_height = height
        self.used: List[Tuple[Rect, int]] = []
        # Start with the entire sheet as a free rectangle.
        # Free rectangles may overlap each other, but never a used one.
        self.free: List[Rect] = [Rect.xywh(0, 0, width, height)]
        self.oversized = False

    @classmethod
    def for_oversized(cls, sprite: SpriteData) -> 'MaxRectsBin':
        """A bin holding just one sprite that is larger than the preferred sheet."""
        width, height = sprite.dimensions
        bin_ = cls(width, height)
        bin_.used.append((Rect.xywh(0, 0, width, height), sprite.id))
        bin_.free = []
        bin_.oversized = True
        return bin_

    def to_result(self) -> PackerResult:
        anchors = [
            SpriteAnchor(sprite_id, (rect.min_x, rect.min_y), (rect.width, rect.height))
            for rect, sprite_id in self.used
        ]
        return PackerResult(bounding_dimensions(anchors), anchors)

    def score_rect(self, width: int, height: int) -> Optional[RectScore]:
        """Best short side fit over all free rectangles, or None if nothing fits."""
        best: Optional[RectScore] = None

        for rect in self.free:
            if rect.width < width or rect.height < height:
                continue

            leftover_horizontal = abs(rect.width - width)
            leftover_vertical = abs(rect.height - height)
            short_side = min(leftover_horizontal, leftover_vertical)
            long_side = max(leftover_horizontal, leftover_vertical)

            if (best is None or short_side < best.primary or
                    (short_side == best.primary and long_side < best.secondary)):
                best = RectScore(Rect.xywh(rect.min_x, rect.min_y, width, height), short_side, long_side)

        return best

    def insert_sprites(self, sprites: Sequence[SpriteData]) -> List[SpriteData]:
        """
        Place as many sprites as will fit, one per round, and return the rest.

        Each round scores every remaining sprite against the current free
        rectangles and places only the best one, since a placement changes the
        free rectangles all other scores were computed against.
        """
        remaining = list(sprites)

        while remaining:
            best: Optional[Tuple[RectScore, int]] = None
            for index, sprite in enumerate(remaining):
                score = self.score_rect(*sprite.dimensions)
                if score is None:
                    continue
                if (best is None or score.primary < best[0].primary or
                        (score.primary == best[0].primary and score.secondary < best[0].secondary)):
                    best = (score, index)

            if best is None:
                break

            score, index = best
            sprite = remaining.pop(index)
            self.place_rect(score.placement, sprite.id)

        return remaining

    def place_rect(self, rect: Rect, sprite_id: int) -> None:
        self._split_free_rectangles(rect)
        remove_redundant_rects(self.free)
        self.used.append((rect, sprite_id))

    def _split_free_rectangles(self, placed: Rect) -> None:
        """Replace every free rectangle overlapping the placement with the parts around it."""
        kept = []
        split = []

        for free_rect in self.free:
            if free_rect.no_intersection(placed):
                kept.append(free_rect)
            else:
                split.extend(self._split_rect(free_rect, placed))

        self.free = kept + split

    @staticmethod
    def _split_rect(free_rect: Rect, placed: Rect) -> List[Rect]:
        parts = []

        if placed.min_x < free_rect.max_x and placed.max_x > free_rect.min_x:
            # Above the placed rect
            if free_rect.min_y < placed.min_y < free_rect.max_y:
                parts.append(free_rect._replace(max_y=placed.min_y))
            # Below the placed rect
            if placed.max_y < free_rect.max_y:
                parts.append(free_rect._replace(min_y=placed.max_y))

        if placed.min_y < free_rect.max_y and placed.max_y > free_rect.min_y:
            # Left of the placed rect
            if free_rect.min_x < placed.min_x < free_rect.max_x:
                parts.append(free_rect._replace(max_x=placed.min_x))
            # Right of the placed rect
            if placed.max_x < free_rect.max_x:
                parts.append(free_rect._replace(min_x=placed.max_x))

        return parts


class MaxRectsPacker:
    """
    Multi-sheet maximal rectangles packer.

    Sprites larger than the preferred sheet on either axis each get a sheet of
    their own, appended after the regular sheets. Everything else is packed
    into as many preferred-size bins as needed. Every sheet is reported at the
    tight bounding box of its placements.
    """

    name = "maxrects"

    @staticmethod
    def default_options() -> MaxRectsOptions:
        return MaxRectsOptions()

    @classmethod
    def pack(cls, sprites: Sequence[SpriteData],
             options: Optional[MaxRectsOptions] = None) -> List[PackerResult]:
        options = options or cls.default_options()
        bins: List[MaxRectsBin] = []
        oversized: List[MaxRectsBin] = []
        packable: List[SpriteData] = []

        for sprite in sprites:
            width, height = sprite.dimensions
            if width > options.preferred_width or height > options.preferred_height:
                debug_log(f"Sprite {sprite.id} ({width}×{height}) exceeds the preferred sheet size, "
                          f"packing it alone")
                oversized.append(MaxRectsBin.for_oversized(sprite))
            else:
                packable.append(sprite)

        # Every packable sprite fits an empty bin, so each pass places at least one
        while packable:
            bin_ = MaxRectsBin(options.preferred_width, options.preferred_height)
            remaining = bin_.insert_sprites(packable)
            if len(remaining) == len(packable):
                raise GeometryInvariantViolation(
                    f"An empty {options.preferred_width}×{options.preferred_height} bin "
                    f"rejected all {len(packable)} remaining sprites"
                )
            debug_log(f"Sheet {len(bins)}: placed {len(bin_.used)} sprites, "
                      f"{len(remaining)} remaining")
            bins.append(bin_)
            packable = remaining

        return [bin_.to_result() for bin_ in bins + oversized]
