from typing import NamedTuple


class Rect(NamedTuple):
    """Axis-aligned integer rectangle stored by its corners (max edges exclusive)."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def xywh(cls, x: int, y: int, width: int, height: int) -> 'Rect':
        """Build a rectangle from its top-left corner and size."""
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    def area(self) -> int:
        """Get the area of the rectangle."""
        return self.width * self.height

    def contains(self, other: 'Rect') -> bool:
        """Check if other lies completely inside this rectangle (shared edges allowed)."""
        return (
            self.min_x <= other.min_x and
            self.min_y <= other.min_y and
            self.max_x >= other.max_x and
            self.max_y >= other.max_y
        )

    def no_intersection(self, other: 'Rect') -> bool:
        """Check if the two rectangles share no interior area. Touching edges do not count."""
        return (
            self.min_x >= other.max_x or
            self.max_x <= other.min_x or
            self.min_y >= other.max_y or
            self.max_y <= other.min_y
        )

    def intersects(self, other: 'Rect') -> bool:
        """Check if this rectangle intersects with another."""
        return not self.no_intersection(other)

    def __repr__(self):
        return f"Rect({self.width}×{self.height} at ({self.min_x},{self.min_y}))"
