from typing import Iterable, Sequence, Tuple

from .sprite import Dimensions, PackerResult, Sprite, SpriteAnchor, SpriteSheet


def create_pixel_buffer(dimensions: Dimensions, stride: int) -> bytearray:
    """Zero-filled (fully transparent for RGBA8) buffer for a sheet."""
    return bytearray(dimensions[0] * dimensions[1] * stride)


def write_sprite(buffer: bytearray, sheet_dimensions: Dimensions, stride: int,
                 sprite: Sprite, anchor: SpriteAnchor) -> None:
    """
    Copy a sprite's pixels row by row into the sheet buffer at its anchor.

    The anchor must lie within the sheet; packers guarantee this and it is not
    checked here.
    """
    sheet_width = sheet_dimensions[0]
    x, y = anchor.position
    width, height = sprite.dimensions
    row_length = width * stride

    for row in range(height):
        src = row * row_length
        dst = ((y + row) * sheet_width + x) * stride
        buffer[dst:dst + row_length] = sprite.bytes[src:src + row_length]


def composite_pairs(dimensions: Dimensions, stride: int,
                    pairs: Iterable[Tuple[Sprite, SpriteAnchor]]) -> bytearray:
    """Buffer for a sheet of the given size with each (sprite, anchor) pair drawn in."""
    buffer = create_pixel_buffer(dimensions, stride)
    for sprite, anchor in pairs:
        write_sprite(buffer, dimensions, stride, sprite, anchor)
    return buffer


def composite(result: PackerResult, sprites: Sequence[Sprite], stride: int) -> SpriteSheet:
    """Materialize one packed sheet. sprites is indexed by sprite id."""
    pairs = ((sprites[anchor.id], anchor) for anchor in result.anchors)
    buffer = composite_pairs(result.dimensions, stride, pairs)
    return SpriteSheet(buffer, stride, result.dimensions, list(result.anchors))
