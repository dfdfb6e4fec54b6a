"""
Alpha border trimming.

The crop box is found in three steps instead of scanning all four edges in
full. The first visible row from the top and from the bottom give the vertical
bounds and a first guess of the horizontal ones. The rows in between then only
need to look at the columns outside the current guess, since the left bound can
only move left and the right bound only move right.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .sprite import Dimensions, InputSprite

EMPTY = b"\x00"


@dataclass(frozen=True)
class TrimInfo:
    """Where a trimmed sprite sat inside its untrimmed source."""
    offset_x: int
    offset_y: int
    source_dimensions: Dimensions

    @property
    def offsets(self) -> Tuple[int, int]:
        return self.offset_x, self.offset_y


def _alpha_row(data: bytes, row: int, width: int, stride: int, alpha_index: int) -> bytes:
    start = row * width * stride
    return data[start + alpha_index:start + width * stride:stride]


def _visible_span(alphas: bytes) -> Optional[Tuple[int, int]]:
    """First and last index of a non-zero byte, or None if all are zero."""
    head = alphas.lstrip(EMPTY)
    if not head:
        return None
    first = len(alphas) - len(head)
    last = len(alphas.rstrip(EMPTY)) - 1
    return first, last


def find_trim_bounds(data: bytes, dimensions: Dimensions, stride: int,
                     alpha_index: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Inclusive (left, top, right, bottom) of all pixels with a non-zero alpha byte.
    Returns None if every pixel is fully transparent.
    """
    width, height = dimensions
    if width == 0 or height == 0:
        return None

    top = None
    left = right = 0
    for y in range(height):
        span = _visible_span(_alpha_row(data, y, width, stride, alpha_index))
        if span is not None:
            top = y
            left, right = span
            break
    if top is None:
        return None

    bottom = top
    for y in range(height - 1, top, -1):
        span = _visible_span(_alpha_row(data, y, width, stride, alpha_index))
        if span is not None:
            bottom = y
            left = min(left, span[0])
            right = max(right, span[1])
            break

    for y in range(top + 1, bottom):
        if left == 0 and right == width - 1:
            break
        alphas = _alpha_row(data, y, width, stride, alpha_index)
        if left > 0:
            head = alphas[:left].lstrip(EMPTY)
            if head:
                left -= len(head)
        if right < width - 1:
            tail = alphas[right + 1:].rstrip(EMPTY)
            if tail:
                right += len(tail)

    return left, top, right, bottom


def trim_sprite(sprite: InputSprite, stride: int, alpha_index: int) -> Tuple[InputSprite, TrimInfo]:
    """Crop a sprite to its visible pixels. A fully transparent sprite becomes 0×0 and empty."""
    bounds = find_trim_bounds(sprite.bytes, sprite.dimensions, stride, alpha_index)
    if bounds is None:
        return InputSprite(b"", (0, 0)), TrimInfo(0, 0, sprite.dimensions)

    left, top, right, bottom = bounds
    width = sprite.dimensions[0]
    new_width = right - left + 1
    new_height = bottom - top + 1
    if (new_width, new_height) == sprite.dimensions:
        return InputSprite(bytes(sprite.bytes), sprite.dimensions), TrimInfo(0, 0, sprite.dimensions)

    out = bytearray(new_width * new_height * stride)
    row_length = new_width * stride
    for row in range(new_height):
        src = ((top + row) * width + left) * stride
        dst = row * row_length
        out[dst:dst + row_length] = sprite.bytes[src:src + row_length]

    return InputSprite(bytes(out), (new_width, new_height)), TrimInfo(left, top, sprite.dimensions)
