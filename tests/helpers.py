import random

from spritepacker import InputSprite, SpriteData


def pixel(x, y, visible=True):
    """RGBA8 pixel whose colour encodes its coordinates."""
    return bytes((x % 256, y % 256, 7, 255)) if visible else bytes(4)


def make_sprite(width, height, visible=None):
    """RGBA8 sprite; all pixels visible unless a set of (x, y) is given."""
    data = bytearray()
    for y in range(height):
        for x in range(width):
            data += pixel(x, y, visible is None or (x, y) in visible)
    return InputSprite(bytes(data), (width, height))


def solid_sprite(width, height, value):
    return InputSprite(bytes((value, value, value, 255)) * (width * height), (width, height))


def random_sprite_data(count, max_size, seed):
    rng = random.Random(seed)
    return [SpriteData(i, (rng.randint(1, max_size), rng.randint(1, max_size))) for i in range(count)]


def assert_no_overlap(anchors):
    rects = sorted({(a.position, a.dimensions) for a in anchors})
    for i, ((ax, ay), (aw, ah)) in enumerate(rects):
        for (bx, by), (bw, bh) in rects[i + 1:]:
            if aw == 0 or ah == 0 or bw == 0 or bh == 0:
                continue
            overlap = ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah
            assert not overlap, f"{(ax, ay, aw, ah)} overlaps {(bx, by, bw, bh)}"


def assert_tight(dimensions, anchors):
    width = max((a.position[0] + a.dimensions[0] for a in anchors), default=0)
    height = max((a.position[1] + a.dimensions[1] for a in anchors), default=0)
    assert dimensions == (width, height)
