import pytest

from spritepacker import ConfigurationError, MaxRectsOptions, MaxRectsPacker, SpriteData
from spritepacker.maxrects import MaxRectsBin, remove_redundant_rects
from spritepacker.rect import Rect

from helpers import assert_no_overlap, assert_tight, random_sprite_data


def squares(count, size):
    return [SpriteData(i, (size, size)) for i in range(count)]


def test_remove_redundant():
    rects = []
    for i in range(10):
        rects.append(Rect.xywh(i * 10, 0, 10, 10))
        rects.append(Rect.xywh(i * 10 + 2, 2, 6, 6))

    remove_redundant_rects(rects)

    assert len(rects) == 10
    for rect in rects:
        assert (rect.width, rect.height) == (10, 10)


def test_remove_redundant_keeps_one_of_identical_rects():
    rects = [Rect.xywh(0, 0, 5, 5), Rect.xywh(0, 0, 5, 5), Rect.xywh(5, 0, 5, 5)]
    remove_redundant_rects(rects)
    assert sorted(rects) == [Rect.xywh(0, 0, 5, 5), Rect.xywh(5, 0, 5, 5)]


def test_remove_redundant_keeps_overlapping_rects():
    rects = [Rect.xywh(0, 0, 10, 5), Rect.xywh(0, 0, 5, 10)]
    remove_redundant_rects(rects)
    assert len(rects) == 2


def test_pack_regular_single_column():
    options = MaxRectsOptions(100, 100)
    result = MaxRectsPacker.pack(squares(10, 10), options)

    assert len(result) == 1
    # all in one column, shrunk to fit
    assert result[0].dimensions == (10, 100)
    assert sorted(a.position for a in result[0].anchors) == [(0, y) for y in range(0, 100, 10)]


def test_pack_regular_with_taller_sprite():
    sprites = squares(10, 10) + [SpriteData(10, (10, 20))]
    result = MaxRectsPacker.pack(sprites, MaxRectsOptions(100, 100))

    assert len(result) == 1
    assert result[0].dimensions == (30, 100)


def test_pack_oversized():
    sprites = squares(1000, 100)
    result = MaxRectsPacker.pack(sprites, MaxRectsOptions(50, 50))

    assert len(result) == len(sprites)
    for sheet in result:
        assert sheet.dimensions == (100, 100)
        assert len(sheet.anchors) == 1


def test_oversized_sheets_come_last_in_input_order():
    sprites = [
        SpriteData(0, (60, 10)),
        SpriteData(1, (10, 10)),
        SpriteData(2, (10, 70)),
        SpriteData(3, (20, 20)),
    ]
    result = MaxRectsPacker.pack(sprites, MaxRectsOptions(50, 50))

    assert len(result) == 3
    assert sorted(a.id for a in result[0].anchors) == [1, 3]
    assert [a.id for a in result[1].anchors] == [0]
    assert result[1].dimensions == (60, 10)
    assert [a.id for a in result[2].anchors] == [2]
    assert result[2].dimensions == (10, 70)
    assert result[2].anchors[0].position == (0, 0)


def test_sprite_exactly_preferred_size_is_not_oversized():
    result = MaxRectsPacker.pack([SpriteData(0, (50, 50))], MaxRectsOptions(50, 50))
    assert len(result) == 1
    assert result[0].dimensions == (50, 50)


def test_overflow_opens_new_sheets():
    result = MaxRectsPacker.pack(squares(5, 60), MaxRectsOptions(100, 100))

    assert len(result) == 5
    for sheet in result:
        assert sheet.dimensions == (60, 60)
        assert sheet.anchors[0].position == (0, 0)


def test_empty_input_gives_no_sheets():
    assert MaxRectsPacker.pack([], MaxRectsOptions()) == []


def test_default_options():
    options = MaxRectsPacker.default_options()
    assert (options.preferred_width, options.preferred_height) == (4096, 4096)


def test_options_reject_non_positive_size():
    with pytest.raises(ConfigurationError):
        MaxRectsOptions(0, 100)


def test_score_rect_uses_short_side_fit():
    bin_ = MaxRectsBin(100, 100)
    bin_.free = [Rect.xywh(0, 0, 30, 12), Rect.xywh(50, 50, 11, 40)]

    score = bin_.score_rect(10, 10)

    # 11×40 leaves 1 horizontally, 30×12 leaves 2 vertically
    assert score.placement == Rect.xywh(50, 50, 10, 10)
    assert (score.primary, score.secondary) == (1, 30)


def test_score_rect_breaks_ties_on_long_side():
    bin_ = MaxRectsBin(100, 100)
    bin_.free = [Rect.xywh(0, 0, 12, 40), Rect.xywh(50, 0, 12, 20)]

    score = bin_.score_rect(10, 10)

    assert score.placement.min_x == 50
    assert (score.primary, score.secondary) == (2, 10)


def test_score_rect_without_fit():
    bin_ = MaxRectsBin(20, 20)
    assert bin_.score_rect(21, 5) is None


def test_place_rect_splits_free_space():
    bin_ = MaxRectsBin(100, 100)
    bin_.place_rect(Rect.xywh(0, 0, 10, 20), 0)

    assert bin_.free == [Rect(0, 20, 100, 100), Rect(10, 0, 100, 100)]
    assert bin_.used == [(Rect(0, 0, 10, 20), 0)]


def test_place_rect_in_the_middle_splits_four_ways():
    bin_ = MaxRectsBin(30, 30)
    bin_.place_rect(Rect.xywh(10, 10, 10, 10), 0)

    assert sorted(bin_.free) == sorted([
        Rect(0, 0, 30, 10),
        Rect(0, 20, 30, 30),
        Rect(0, 0, 10, 30),
        Rect(20, 0, 30, 30),
    ])


def test_insert_sprites_returns_what_does_not_fit():
    bin_ = MaxRectsBin(20, 20)
    rest = bin_.insert_sprites([SpriteData(0, (20, 15)), SpriteData(1, (20, 10)), SpriteData(2, (20, 5))])

    assert [s.id for s in rest] == [1]
    assert sorted(sprite_id for _, sprite_id in bin_.used) == [0, 2]


def test_oversized_bin_has_no_free_space():
    bin_ = MaxRectsBin.for_oversized(SpriteData(7, (300, 20)))
    assert bin_.oversized
    assert bin_.free == []
    result = bin_.to_result()
    assert result.dimensions == (300, 20)
    assert result.anchors[0].id == 7


@pytest.mark.parametrize("seed", range(5))
def test_free_rects_stay_inside_bin_and_off_used_space(seed):
    bin_ = MaxRectsBin(64, 64)
    bin_.insert_sprites(random_sprite_data(40, 16, seed))
    area = Rect(0, 0, bin_.bin_width, bin_.bin_height)

    for free_rect in bin_.free:
        assert area.contains(free_rect)
        for used_rect, _ in bin_.used:
            assert free_rect.no_intersection(used_rect)


@pytest.mark.parametrize("seed", range(5))
def test_random_sprites_are_each_placed_once_without_overlap(seed):
    sprites = random_sprite_data(60, 40, seed)
    # A few sprites over the preferred size as well
    sprites += [SpriteData(60, (130, 5)), SpriteData(61, (5, 200))]
    options = MaxRectsOptions(128, 128)

    result = MaxRectsPacker.pack(sprites, options)

    ids = [a.id for sheet in result for a in sheet.anchors]
    assert sorted(ids) == list(range(len(sprites)))
    for sheet in result:
        assert_no_overlap(sheet.anchors)
        assert_tight(sheet.dimensions, sheet.anchors)
        for anchor in sheet.anchors:
            assert anchor.dimensions == sprites[anchor.id].dimensions
    for sheet in result[:-2]:
        assert sheet.dimensions[0] <= 128 and sheet.dimensions[1] <= 128
    assert [sheet.anchors[0].id for sheet in result[-2:]] == [60, 61]
