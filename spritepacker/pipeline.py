"""
Public packing operations.

pack() runs deduplication, the chosen packer and the compositor, then gives
every duplicate sprite a copy of its representative's anchor. trim() is a
separate preprocessing step callers run first if they want borders removed.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from .compositor import composite
from .config import FormatKind, PackerKind
from .dedup import deduplicate, expand_aliases
from .errors import EmptyResultError, GeometryInvariantViolation
from .formats import Format, FormatOptions, get_format
from .log import debug_log
from .maxrects import MaxRectsPacker
from .packer import Packer, get_packer
from .sprite import InputSprite, PackerResult, Sprite, SpriteData, SpriteSheet
from .trim import TrimInfo, trim_sprite


def _check_inputs(inputs: Sequence[InputSprite], stride: int) -> None:
    if stride <= 0:
        raise ValueError(f"stride must be positive, got {stride}")
    for sprite_id, sprite in enumerate(inputs):
        expected = sprite.expected_length(stride)
        if len(sprite.bytes) != expected:
            raise ValueError(
                f"Sprite {sprite_id} is {sprite.dimensions[0]}×{sprite.dimensions[1]} with stride {stride} "
                f"and needs {expected} bytes, got {len(sprite.bytes)}"
            )


def _check_placements(results: List[PackerResult], sprites: Sequence[SpriteData]) -> None:
    """Every sprite handed to the packer must come back exactly once."""
    expected = {sprite.id for sprite in sprites}
    seen: Dict[int, int] = {}
    for sheet_index, result in enumerate(results):
        for anchor in result.anchors:
            if anchor.id in seen:
                raise GeometryInvariantViolation(
                    f"Sprite {anchor.id} was placed on sheet {seen[anchor.id]} and again on sheet {sheet_index}"
                )
            seen[anchor.id] = sheet_index
    missing = expected.difference(seen)
    if missing:
        raise GeometryInvariantViolation(f"Packer left sprites unplaced: {sorted(missing)}")
    unknown = set(seen).difference(expected)
    if unknown:
        raise GeometryInvariantViolation(f"Packer placed unknown sprites: {sorted(unknown)}")


def pack(inputs: Sequence[InputSprite], stride: int, options: Any = None,
         packer: Union[str, PackerKind, Type[Packer]] = MaxRectsPacker) -> List[SpriteSheet]:
    """
    Pack sprites into sheets and draw them.

    Sprite ids are positions in inputs and each sheet lists its anchors by id.
    Sprites with identical pixels are drawn once, but every id receives an
    anchor. options go to the packer unchanged; None means its defaults.
    """
    _check_inputs(inputs, stride)
    packer_cls = get_packer(packer)
    if options is None:
        options = packer_cls.default_options()

    dedup = deduplicate(inputs)
    sprites = [Sprite.from_input(index, sprite) for index, sprite in enumerate(inputs)]
    debug_log(f"Packing {len(dedup.representatives)} unique sprites "
              f"({dedup.duplicate_count} duplicates) with {packer_cls.name}")

    results = packer_cls.pack(dedup.representatives, options)
    _check_placements(results, dedup.representatives)

    sheets = []
    for result in results:
        sheet = composite(result, sprites, stride)
        sheet.anchors = sorted(expand_aliases(sheet.anchors, dedup.aliases), key=lambda anchor: anchor.id)
        debug_log(f"Sheet {len(sheets)}: {sheet.width}×{sheet.height} with {len(sheet.anchors)} sprites")
        sheets.append(sheet)
    return sheets


def require_sheets(sheets: List[SpriteSheet]) -> List[SpriteSheet]:
    """Pass sheets through, failing if there is nothing to draw (for example after trimming everything away)."""
    if not sheets:
        raise EmptyResultError("No output was produced")
    if all(sheet.width * sheet.height == 0 for sheet in sheets):
        raise EmptyResultError("All sheets are empty, every sprite was fully transparent or zero-sized")
    return sheets


def trim_with_offsets(inputs: Sequence[InputSprite], stride: int,
                      alpha_channel_index: int) -> List[Tuple[InputSprite, TrimInfo]]:
    if not 0 <= alpha_channel_index < stride:
        raise ValueError(f"alpha channel index {alpha_channel_index} is outside a {stride}-byte pixel")
    _check_inputs(inputs, stride)
    return [trim_sprite(sprite, stride, alpha_channel_index) for sprite in inputs]


def trim(inputs: Sequence[InputSprite], stride: int, alpha_channel_index: int) -> List[InputSprite]:
    """Crop every sprite to the pixels whose alpha byte is non-zero."""
    return [sprite for sprite, _ in trim_with_offsets(inputs, stride, alpha_channel_index)]


def encode(sheet: SpriteSheet, fmt: Union[str, FormatKind, Type[Format]],
           options: Optional[FormatOptions] = None) -> Dict[str, Any]:
    """Hand a sheet's size and anchors to a metadata format."""
    return get_format(fmt).encode(sheet.dimensions, sheet.anchors, options)
