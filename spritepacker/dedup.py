"""
Detect sprites with identical pixels so they are only packed and drawn once.

The first sprite seen with a given content becomes the representative of its
group. Every later copy is an alias that receives the representative's
placement after packing.
"""

import hashlib
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from .sprite import Dimensions, InputSprite, SpriteAnchor, SpriteData


def fingerprint(sprite: InputSprite) -> Tuple[Dimensions, bytes]:
    """Content key of a sprite. Size is part of it so a 2×1 and a 1×2 sprite never alias."""
    return sprite.dimensions, hashlib.blake2b(sprite.bytes, digest_size=16).digest()


@dataclass
class DedupResult:
    # Sprites that go to the packer, with their original ids
    representatives: List[SpriteData] = field(default_factory=list)
    # Representative id -> every id sharing its content, itself first
    aliases: Dict[int, List[int]] = field(default_factory=dict)

    @property
    def duplicate_count(self) -> int:
        return sum(len(ids) - 1 for ids in self.aliases.values())


def deduplicate(inputs: Sequence[InputSprite]) -> DedupResult:
    result = DedupResult()
    seen: Dict[Tuple[Dimensions, bytes], int] = {}

    for sprite_id, sprite in enumerate(inputs):
        key = fingerprint(sprite)
        representative = seen.setdefault(key, sprite_id)
        if representative == sprite_id:
            result.representatives.append(SpriteData(sprite_id, sprite.dimensions))
            result.aliases[sprite_id] = [sprite_id]
        else:
            result.aliases[representative].append(sprite_id)

    return result


def expand_aliases(anchors: Iterable[SpriteAnchor], aliases: Dict[int, List[int]]) -> List[SpriteAnchor]:
    """
    Append one anchor per alias after the placed anchors.

    The placed anchors keep their order; the copies of each group follow in
    the order the placed anchors appear.
    """
    anchors = list(anchors)
    copies = []
    for anchor in anchors:
        copies.extend(anchor.aliased(alias_id) for alias_id in aliases.get(anchor.id, [anchor.id])[1:])
    return anchors + copies
