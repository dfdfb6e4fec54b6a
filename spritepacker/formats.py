"""
Metadata formats: turn a sheet's size and anchors into a JSON-ready dict.

The packing engine never looks at what a format produces. Formats receive the
sheet dimensions, its anchors and their own options, nothing else.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Type, Union

from .config import FormatKind
from .errors import ConfigurationError
from .sprite import Dimensions, SpriteAnchor


@dataclass
class FormatOptions:
    # Sprite name per sprite id, required by the named format
    names: Optional[Sequence[str]] = None
    # Trim offsets per sprite id; sprites without an entry get null offsets
    offsets: Optional[Mapping[int, Tuple[int, int]]] = None


class Format(Protocol):
    name: str

    @classmethod
    def encode(cls, dimensions: Dimensions, anchors: Sequence[SpriteAnchor],
               options: Optional[FormatOptions] = None) -> Dict[str, Any]:
        ...


def sprite_position(anchor: SpriteAnchor, options: FormatOptions) -> Dict[str, Any]:
    offsets = None
    if options.offsets is not None and anchor.id in options.offsets:
        offsets = list(options.offsets[anchor.id])
    return {
        "x": anchor.position[0],
        "y": anchor.position[1],
        "width": anchor.dimensions[0],
        "height": anchor.dimensions[1],
        "offsets": offsets,
    }


class ListFormat:
    """Anonymous sprite list, in anchor order."""

    name = "list"

    @classmethod
    def encode(cls, dimensions: Dimensions, anchors: Sequence[SpriteAnchor],
               options: Optional[FormatOptions] = None) -> Dict[str, Any]:
        options = options or FormatOptions()
        return {
            "texture_width": dimensions[0],
            "texture_height": dimensions[1],
            "sprites": [sprite_position(anchor, options) for anchor in anchors],
        }


class NamedFormat:
    """Sprite list where every entry carries the name of its source sprite."""

    name = "named"

    @classmethod
    def encode(cls, dimensions: Dimensions, anchors: Sequence[SpriteAnchor],
               options: Optional[FormatOptions] = None) -> Dict[str, Any]:
        if options is None or options.names is None:
            raise ConfigurationError("The named format needs a name for every sprite")

        sprites: List[Dict[str, Any]] = []
        for anchor in anchors:
            if not 0 <= anchor.id < len(options.names):
                raise ConfigurationError(f"No name given for sprite {anchor.id}")
            entry = {"name": options.names[anchor.id]}
            entry.update(sprite_position(anchor, options))
            sprites.append(entry)

        return {
            "texture_width": dimensions[0],
            "texture_height": dimensions[1],
            "sprites": sprites,
        }


FORMATS: Dict[FormatKind, Type[Format]] = {
    FormatKind.LIST: ListFormat,
    FormatKind.NAMED: NamedFormat,
}


def get_format(fmt: Union[str, FormatKind, Type[Format]]) -> Type[Format]:
    """Resolve a format name, kind or class to a format class."""
    if isinstance(fmt, str):
        fmt = FormatKind.parse(fmt)
    if isinstance(fmt, FormatKind):
        return FORMATS[fmt]
    if callable(getattr(fmt, "encode", None)):
        return fmt
    raise ConfigurationError(f"{fmt!r} is not a format")
