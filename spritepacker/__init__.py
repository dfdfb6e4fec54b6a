"""
spritepacker package.

Purpose:
  Pack rectangular sprites into as few sprite sheets as possible and record
  where each sprite ended up. See cli.py for the command line.

Public API:
  pack     : dedupe, pack and draw raw sprite buffers into SpriteSheets.
  trim     : crop fully transparent borders before packing.
  encode   : turn a sheet's anchors into metadata through a Format.
  SimplePacker, MaxRectsPacker : the packing strategies.
  ListFormat, NamedFormat      : the metadata formats.

Quick start:
  from spritepacker import InputSprite, MaxRectsOptions, MaxRectsPacker, pack
  sheets = pack(sprites, 4, MaxRectsOptions(2048, 2048), packer=MaxRectsPacker)
"""

__version__ = "0.4.0"

from .errors import (  # noqa: E402
    ConfigurationError,
    EmptyResultError,
    GeometryInvariantViolation,
    SpritePackerError,
)
from .formats import Format, FormatOptions, ListFormat, NamedFormat  # noqa: E402
from .maxrects import MaxRectsOptions, MaxRectsPacker  # noqa: E402
from .packer import Packer  # noqa: E402
from .pipeline import encode, pack, require_sheets, trim, trim_with_offsets  # noqa: E402
from .simple import SimplePacker  # noqa: E402
from .sprite import (  # noqa: E402
    InputSprite,
    PackerResult,
    Sprite,
    SpriteAnchor,
    SpriteData,
    SpriteSheet,
)
from .trim import TrimInfo  # noqa: E402

__all__ = [
    "__version__",
    "pack",
    "trim",
    "trim_with_offsets",
    "encode",
    "require_sheets",
    "InputSprite",
    "Sprite",
    "SpriteData",
    "SpriteAnchor",
    "PackerResult",
    "SpriteSheet",
    "TrimInfo",
    "Packer",
    "SimplePacker",
    "MaxRectsPacker",
    "MaxRectsOptions",
    "Format",
    "FormatOptions",
    "ListFormat",
    "NamedFormat",
    "SpritePackerError",
    "ConfigurationError",
    "GeometryInvariantViolation",
    "EmptyResultError",
]
