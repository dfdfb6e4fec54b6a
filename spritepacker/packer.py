"""
The contract shared by all packing strategies.

A packer is any class with a `name`, a `default_options()` and a
`pack(sprites, options)` returning one PackerResult per sheet. The pipeline
only talks to this contract, so adding a strategy means registering it here.
"""

from typing import Any, Dict, List, Protocol, Sequence, Type, Union

from .config import PackerKind
from .errors import ConfigurationError
from .maxrects import MaxRectsPacker
from .simple import SimplePacker
from .sprite import PackerResult, SpriteData


class Packer(Protocol):
    name: str

    @staticmethod
    def default_options() -> Any:
        ...

    @classmethod
    def pack(cls, sprites: Sequence[SpriteData], options: Any = None) -> List[PackerResult]:
        ...


PACKERS: Dict[PackerKind, Type[Packer]] = {
    PackerKind.SIMPLE: SimplePacker,
    PackerKind.MAXRECTS: MaxRectsPacker,
}


def get_packer(packer: Union[str, PackerKind, Type[Packer]]) -> Type[Packer]:
    """Resolve a packer name, kind or class to a packer class."""
    if isinstance(packer, str):
        packer = PackerKind.parse(packer)
    if isinstance(packer, PackerKind):
        return PACKERS[packer]
    if callable(getattr(packer, "pack", None)):
        return packer
    raise ConfigurationError(f"{packer!r} is not a packer")
