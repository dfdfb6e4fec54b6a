"""
Defaults and user-facing configuration.

Sizes can be overridden through the environment, which is handy when the
packer runs inside a build script that does not expose every flag:

  SPRITEPACKER_MAX_WIDTH   preferred sheet width for maxrects (default 4096)
  SPRITEPACKER_MAX_HEIGHT  preferred sheet height for maxrects (default 4096)
"""

import enum
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from .errors import ConfigurationError

DEFAULT_MAX_WIDTH = 4096
DEFAULT_MAX_HEIGHT = 4096

# All current callers decode to RGBA8
RGBA_STRIDE = 4
RGBA_ALPHA_INDEX = 3

ENV_MAX_WIDTH = "SPRITEPACKER_MAX_WIDTH"
ENV_MAX_HEIGHT = "SPRITEPACKER_MAX_HEIGHT"


class PackerKind(enum.Enum):
    """Enum for packing algorithms."""
    SIMPLE = "simple"      # Greedy corner heuristic, always one sheet
    MAXRECTS = "maxrects"  # Maximal rectangles, best short side fit, multi-sheet

    @classmethod
    def parse(cls, name: str) -> 'PackerKind':
        try:
            return cls(name.lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown packer '{name}', expected one of: {', '.join(choices(cls))}"
            ) from None


class FormatKind(enum.Enum):
    """Enum for metadata formats."""
    LIST = "list"    # Anonymous sprite list, addressed by index
    NAMED = "named"  # Sprite list carrying a name per sprite

    @classmethod
    def parse(cls, name: str) -> 'FormatKind':
        try:
            return cls(name.lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown format '{name}', expected one of: {', '.join(choices(cls))}"
            ) from None


DEFAULT_PACKER = PackerKind.MAXRECTS
DEFAULT_FORMAT = FormatKind.LIST


def choices(kind: Iterable[enum.Enum]):
    """String values of an enum, for argparse and error messages."""
    return [member.value for member in kind]


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def env_int(name: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    """Read a positive integer from the environment, falling back to default when unset."""
    environ = os.environ if environ is None else environ
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return _positive_int(name, raw.strip())


def parse_key_values(pairs: Optional[Iterable[str]]) -> Dict[str, str]:
    """Parse 'key=value' strings as given on the command line."""
    options: Dict[str, str] = {}
    for pair in pairs or ():
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"Packer option '{pair}' is not of the form key=value")
        options[key] = value.strip()
    return options


@dataclass
class PackConfig:
    """Everything a caller chooses before a packing run."""
    packer: PackerKind = DEFAULT_PACKER
    format: FormatKind = DEFAULT_FORMAT
    max_width: int = DEFAULT_MAX_WIDTH
    max_height: int = DEFAULT_MAX_HEIGHT
    trim: bool = False
    stride: int = RGBA_STRIDE
    alpha_channel_index: int = RGBA_ALPHA_INDEX
    pretty: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'PackConfig':
        """Defaults with sizes taken from the environment, then explicit overrides on top."""
        config = cls(
            max_width=env_int(ENV_MAX_WIDTH, DEFAULT_MAX_WIDTH, environ),
            max_height=env_int(ENV_MAX_HEIGHT, DEFAULT_MAX_HEIGHT, environ),
        )
        for key, value in overrides.items():
            if not hasattr(config, key):
                raise ConfigurationError(f"Unknown configuration key '{key}'")
            setattr(config, key, value)
        return config

    def apply_packer_options(self, pairs: Optional[Iterable[str]]) -> None:
        """Apply 'max_width=N' / 'max_height=N' style packer options."""
        for key, value in parse_key_values(pairs).items():
            if key == "max_width":
                self.max_width = _positive_int(key, value)
            elif key == "max_height":
                self.max_height = _positive_int(key, value)
            else:
                raise ConfigurationError(f"Unknown packer option '{key}'")

    def validate(self) -> None:
        if self.stride <= 0:
            raise ConfigurationError(f"stride must be positive, got {self.stride}")
        if not 0 <= self.alpha_channel_index < self.stride:
            raise ConfigurationError(
                f"alpha channel index {self.alpha_channel_index} is outside a {self.stride}-byte pixel"
            )
