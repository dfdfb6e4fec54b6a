import pytest

from spritepacker import ConfigurationError, MaxRectsPacker, SimplePacker
from spritepacker.config import FormatKind, PackConfig, PackerKind, env_int, parse_key_values
from spritepacker.packer import get_packer


def test_defaults():
    config = PackConfig.from_env(environ={})
    assert config.packer is PackerKind.MAXRECTS
    assert config.format is FormatKind.LIST
    assert (config.max_width, config.max_height) == (4096, 4096)
    assert (config.stride, config.alpha_channel_index) == (4, 3)
    assert not config.trim


def test_environment_overrides_sizes():
    config = PackConfig.from_env(environ={"SPRITEPACKER_MAX_WIDTH": "1024", "SPRITEPACKER_MAX_HEIGHT": " 512 "})
    assert (config.max_width, config.max_height) == (1024, 512)


def test_bad_environment_value():
    with pytest.raises(ConfigurationError):
        env_int("SPRITEPACKER_MAX_WIDTH", 4096, {"SPRITEPACKER_MAX_WIDTH": "wide"})
    assert env_int("SPRITEPACKER_MAX_WIDTH", 4096, {"SPRITEPACKER_MAX_WIDTH": ""}) == 4096


def test_overrides_must_be_known():
    assert PackConfig.from_env(environ={}, trim=True).trim
    with pytest.raises(ConfigurationError):
        PackConfig.from_env(environ={}, padding=2)


def test_packer_options():
    config = PackConfig()
    config.apply_packer_options(["max_width=256", "max_height = 128"])
    assert (config.max_width, config.max_height) == (256, 128)

    for bad in (["max_width"], ["max_width=-1"], ["rotate=1"], ["=3"]):
        with pytest.raises(ConfigurationError):
            config.apply_packer_options(bad)


def test_parse_key_values():
    assert parse_key_values(None) == {}
    assert parse_key_values(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}


def test_validate():
    PackConfig().validate()
    with pytest.raises(ConfigurationError):
        PackConfig(alpha_channel_index=4).validate()
    with pytest.raises(ConfigurationError):
        PackConfig(stride=0).validate()


def test_packer_kinds():
    assert PackerKind.parse("Simple") is PackerKind.SIMPLE
    assert get_packer("simple") is SimplePacker
    assert get_packer(PackerKind.MAXRECTS) is MaxRectsPacker
    with pytest.raises(ConfigurationError):
        PackerKind.parse("guillotine")
    with pytest.raises(ConfigurationError):
        get_packer(object())
