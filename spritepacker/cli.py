import argparse
import json
import os
from typing import List, Optional, Sequence

from . import __version__
from .config import FormatKind, PackConfig, PackerKind, choices
from .errors import ConfigurationError, SpritePackerError
from .formats import FormatOptions
from .image_io import collect_inputs, load_sprites, save_sheet, sprite_names
from .log import error, log, set_verbose, warn
from .maxrects import MaxRectsOptions
from .pipeline import encode, pack, require_sheets, trim_with_offsets
from .sprite import SpriteSheet


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='spritepacker', description='Pack sprite images into sprite sheets')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subcommands = parser.add_subparsers(dest='command', required=True)

    pack_cmd = subcommands.add_parser('pack', help='Packs supplied images into a spritesheet')
    pack_cmd.add_argument('inputs', nargs='+', metavar='INPUT', help='Sprite image files')
    pack_cmd.add_argument('-o', '--out', default='out', help='Output filename without file extension')
    pack_cmd.add_argument('-p', '--packer', default=None, choices=choices(PackerKind),
                          help='Packing algorithm to use (default: maxrects)')
    pack_cmd.add_argument('-f', '--format', default=None, choices=choices(FormatKind),
                          help='Determines the fields present in the metadata (default: list)')
    pack_cmd.add_argument('-s', '--options', nargs='+', default=[], metavar='KEY=VALUE',
                          help='Settings for the packer, e.g. max_width=2048 max_height=1024')
    pack_cmd.add_argument('-t', '--trim', action='store_true', help='Trim transparent sprite sides')
    pack_cmd.add_argument('--pretty', action='store_true', help='Indent the metadata file')
    pack_cmd.add_argument('-v', '--verbose', action='store_true', help='Print packing details')
    return parser


def config_from_args(args: argparse.Namespace) -> PackConfig:
    config = PackConfig.from_env(trim=args.trim, pretty=args.pretty)
    if args.packer is not None:
        config.packer = PackerKind.parse(args.packer)
    if args.format is not None:
        config.format = FormatKind.parse(args.format)
    config.apply_packer_options(args.options)
    config.validate()
    return config


def output_names(out: str, count: int) -> List[str]:
    """'out' for a single sheet, 'out-00', 'out-01', ... for several."""
    if count == 1:
        return [out]
    return [f"{out}-{i:02}" for i in range(count)]


def packing_efficiency(sheets: Sequence[SpriteSheet]) -> float:
    total_pixels = sum(sheet.width * sheet.height for sheet in sheets)
    if total_pixels == 0:
        return 0.0
    sprite_pixels = sum(sheet.efficiency() * sheet.width * sheet.height for sheet in sheets)
    return sprite_pixels / total_pixels * 100


def run_pack(args: argparse.Namespace) -> None:
    config = config_from_args(args)

    paths = collect_inputs(args.inputs)
    if not paths:
        raise ConfigurationError(f"No sprite files found in {', '.join(args.inputs)}")

    log(f"Loading {len(paths)} sprites")
    sprites = load_sprites(paths)

    format_options = FormatOptions(names=sprite_names(paths))
    if config.trim:
        trimmed = trim_with_offsets(sprites, config.stride, config.alpha_channel_index)
        sprites = [sprite for sprite, _ in trimmed]
        format_options.offsets = {i: info.offsets for i, (_, info) in enumerate(trimmed)}

    if config.packer is PackerKind.MAXRECTS:
        options = MaxRectsOptions(config.max_width, config.max_height)
        log(f"Using maxrects packer with preferred size {config.max_width}×{config.max_height}")
    else:
        options = None
        log("Using simple packer")

    sheets = require_sheets(pack(sprites, config.stride, options, packer=config.packer))

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    for i, (sheet, name) in enumerate(zip(sheets, output_names(args.out, len(sheets)))):
        image_path = f"{name}.png"
        meta_path = f"{name}.json"
        log(f"Saving sheet {i + 1}/{len(sheets)}: {image_path} ({sheet.width}×{sheet.height}) "
            f"with {len(sheet.anchors)} sprites")
        if sheet.width * sheet.height:
            save_sheet(sheet, image_path)
        else:
            warn(f"Sheet {i + 1} only holds empty sprites, skipping {image_path}")

        meta = encode(sheet, config.format, format_options)
        with open(meta_path, 'w') as f:
            json.dump(meta, f, indent=2 if config.pretty else None)

    log(f"Final packing efficiency: {packing_efficiency(sheets):.2f}%")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    try:
        if args.command == 'pack':
            run_pack(args)
    except SpritePackerError as e:
        error(str(e))
        return 1
    except OSError as e:
        # Pillow's UnidentifiedImageError is an OSError too
        error(f"Could not read or write an image: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
