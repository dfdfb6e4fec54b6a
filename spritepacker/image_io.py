"""Pillow glue between image files on disk and raw pixel buffers."""

import os
from typing import List, Sequence

from PIL import Image

from .sprite import InputSprite, SpriteSheet

# Pillow mode for each supported bytes-per-pixel value
MODES_BY_STRIDE = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}

SUPPORTED_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tga', '.webp')


def collect_inputs(paths: Sequence[str]) -> List[str]:
    """Expand directories to the image files directly inside them, sorted by name."""
    files = []
    for path in paths:
        if os.path.isdir(path):
            for name in sorted(os.listdir(path)):
                full_path = os.path.join(path, name)
                if os.path.isfile(full_path) and name.lower().endswith(SUPPORTED_EXTENSIONS):
                    files.append(full_path)
        else:
            files.append(path)
    return files


def load_sprite(path: str) -> InputSprite:
    """Load an image file and decode it to tightly packed RGBA8."""
    with Image.open(path) as img:
        rgba = img.convert('RGBA') if img.mode != 'RGBA' else img.copy()
    return InputSprite(rgba.tobytes(), rgba.size)


def load_sprites(paths: Sequence[str]) -> List[InputSprite]:
    return [load_sprite(path) for path in paths]


def sprite_names(paths: Sequence[str]) -> List[str]:
    """File names without directory or extension, used as sprite names."""
    return [os.path.splitext(os.path.basename(path))[0] for path in paths]


def sheet_to_image(sheet: SpriteSheet) -> Image.Image:
    try:
        mode = MODES_BY_STRIDE[sheet.stride]
    except KeyError:
        raise ValueError(f"No image mode for {sheet.stride} bytes per pixel") from None
    return Image.frombytes(mode, sheet.dimensions, bytes(sheet.bytes))


def save_sheet(sheet: SpriteSheet, path: str) -> None:
    sheet_to_image(sheet).save(path)
