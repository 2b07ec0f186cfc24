# gruvstyle/image_io.py
from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageOps

from .core_types import U8Image, assert_u8_image_rgb

"""
Image I/O helpers (RGB in sRGB). Embedded colour profiles are ignored.
"""


def load_image_rgb(path: Path) -> U8Image:
    with Image.open(path) as im0:
        im = ImageOps.exif_transpose(im0).convert("RGB")
    return np.array(im, dtype=np.uint8)


def save_image_rgb(path: Path, rgb: U8Image) -> Path:
    assert_u8_image_rgb(rgb)
    path = Path(path)
    Image.fromarray(np.ascontiguousarray(rgb)).save(path)
    return path


__all__ = ["load_image_rgb", "save_image_rgb"]
