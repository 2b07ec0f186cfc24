# gruvstyle/effects.py
from __future__ import annotations

"""
Post-effects applied after harmonisation.

All effects work on uint8 [H,W,3] buffers. Most mutate in place and return the
same array; pixelate() returns a new array of the same size. Random effects
take a numpy Generator so a seeded run is reproducible.
"""

from typing import Optional

import numpy as np
from PIL import Image, ImageFilter

from .colour_convert import hsl_to_rgb, rgb_to_hsl
from .constants import (
    GRAIN_RETRO,
    MOSAIC_BLOCK,
    SYNTHWAVE_SATURATION,
    VHS_BLUE_SHIFT,
    VHS_RED_SHIFT,
    VHS_SCANLINE_DARKEN,
    WATERCOLOR_BLUR,
    WATERCOLOR_NOISE,
)
from .core_types import U8Image, assert_u8_image_rgb


def _rng_or_default(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _add_pixel_noise(img: U8Image, amplitude: int, rng: np.random.Generator) -> None:
    """Add one integer in [-amplitude, amplitude) per pixel to all channels."""
    h, w, _ = img.shape
    noise = rng.integers(-amplitude, amplitude, size=(h, w, 1), dtype=np.int16)
    img[...] = np.clip(img.astype(np.int16) + noise, 0, 255).astype(np.uint8)


def add_vhs_effect(
    img: U8Image,
    red_shift: int = VHS_RED_SHIFT,
    blue_shift: int = VHS_BLUE_SHIFT,
    scanline_darken: int = VHS_SCANLINE_DARKEN,
) -> U8Image:
    """
    Chroma shift plus scanlines.
    Red is sampled `red_shift` px to the right, blue `blue_shift` px below;
    pixels without a source keep their own value. Even rows are darkened.
    """
    assert_u8_image_rgb(img)
    h, w, _ = img.shape
    src = img.copy()
    if 0 < red_shift < w:
        img[:, : w - red_shift, 0] = src[:, red_shift:, 0]
    if 0 < blue_shift < h:
        img[: h - blue_shift, :, 2] = src[blue_shift:, :, 2]

    even = img[0::2].astype(np.int16) - int(scanline_darken)
    img[0::2] = np.clip(even, 0, 255).astype(np.uint8)
    return img


def add_film_grain(
    img: U8Image, intensity: int = GRAIN_RETRO, rng: Optional[np.random.Generator] = None
) -> U8Image:
    """Monochrome grain: same offset on R, G and B of each pixel."""
    assert_u8_image_rgb(img)
    if intensity <= 0:
        return img
    _add_pixel_noise(img, int(intensity), _rng_or_default(rng))
    return img


def apply_gradient_overlay(img: U8Image) -> U8Image:
    """Warm top-to-bottom red ramp and the opposite blue ramp, added at half weight."""
    assert_u8_image_rgb(img)
    h = img.shape[0]
    pos = np.arange(h, dtype=np.float32) / float(h)
    red_add = ((pos * 255.0).astype(np.uint8) // 2).astype(np.int16)[:, None]
    blue_add = (((1.0 - pos) * 255.0).astype(np.uint8) // 2).astype(np.int16)[:, None]
    img[..., 0] = np.clip(img[..., 0].astype(np.int16) + red_add, 0, 255).astype(np.uint8)
    img[..., 2] = np.clip(img[..., 2].astype(np.int16) + blue_add, 0, 255).astype(np.uint8)
    return img


def boost_saturation(img: U8Image, factor: float = SYNTHWAVE_SATURATION) -> U8Image:
    """Multiply HSL saturation by `factor`; the result is clamped in RGB."""
    assert_u8_image_rgb(img)
    hsl = rgb_to_hsl(img.astype(np.float32) / 255.0)
    hsl[..., 1] *= float(factor)
    rgb_f = hsl_to_rgb(hsl)
    img[...] = np.clip(np.rint(rgb_f * 255.0), 0, 255).astype(np.uint8)
    return img


def pixelate(img: U8Image, block_size: int = MOSAIC_BLOCK) -> U8Image:
    """
    Nearest-neighbour downscale by `block_size` and back up.
    Returns a new uint8 array with the input's dimensions.
    """
    assert_u8_image_rgb(img)
    if block_size < 1:
        raise ValueError(f"block_size must be >= 1, got {block_size}")
    h, w, _ = img.shape
    small_size = (max(1, w // block_size), max(1, h // block_size))
    pil_img = Image.fromarray(np.ascontiguousarray(img))
    small = pil_img.resize(small_size, Image.Resampling.NEAREST)
    big = small.resize((w, h), Image.Resampling.NEAREST)
    return np.array(big, dtype=np.uint8)


def apply_watercolor_effect(
    img: U8Image,
    radius: float = WATERCOLOR_BLUR,
    noise: int = WATERCOLOR_NOISE,
    rng: Optional[np.random.Generator] = None,
) -> U8Image:
    """Gaussian blur, then per-pixel paper noise."""
    assert_u8_image_rgb(img)
    pil_img = Image.fromarray(np.ascontiguousarray(img))
    blurred = pil_img.filter(ImageFilter.GaussianBlur(radius=radius))
    img[...] = np.array(blurred, dtype=np.uint8)
    if noise > 0:
        _add_pixel_noise(img, int(noise), _rng_or_default(rng))
    return img


__all__ = [
    "add_vhs_effect",
    "add_film_grain",
    "apply_gradient_overlay",
    "boost_saturation",
    "pixelate",
    "apply_watercolor_effect",
]
