# gruvstyle/pipeline.py
from __future__ import annotations

"""
Palette harmonisation.

Pulls every pixel's chroma toward its nearest palette entry while keeping its
lightness almost untouched, then undoes the Lab round-trip's dulling with a
small contrast boost.

Exports:
  harmonize_lab(lab, strength, edge_mask=None, ...) -> Lab
  harmonize(img_rgb, strength, edge_mask=None, ...) -> None   # in place
  compute_edge_mask(img_rgb, diameter=5, sigma_color=25.0, sigma_space=2.0) -> U8Mask

Notes:
  Pixels are independent. With workers > 1 the buffer is split into disjoint
  row spans on a ThreadPoolExecutor; output does not depend on the split.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import cv2
import numpy as np

from .blend import apply_edge_lightness, blend_lab, clamp_strength, contrast_compensate
from .colour_convert import lab_to_rgb_float, rgb_to_lab
from .constants import (
    CHUNK_PIXELS,
    CONTRAST_BOOST,
    DEFAULT_METHOD,
    DEFAULT_METRIC,
    EDGE_GRUVBOX,
)
from .core_types import (
    Lab,
    Palette,
    U8Image,
    U8Mask,
    assert_u8_image_rgb,
    assert_u8_mask_2d,
)
from .matcher import nearest_indices
from .palette_data import default_palette
from .utils import debug_log, split_rows_into_parts

# Below this many rows a single thread is faster than the pool overhead.
_MIN_ROWS_FOR_THREADS = 64


def harmonize_lab(
    lab: Lab,
    strength: float,
    edge_mask: Optional[U8Mask] = None,
    *,
    palette: Optional[Palette] = None,
    method: str = DEFAULT_METHOD,
    metric: str = DEFAULT_METRIC,
    quantize: bool = False,
) -> Lab:
    """
    Harmonise a Lab array against the palette.

    Args:
      lab: Lab [...,3]
      strength: clamped into the method's range (sigmoid 0..1, overshoot 0..2)
      edge_mask: optional uint8 mask with lab.shape[:-1]; high values keep
        the harmonised lightness, low values keep the original
    Returns:
      float32 Lab, same shape as `lab`
    """
    if edge_mask is not None:
        if not isinstance(edge_mask, np.ndarray) or edge_mask.dtype != np.uint8:
            raise TypeError("expected uint8 edge mask")
        if edge_mask.shape != np.shape(lab)[:-1]:
            raise ValueError(
                f"edge mask shape {edge_mask.shape} does not match image {np.shape(lab)[:-1]}"
            )
    pal = palette if palette is not None else default_palette()
    s = clamp_strength(strength, method)

    flat = np.asarray(lab, dtype=np.float32).reshape(-1, 3)
    idx = nearest_indices(flat, pal.lab, metric=metric, quantize=quantize)
    target = pal.lab[idx]
    out = blend_lab(flat, target, s, method)

    if edge_mask is not None:
        out[:, 0] = apply_edge_lightness(flat[:, 0], out[:, 0], edge_mask.reshape(-1))

    return out.reshape(np.shape(lab))


def _harmonize_rows(
    img_rgb: U8Image,
    start: int,
    end: int,
    strength: float,
    edge_mask: Optional[U8Mask],
    palette: Palette,
    method: str,
    metric: str,
    quantize: bool,
    contrast_boost: float,
) -> None:
    """Harmonise rows [start, end) and write them back, CHUNK_PIXELS at a time."""
    step = max(1, CHUNK_PIXELS // max(1, int(img_rgb.shape[1])))
    for lo in range(start, end, step):
        hi = min(lo + step, end)
        rows = img_rgb[lo:hi]
        lab = rgb_to_lab(rows)
        mask_rows = edge_mask[lo:hi] if edge_mask is not None else None
        harmonized = harmonize_lab(
            lab,
            strength,
            mask_rows,
            palette=palette,
            method=method,
            metric=metric,
            quantize=quantize,
        )
        rgb_f = contrast_compensate(lab_to_rgb_float(harmonized), contrast_boost)
        rows[...] = np.clip(np.rint(rgb_f * 255.0), 0, 255).astype(np.uint8)


def harmonize(
    img_rgb: U8Image,
    strength: float,
    edge_mask: Optional[U8Mask] = None,
    *,
    palette: Optional[Palette] = None,
    method: str = DEFAULT_METHOD,
    metric: str = DEFAULT_METRIC,
    quantize: bool = False,
    contrast_boost: float = CONTRAST_BOOST,
    workers: int = 1,
    debug: bool = False,
) -> None:
    """
    Harmonise an sRGB buffer toward the palette, in place.

    Per pixel: sRGB -> Lab -> nearest palette entry -> blend -> edge-aware L
    -> sRGB -> contrast boost -> clamp -> write. Dimensions never change.

    Args:
      img_rgb: uint8 [H,W,3], mutated
      strength: sigmoid accepts 0..1, overshoot 0..2; finite values outside
        are clamped, NaN/inf raises ValueError
      edge_mask: optional uint8 [H,W]; mismatched size raises ValueError
      workers: threads over disjoint row spans
    """
    assert_u8_image_rgb(img_rgb)
    if edge_mask is not None:
        assert_u8_mask_2d(edge_mask)
        if edge_mask.shape != img_rgb.shape[:2]:
            raise ValueError(
                f"edge mask shape {edge_mask.shape} does not match image {img_rgb.shape[:2]}"
            )
    pal = palette if palette is not None else default_palette()
    s = clamp_strength(strength, method)

    height = int(img_rgb.shape[0])
    spans = split_rows_into_parts(height, workers)
    if debug:
        debug_log(
            f"harmonize {img_rgb.shape[1]}x{height}  strength={s:g}  method={method}  "
            f"metric={metric}  mask={'on' if edge_mask is not None else 'off'}  spans={len(spans)}"
        )

    args = (s, edge_mask, pal, method, metric, quantize, contrast_boost)
    if workers <= 1 or height < _MIN_ROWS_FOR_THREADS:
        _harmonize_rows(img_rgb, 0, height, *args)
        return

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_harmonize_rows, img_rgb, start, end, *args)
            for start, end in spans
        ]
        for fu in futures:
            fu.result()


def compute_edge_mask(
    img_rgb: U8Image,
    diameter: int = EDGE_GRUVBOX[0],
    sigma_color: float = EDGE_GRUVBOX[1],
    sigma_space: float = EDGE_GRUVBOX[2],
) -> U8Mask:
    """
    Edge-preserving smoothed grey of the image, used as the edge mask.

    Returns:
      uint8 [H,W], same height and width as the input
    """
    assert_u8_image_rgb(img_rgb)
    grey = cv2.cvtColor(np.ascontiguousarray(img_rgb), cv2.COLOR_RGB2GRAY)
    filtered = cv2.bilateralFilter(grey, int(diameter), float(sigma_color), float(sigma_space))
    return filtered.astype(np.uint8, copy=False)


__all__ = ["harmonize_lab", "harmonize", "compute_edge_mask"]
