# gruvstyle/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Mask = NDArray[np.uint8]  # (H, W)
Lab = NDArray[np.float32]  # (..., 3) CIE Lab, D65
Hsl = NDArray[np.float32]  # (..., 3) hue degrees, s, l

# Value objects


@dataclass(frozen=True)
class PaletteItem:
    """Palette entry with its Lab row and the sRGB it renders as."""

    name: str
    lab: Lab  # shape (3,)
    rgb: RGBTuple


@dataclass(frozen=True)
class Palette:
    """Fixed palette. `lab` is a read-only (P,3) float32 matrix."""

    items: Tuple[PaletteItem, ...]
    lab: Lab

    @property
    def names(self) -> List[str]:
        return [it.name for it in self.items]

    def __len__(self) -> int:
        return len(self.items)


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if (
        not isinstance(image, np.ndarray)
        or image.dtype != np.uint8
        or image.ndim != 3
        or image.shape[-1] != 3
    ):
        raise TypeError("expected uint8 (H,W,3) image")
    return image  # type: ignore[return-value]


def assert_u8_mask_2d(mask_array: np.ndarray) -> U8Mask:
    """Validate a uint8 (H,W) mask and return it typed as U8Mask."""
    if (
        not isinstance(mask_array, np.ndarray)
        or mask_array.dtype != np.uint8
        or mask_array.ndim != 2
    ):
        raise TypeError("expected uint8 (H,W) mask")
    return mask_array  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "U8Image",
    "U8Mask",
    "Lab",
    "Hsl",
    # value objects
    "PaletteItem",
    "Palette",
    # helpers
    "clamp_value",
    "assert_u8_image_rgb",
    "assert_u8_mask_2d",
]
